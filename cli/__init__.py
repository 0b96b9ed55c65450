"""Console client for the vocab arcade server."""
