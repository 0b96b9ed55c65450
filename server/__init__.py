"""HTTP API hosting live rounds."""
