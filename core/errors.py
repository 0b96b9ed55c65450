"""Error taxonomy for the round engine."""


class VocabGameError(Exception):
    """Base class for all round engine errors."""


class DataLoadFailure(VocabGameError):
    """The vocabulary source could not be read or parsed."""


class ConfigurationError(VocabGameError, ValueError):
    """Round configuration is invalid (missing category, bad range, unknown game)."""


class EmptyPool(ConfigurationError):
    """The selection criteria matched no vocabulary record."""

    def __init__(self, message: str = "No vocabulary matches the selected criteria", criteria=None):
        super().__init__(message)
        self.criteria = criteria
