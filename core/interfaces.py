"""Abstract base classes for dependency injection."""

from abc import ABC, abstractmethod


class VocabularySource(ABC):
    """Abstract base class for the vocabulary table."""

    @abstractmethod
    def load(self) -> list:
        """Load all usable records. Returns a list of VocabularyRecord.

        Raises DataLoadFailure when the table is unreachable or unparsable."""
        pass

    @abstractmethod
    def describe(self) -> str:
        """Short human-readable description of where records come from."""
        pass


class SessionStore(ABC):
    """Abstract base class for the cross-round session collaborator."""

    @abstractmethod
    def record_miss(self, record) -> None:
        """Remember a missed or wrongly answered record for review."""
        pass

    @property
    @abstractmethod
    def current_score(self) -> int:
        """Cumulative score across finished rounds."""
        pass

    @abstractmethod
    def add_to_score(self, delta: int) -> None:
        """Add a finished round's score to the cumulative total."""
        pass

    @property
    @abstractmethod
    def review_pool(self) -> list:
        """Records to replay in a review round."""
        pass

    @abstractmethod
    def finish_round(self, result) -> None:
        """Receive a finished round's RoundResult."""
        pass
