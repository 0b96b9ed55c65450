"""In-process session: cumulative score and missed words across rounds."""

from .interfaces import SessionStore
from .records import VocabularyRecord


class Session(SessionStore):
    """Tracks one player's progress for the lifetime of the process."""

    def __init__(self):
        self.total_score = 0
        self.missed_words: list[VocabularyRecord] = []
        self.rounds_played = 0
        self.last_result = None

    def record_miss(self, record: VocabularyRecord) -> None:
        self.missed_words.append(record)

    @property
    def current_score(self) -> int:
        return self.total_score

    def add_to_score(self, delta: int) -> None:
        self.total_score += delta

    @property
    def review_pool(self) -> list[VocabularyRecord]:
        # Same word missed twice is reviewed once
        seen = set()
        pool = []
        for record in self.missed_words:
            if record not in seen:
                seen.add(record)
                pool.append(record)
        return pool

    def finish_round(self, result) -> None:
        self.rounds_played += 1
        self.last_result = result

    def clear(self) -> None:
        """Start a fresh session."""
        self.total_score = 0
        self.missed_words = []
        self.rounds_played = 0
        self.last_result = None

    def to_dict(self) -> dict:
        return {
            'total_score': self.total_score,
            'rounds_played': self.rounds_played,
            'missed_words': [r.to_dict() for r in self.missed_words],
            'review_count': len(self.review_pool),
            'last_result': self.last_result.to_dict() if self.last_result else None,
        }
