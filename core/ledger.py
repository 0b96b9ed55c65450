"""Score and mistake ledger for one round."""

import logging

from .interfaces import SessionStore
from .records import VocabularyRecord

logger = logging.getLogger(__name__)

CORRECT = 'correct'
WRONG = 'wrong'
MISS = 'miss'


class ScoreLedger:
    """Accumulates point deltas and the records the player got wrong.

    The running total is kept unclamped; the displayed and final scores are
    clamped at zero.
    """

    def __init__(self):
        self.points = 0
        self.missed_or_wrong: list[VocabularyRecord] = []
        self.events: list[tuple[str, int, str]] = []  # (kind, delta, english)
        self.flushed = False

    def _count(self, kind: str) -> int:
        return sum(1 for event in self.events if event[0] == kind)

    @property
    def correct_count(self) -> int:
        return self._count(CORRECT)

    @property
    def wrong_count(self) -> int:
        return self._count(WRONG)

    @property
    def miss_count(self) -> int:
        return self._count(MISS)

    @property
    def display_points(self) -> int:
        return max(0, self.points)

    def record_correct(self, record: VocabularyRecord, reward: int) -> None:
        self.points += reward
        self.events.append((CORRECT, reward, record.english))

    def record_wrong(self, record: VocabularyRecord, penalty: int) -> None:
        self.points -= penalty
        self.missed_or_wrong.append(record)
        self.events.append((WRONG, -penalty, record.english))

    def record_miss(self, record: VocabularyRecord, penalty: int) -> None:
        self.points -= penalty
        self.missed_or_wrong.append(record)
        self.events.append((MISS, -penalty, record.english))

    def flush(self, session: SessionStore | None) -> bool:
        """Hand the final score and mistakes to the session. Runs at most once."""
        if self.flushed:
            return False
        self.flushed = True
        if session is None:
            return True
        session.add_to_score(self.display_points)
        for record in self.missed_or_wrong:
            session.record_miss(record)
        logger.info(f"Ledger flushed: +{self.display_points} points, {len(self.missed_or_wrong)} mistakes")
        return True
