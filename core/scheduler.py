"""Draw scheduler: questions drawn from the pool without short-term repeats."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from .config import DISTRACTOR_COUNT
from .distractors import build_options, generate_distractors
from .errors import EmptyPool
from .records import DisplayForm, VocabularyRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Question:
    """One prompt and its candidate answers. Replaced wholesale on each draw."""
    id: int
    target: VocabularyRecord
    distractors: tuple
    options: tuple
    prompt: str
    shortfall: int = 0

    @property
    def correct_gloss(self) -> str:
        return self.target.english.strip()

    def is_correct(self, gloss: str) -> bool:
        return gloss.strip() == self.correct_gloss

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'prompt': self.prompt,
            'options': list(self.options),
        }


class DrawScheduler:
    """Draws targets from a RemainingSet that is refilled or finishes when empty.

    Infinite (time-boxed) rounds refill the RemainingSet from the pool; finite
    rounds stop once the question budget is spent or the set runs dry.
    """

    IDLE = 'idle'
    ACTIVE = 'active'
    FINISHED = 'finished'

    def __init__(self, pool: list[VocabularyRecord], infinite: bool = True,
                 question_budget: int | None = None, distractor_count: int = DISTRACTOR_COUNT,
                 axis: str = 'topic', display_form: DisplayForm = DisplayForm.VOCALIZED,
                 rng: random.Random | None = None):
        if not pool:
            raise EmptyPool("Cannot draw questions from an empty pool")
        self.pool = list(pool)
        self.infinite = infinite
        if infinite:
            self.question_budget = None
        else:
            budget = question_budget if question_budget is not None else len(self.pool)
            self.question_budget = max(1, min(budget, len(self.pool)))
        self.distractor_count = distractor_count
        self.axis = axis
        self.display_form = display_form
        self.rng = rng or random.Random()
        self.state = self.IDLE
        self.remaining = []
        self.drawn_count = 0
        self.refills = 0
        self.frozen = False

    def start(self) -> None:
        self.remaining = list(self.pool)
        self.drawn_count = 0
        self.refills = 0
        self.frozen = False
        self.state = self.ACTIVE

    def freeze(self) -> None:
        """Stop all further draws (round over)."""
        self.frozen = True

    @property
    def budget_left(self) -> int | None:
        if self.question_budget is None:
            return None
        return self.question_budget - self.drawn_count

    def _finish(self) -> None:
        if self.state != self.FINISHED:
            self.state = self.FINISHED
            logger.info(f"Draw scheduler finished after {self.drawn_count} questions")

    def draw_next(self) -> Question | None:
        """Draw the next question, or None when the round has no more questions."""
        if self.frozen or self.state != self.ACTIVE:
            return None
        if self.budget_left is not None and self.budget_left <= 0:
            self._finish()
            return None
        if not self.remaining:
            if not self.infinite:
                self._finish()
                return None
            self.remaining = list(self.pool)
            self.refills += 1
            logger.debug(f"RemainingSet refilled ({self.refills})")

        index = self.rng.randrange(len(self.remaining))
        target = self.remaining.pop(index)
        self.drawn_count += 1

        distractors = generate_distractors(target, self.pool, self.distractor_count,
                                           axis=self.axis, rng=self.rng)
        options = build_options(target.english, distractors, rng=self.rng)
        return Question(
            id=self.drawn_count,
            target=target,
            distractors=tuple(distractors),
            options=tuple(options),
            prompt=target.display_text(self.display_form),
            shortfall=self.distractor_count - len(distractors),
        )
