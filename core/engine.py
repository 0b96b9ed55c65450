"""Round engine: one controller owning all mutable round state.

Timers and player input never touch round state directly. They post intents
through `dispatch`, tagged with the generation token that was current when
they were scheduled, so a callback that outlives its round is ignored.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from .clock import RoundClock
from .config import ADVANCE_DELAY_TICKS, DEFAULT_ROUND_SECONDS
from .errors import ConfigurationError
from .interfaces import SessionStore
from .ledger import ScoreLedger
from .motion import MotionLoop
from .policies import SPAWN_GRID, SPAWN_TRICKLE, SPAWN_WAVE, get_policy
from .pool import filter_pool, homograph_pool
from .records import DisplayForm, SelectionCriteria, SelectionMode, VocabularyRecord
from .scheduler import DrawScheduler, Question
from .utils import answer_match_rank

logger = logging.getLogger(__name__)

# Intents
MOTION_TICK = 'motion_tick'
CLOCK_TICK = 'clock_tick'
SPAWN_TICK = 'spawn_tick'
SELECT = 'select'
ANSWER = 'answer'

# Selection outcomes
OUTCOME_CORRECT = 'correct'
OUTCOME_WRONG = 'wrong'
OUTCOME_IGNORED = 'ignored'
OUTCOME_STALE = 'stale'
OUTCOME_UNMATCHED = 'unmatched'

# Finish reasons
TIME_UP = 'time_up'
EXHAUSTED = 'exhausted'


@dataclass(frozen=True)
class RoundResult:
    """What a finished round hands back to the session."""
    final_score: int
    raw_points: int
    correct: int
    wrong: int
    missed: int
    questions_drawn: int
    missed_or_wrong: tuple
    reason: str

    @classmethod
    def from_ledger(cls, ledger: ScoreLedger, questions_drawn: int, reason: str) -> RoundResult:
        return cls(
            final_score=ledger.display_points,
            raw_points=ledger.points,
            correct=ledger.correct_count,
            wrong=ledger.wrong_count,
            missed=ledger.miss_count,
            questions_drawn=questions_drawn,
            missed_or_wrong=tuple(ledger.missed_or_wrong),
            reason=reason,
        )

    def to_dict(self) -> dict:
        return {
            'final_score': self.final_score,
            'raw_points': self.raw_points,
            'correct': self.correct,
            'wrong': self.wrong,
            'missed': self.missed,
            'questions_drawn': self.questions_drawn,
            'missed_or_wrong': [r.to_dict() for r in self.missed_or_wrong],
            'reason': self.reason,
        }


class RoundEngine:
    """Parametrized engine shared by every game type; see core.policies."""

    IDLE = 'idle'
    RUNNING = 'running'
    FINISHED = 'finished'
    STOPPED = 'stopped'

    def __init__(self, records: list[VocabularyRecord], criteria: SelectionCriteria,
                 game_type: str = 'balloon', duration: int = DEFAULT_ROUND_SECONDS,
                 question_count: int | None = None, session: SessionStore | None = None,
                 rng: random.Random | None = None, advance_delay_ticks: int = ADVANCE_DELAY_TICKS):
        if duration <= 0:
            raise ConfigurationError("Round duration must be positive")
        if question_count is not None and question_count <= 0:
            raise ConfigurationError("Question count must be positive")
        self.policy = get_policy(game_type)
        self.criteria = criteria
        self.session = session
        review = session.review_pool if session is not None and criteria.mode == SelectionMode.REVIEW else None
        self.pool = filter_pool(records, criteria, review_pool=review)
        if self.policy.homographs:
            self.pool = homograph_pool(self.pool)
        self.duration = duration
        self.question_count = question_count
        self.rng = rng or random.Random()
        self.advance_delay_ticks = advance_delay_ticks
        if self.policy.homographs:
            # Siblings sharing the unvocalized form come first; the prompt
            # must show the vowels that tell them apart
            self.axis = 'unvocalized'
            self.display_form = DisplayForm.VOCALIZED
        else:
            self.axis = 'part_of_speech' if criteria.mode == SelectionMode.BY_POS else 'topic'
            self.display_form = criteria.display_form

        self.generation = 0
        self.state = self.IDLE
        self.scheduler = None
        self.clock = None
        self.motion = None
        self.ledger = None
        self.question: Question | None = None
        self.question_open = False
        self.miss_recorded = False
        self.ticks = 0
        self.message = ''
        self.result: RoundResult | None = None
        self._pending = []        # [(due_tick, generation)] question transitions
        self._spawn_queue = []
        self._finish_listeners = []

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_over(self) -> bool:
        return self.state in (self.FINISHED, self.STOPPED)

    def add_finish_listener(self, callback) -> None:
        """Call `callback(result)` whenever a round finishes."""
        self._finish_listeners.append(callback)

    def start(self) -> int:
        """Start (or restart) the round with fresh state. Returns the new generation."""
        self.generation += 1
        self.scheduler = DrawScheduler(
            self.pool,
            infinite=self.question_count is None,
            question_budget=self.question_count,
            distractor_count=self.policy.distractor_count,
            axis=self.axis,
            display_form=self.display_form,
            rng=self.rng,
        )
        self.scheduler.start()
        self.clock = RoundClock(self.duration)
        self.motion = MotionLoop(rng=self.rng)
        self.ledger = ScoreLedger()
        self.question = None
        self.question_open = False
        self.miss_recorded = False
        self.ticks = 0
        self.message = ''
        self.result = None
        self._pending = []
        self._spawn_queue = []
        self.state = self.RUNNING
        logger.info(f"Round started: game={self.policy.name}, pool={len(self.pool)}, "
                    f"duration={self.duration}s, generation={self.generation}")
        self._next_question()
        return self.generation

    def restart(self) -> int:
        """Discard the current round without flushing and start a new one."""
        if self.state == self.RUNNING:
            logger.info(f"Round restarted (generation {self.generation} discarded)")
        return self.start()

    def stop(self) -> None:
        """Abandon the round (player navigated away). Nothing is flushed."""
        if self.state == self.IDLE:
            return
        self.generation += 1
        self._freeze()
        if self.state == self.RUNNING:
            self.state = self.STOPPED
            logger.info("Round stopped")

    def _freeze(self) -> None:
        self._pending.clear()
        self.question_open = False
        if self.motion:
            self.motion.freeze()
        if self.scheduler:
            self.scheduler.freeze()
        if self.clock:
            self.clock.freeze()

    def _finish(self, reason: str) -> None:
        if self.state != self.RUNNING:
            return
        self._freeze()
        self.state = self.FINISHED
        self.result = RoundResult.from_ledger(self.ledger, self.scheduler.drawn_count, reason)
        self.ledger.flush(self.session)
        if self.session is not None:
            self.session.finish_round(self.result)
        logger.info(f"Round finished ({reason}): score={self.result.final_score}, "
                    f"correct={self.result.correct}, wrong={self.result.wrong}, missed={self.result.missed}")
        for callback in self._finish_listeners:
            callback(self.result)

    # ------------------------------------------------------------------
    # Serialized entry point
    # ------------------------------------------------------------------

    def dispatch(self, intent: str, generation: int | None = None, **payload):
        """Apply one intent to the round state.

        Returns the handler's outcome, or None when the intent was dropped
        because it belongs to an older round or the round is not running.
        """
        if generation is not None and generation != self.generation:
            logger.debug(f"Ignoring stale {intent} from generation {generation} (current {self.generation})")
            return None
        if self.state != self.RUNNING:
            return None
        handlers = {
            MOTION_TICK: self._on_motion_tick,
            CLOCK_TICK: self._on_clock_tick,
            SPAWN_TICK: self._on_spawn_tick,
            SELECT: self._on_select,
            ANSWER: self._on_answer,
        }
        try:
            handler = handlers[intent]
        except KeyError:
            raise ValueError(f"Unknown intent: {intent}") from None
        return handler(**payload)

    def tick_motion(self, generation: int | None = None):
        return self.dispatch(MOTION_TICK, generation)

    def tick_clock(self, generation: int | None = None):
        return self.dispatch(CLOCK_TICK, generation)

    def tick_spawn(self, generation: int | None = None):
        return self.dispatch(SPAWN_TICK, generation)

    def select(self, entity_id: str, question_id: int | None = None):
        return self.dispatch(SELECT, entity_id=entity_id, question_id=question_id)

    def answer(self, text: str, question_id: int | None = None):
        return self.dispatch(ANSWER, text=text, question_id=question_id)

    # ------------------------------------------------------------------
    # Intent handlers
    # ------------------------------------------------------------------

    def _on_motion_tick(self) -> bool:
        self.ticks += 1
        self._run_pending()
        if self.state != self.RUNNING:
            return True
        for entity in self.motion.step():
            if (self.question_open and not self.miss_recorded
                    and self.question.is_correct(entity.label)):
                self.miss_recorded = True
                self.question_open = False
                self.ledger.record_miss(self.question.target, self.policy.miss_penalty)
                self.message = self._feedback("Too slow!", -self.policy.miss_penalty)
                logger.debug(f"Miss on question {self.question.id} at tick {self.ticks}")
                self._schedule_advance()
        return True

    def _on_clock_tick(self) -> bool:
        if self.clock.tick():
            self._finish(TIME_UP)
        return True

    def _on_spawn_tick(self) -> bool:
        if self.question_open and self.policy.spawn_style == SPAWN_TRICKLE:
            self._spawn_from_queue()
        return True

    def _on_select(self, entity_id: str, question_id: int | None = None) -> str:
        if not self.question_open:
            return OUTCOME_IGNORED
        if question_id is not None and question_id != self.question.id:
            logger.debug(f"Selection for question {question_id} arrived after question {self.question.id}")
            return OUTCOME_STALE
        entity = self.motion.remove(entity_id)
        if entity is None:
            return OUTCOME_IGNORED

        if self.question.is_correct(entity.label):
            self.question_open = False
            self.ledger.record_correct(self.question.target, self.policy.correct_reward)
            self.message = self._feedback("Correct!", self.policy.correct_reward)
            self._schedule_advance()
            return OUTCOME_CORRECT

        self.ledger.record_wrong(self.question.target, self.policy.wrong_penalty)
        self.message = self._feedback("Incorrect!", -self.policy.wrong_penalty)
        if self.policy.advance_on_wrong:
            self.question_open = False
            self._schedule_advance()
        return OUTCOME_WRONG

    def _on_answer(self, text: str, question_id: int | None = None) -> str:
        # Closest match wins; on a tie the current correct gloss wins
        best = None
        for entity in self.motion.entities.values():
            rank = answer_match_rank(text, entity.label)
            if rank is None:
                continue
            key = (rank, 0 if self.question.is_correct(entity.label) else 1)
            if best is None or key < best[0]:
                best = (key, entity)
        if best is None:
            return OUTCOME_UNMATCHED
        return self._on_select(best[1].id, question_id)

    # ------------------------------------------------------------------
    # Question transitions and spawning
    # ------------------------------------------------------------------

    @staticmethod
    def _feedback(text: str, delta: int) -> str:
        if delta == 0:
            return text
        return f"{text} {delta:+d}"

    def _schedule_advance(self) -> None:
        if self.advance_delay_ticks <= 0:
            self._next_question()
        else:
            self._pending.append((self.ticks + self.advance_delay_ticks, self.generation))

    def _run_pending(self) -> None:
        due = [p for p in self._pending if p[0] <= self.ticks]
        self._pending = [p for p in self._pending if p[0] > self.ticks]
        for _, generation in due:
            if generation != self.generation or self.state != self.RUNNING:
                continue
            self._next_question()

    def _next_question(self) -> None:
        self.motion.clear()
        self._spawn_queue = []
        question = self.scheduler.draw_next()
        if question is None:
            self._finish(EXHAUSTED)
            return
        self.question = question
        self.question_open = True
        self.miss_recorded = False
        if question.shortfall:
            logger.debug(f"Question {question.id} has {question.shortfall} fewer distractors")

        style = self.policy.spawn_style
        if style == SPAWN_WAVE:
            self.motion.spawn_row(list(question.options), self.policy.speed, wiggle=True)
        elif style == SPAWN_GRID:
            self.motion.spawn_row(list(question.options), (0.0, 0.0), wiggle=False)
        elif style == SPAWN_TRICKLE:
            self._spawn_from_queue()

    def _spawn_from_queue(self) -> None:
        if len(self.motion) >= self.policy.max_on_screen:
            return
        if not self._spawn_queue:
            self._spawn_queue = list(self.question.options)
            self.rng.shuffle(self._spawn_queue)
        label = self._spawn_queue.pop(0)
        self.motion.spawn_one(label, self.policy.speed)

    # ------------------------------------------------------------------
    # Client view
    # ------------------------------------------------------------------

    def snapshot(self) -> dict:
        question = self.question.to_dict() if self.question else None
        return {
            'state': self.state,
            'generation': self.generation,
            'game_type': self.policy.name,
            'criteria': self.criteria.to_dict(),
            'time_remaining': self.clock.remaining if self.clock else self.duration,
            'urgency': self.clock.urgency() if self.clock else 'calm',
            'score': self.ledger.display_points if self.ledger else 0,
            'question': question,
            'question_open': self.question_open,
            'entities': self.motion.to_list() if self.motion and not self.is_over else [],
            'message': self.message,
            'questions_drawn': self.scheduler.drawn_count if self.scheduler else 0,
            'questions_left': self.scheduler.budget_left if self.scheduler else self.question_count,
            'result': self.result.to_dict() if self.result else None,
        }
