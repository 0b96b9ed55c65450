"""Distractor generation: plausible wrong answers for a question."""

import logging
import random

from .config import DISTRACTOR_COUNT
from .records import VocabularyRecord

logger = logging.getLogger(__name__)

CATEGORY_AXES = ('topic', 'part_of_speech', 'unvocalized')


def _gloss_key(gloss: str) -> str:
    return gloss.strip()


def generate_distractors(target: VocabularyRecord, pool: list[VocabularyRecord],
                         count: int = DISTRACTOR_COUNT, axis: str = 'topic',
                         rng: random.Random | None = None) -> list[str]:
    """Pick up to `count` distinct wrong glosses for `target`.

    Candidates sharing the target's category on `axis` are drawn first,
    uniformly without replacement; the rest of the pool fills any remaining
    slots. Never returns the target's gloss, duplicates or padding.
    """
    if axis not in CATEGORY_AXES:
        raise ValueError(f"Unknown category axis: {axis}")
    rng = rng or random
    category = getattr(target, axis)
    chosen = []
    used = {_gloss_key(target.english)}

    same = [r for r in pool if category and getattr(r, axis) == category]
    rest = [r for r in pool if not (category and getattr(r, axis) == category)]

    for candidates in (same, rest):
        candidates = list(candidates)
        rng.shuffle(candidates)
        for record in candidates:
            if len(chosen) >= count:
                break
            key = _gloss_key(record.english)
            if not key or key in used:
                continue
            used.add(key)
            chosen.append(record.english.strip())

    if len(chosen) < count:
        logger.debug(f"Distractor shortfall for '{target.english}': {len(chosen)}/{count}")
    return chosen


def build_options(correct_gloss: str, distractors: list[str],
                  rng: random.Random | None = None) -> list[str]:
    """Correct gloss plus distractors in a uniformly random order."""
    options = [correct_gloss.strip()] + list(distractors)
    (rng or random).shuffle(options)
    return options
