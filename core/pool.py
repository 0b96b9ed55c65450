"""Pool filter: narrows the full vocabulary table to a round's candidates."""

import logging
from collections import defaultdict
from functools import lru_cache

from .config import HOMOGRAPH_MIN_GROUP
from .errors import EmptyPool
from .records import SelectionCriteria, SelectionMode, VocabularyRecord

logger = logging.getLogger(__name__)

# Canonical part of speech -> spellings seen in vocabulary tables and menus
PART_OF_SPEECH_SYNONYMS = {
    'noun': ['noun', 'nouns', 'n', 'n.'],
    'verb': ['verb', 'verbs', 'v', 'v.'],
    'adjective': ['adjective', 'adjectives', 'adj', 'adj.'],
    'nounadj': ['nounadj', 'noun/adjective', 'nouns/adjectives', 'noun adj'],
    'adverb': ['adverb', 'adverbs', 'adv', 'adv.'],
    'preposition': ['preposition', 'prepositions', 'prep', 'prep.'],
    'pronoun': ['pronoun', 'pronouns', 'pron', 'pron.'],
    'particle': ['particle', 'particles', 'conjunction', 'conjunctions', 'conj', 'conj.'],
    'proper noun': ['proper noun', 'proper nouns', 'propn', 'proper'],
    'numeral': ['numeral', 'numerals', 'number', 'num'],
    'interjection': ['interjection', 'interjections', 'interj'],
}

_POS_LOOKUP = {
    spelling: canonical
    for canonical, spellings in PART_OF_SPEECH_SYNONYMS.items()
    for spelling in spellings
}

# Menu display label -> canonical topic tag
TOPIC_LABELS = {
    'Body Parts': 'body-parts',
    'Ritual and Religion': 'ritual-religion',
    'Government and Law': 'government-law',
    'Family': 'family',
    'Nature': 'nature',
    'Food and Drink': 'food-drink',
}


@lru_cache(maxsize=256)
def canonical_pos(value: str) -> str:
    """Map a part-of-speech spelling to its canonical tag (case-insensitive)."""
    key = ' '.join((value or '').lower().split())
    return _POS_LOOKUP.get(key, key)


def resolve_topic(value: str) -> str:
    """Resolve a topic display label to its tag; tags pass through unchanged."""
    value = (value or '').strip()
    return TOPIC_LABELS.get(value, value)


def matches(record: VocabularyRecord, criteria: SelectionCriteria) -> bool:
    """Predicate a record must satisfy to join the pool (non-review modes)."""
    if criteria.mode == SelectionMode.RANDOM:
        return criteria.frequency_range.contains(record.frequency)
    if criteria.mode == SelectionMode.BY_TOPIC:
        return (record.topic == resolve_topic(criteria.topic_or_pos)
                and criteria.frequency_range.contains(record.frequency))
    if criteria.mode == SelectionMode.BY_POS:
        return canonical_pos(record.part_of_speech) == canonical_pos(criteria.topic_or_pos)
    return True


def _distinct(records) -> list[VocabularyRecord]:
    seen = set()
    distinct = []
    for record in records:
        if record not in seen:
            seen.add(record)
            distinct.append(record)
    return distinct


def filter_pool(records: list[VocabularyRecord], criteria: SelectionCriteria,
                review_pool: list[VocabularyRecord] | None = None) -> list[VocabularyRecord]:
    """Build the candidate pool for a round.

    Review rounds take the supplied review set as-is. The frequency range is
    only applied in random and theme modes.

    Raises:
        EmptyPool: when nothing matches.
    """
    if criteria.mode == SelectionMode.REVIEW:
        pool = _distinct(review_pool or [])
    elif criteria.mode == SelectionMode.BY_TOPIC:
        topic = resolve_topic(criteria.topic_or_pos)
        pool = _distinct(
            r for r in records
            if r.topic == topic and criteria.frequency_range.contains(r.frequency)
        )
    elif criteria.mode == SelectionMode.BY_POS:
        wanted = canonical_pos(criteria.topic_or_pos)
        pool = _distinct(r for r in records if canonical_pos(r.part_of_speech) == wanted)
    else:
        pool = _distinct(r for r in records if criteria.frequency_range.contains(r.frequency))

    if not pool:
        logger.warning(f"Empty pool for criteria {criteria.to_dict()}")
        raise EmptyPool(criteria=criteria)
    logger.debug(f"Pool of {len(pool)} records for mode={criteria.mode.value}")
    return pool


def homograph_pool(records: list[VocabularyRecord],
                   min_group: int = HOMOGRAPH_MIN_GROUP) -> list[VocabularyRecord]:
    """Keep records whose unvocalized form is shared by `min_group` or more glosses.

    Raises:
        EmptyPool: when no unvocalized form has enough distinct meanings.
    """
    glosses = defaultdict(set)
    for record in records:
        if record.unvocalized:
            glosses[record.unvocalized].add(record.english.strip())
    pool = [r for r in records if r.unvocalized and len(glosses[r.unvocalized]) >= min_group]
    if not pool:
        logger.warning(f"No homograph groups among {len(records)} records")
        raise EmptyPool("No homographs match the selected criteria")
    logger.debug(f"Homograph pool of {len(pool)} records in "
                 f"{len({r.unvocalized for r in pool})} groups")
    return pool


def list_topics(records: list[VocabularyRecord]) -> list[str]:
    """Distinct topic tags present in the table."""
    return sorted({r.topic for r in records if r.topic})


def list_parts_of_speech(records: list[VocabularyRecord]) -> list[str]:
    """Distinct canonical parts of speech present in the table."""
    return sorted({canonical_pos(r.part_of_speech) for r in records if r.part_of_speech})
