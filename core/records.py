"""Vocabulary records and round selection criteria."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .config import DEFAULT_FREQUENCY_MIN, DEFAULT_FREQUENCY_MAX
from .errors import ConfigurationError
from .utils import clean_text, parse_frequency


class SelectionMode(str, Enum):
    RANDOM = 'random'
    BY_TOPIC = 'theme'
    BY_POS = 'pos'
    REVIEW = 'review'


class DisplayForm(str, Enum):
    VOCALIZED = 'vocalized'
    UNVOCALIZED = 'unvocalized'


# Canonical column name -> accepted header spellings (compared lowercased)
COLUMN_ALIASES = {
    'english': ['english', 'gloss', 'english gloss'],
    'vocalized': ['vocalizedform', 'vocalized form', 'vocalized syriac', 'vocalized', 'syriac'],
    'unvocalized': ['unvocalizedform', 'unvocalized form', 'non vocalized syriac',
                    'unvocalized syriac', 'unvocalized'],
    'part_of_speech': ['partofspeech', 'part of speech', 'grammatical category', 'pos'],
    'topic': ['topiccategory', 'topic category', 'vocabulary category', 'topic', 'theme'],
    'frequency': ['frequency', 'frequency rank', 'rank'],
}

REQUIRED_COLUMNS = ['english', 'vocalized', 'unvocalized', 'part_of_speech', 'topic', 'frequency']


@dataclass(frozen=True)
class VocabularyRecord:
    """One dictionary entry. Immutable once loaded."""
    english: str
    vocalized: str = ''
    unvocalized: str = ''
    part_of_speech: str = ''
    topic: str = ''
    frequency: int | None = None

    def display_text(self, form: DisplayForm = DisplayForm.VOCALIZED) -> str:
        """Script text in the requested form, falling back to the other form."""
        if form == DisplayForm.UNVOCALIZED:
            return self.unvocalized or self.vocalized
        return self.vocalized or self.unvocalized

    def to_dict(self) -> dict:
        return {
            'english': self.english,
            'vocalized': self.vocalized,
            'unvocalized': self.unvocalized,
            'part_of_speech': self.part_of_speech,
            'topic': self.topic,
            'frequency': self.frequency,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'VocabularyRecord':
        return cls(
            english=data['english'],
            vocalized=data.get('vocalized', ''),
            unvocalized=data.get('unvocalized', ''),
            part_of_speech=data.get('part_of_speech', ''),
            topic=data.get('topic', ''),
            frequency=data.get('frequency'),
        )


def record_from_row(row: dict) -> VocabularyRecord | None:
    """Build a record from a row keyed by canonical column names.

    Returns None for rows without an English gloss or without any script form.
    """
    english = clean_text(row.get('english'))
    vocalized = clean_text(row.get('vocalized'))
    unvocalized = clean_text(row.get('unvocalized'))
    if not english or not (vocalized or unvocalized):
        return None
    return VocabularyRecord(
        english=english,
        vocalized=vocalized,
        unvocalized=unvocalized,
        part_of_speech=clean_text(row.get('part_of_speech')),
        topic=clean_text(row.get('topic')),
        frequency=parse_frequency(row.get('frequency')),
    )


@dataclass(frozen=True)
class FrequencyRange:
    min: int = DEFAULT_FREQUENCY_MIN
    max: int = DEFAULT_FREQUENCY_MAX

    def __post_init__(self):
        if self.min > self.max:
            raise ConfigurationError(f"Frequency range is empty: min {self.min} > max {self.max}")

    def contains(self, rank: int | None) -> bool:
        if rank is None:
            return False
        return self.min <= rank <= self.max


@dataclass(frozen=True)
class SelectionCriteria:
    """Which records a round draws from. Fixed for the round's duration."""
    mode: SelectionMode = SelectionMode.RANDOM
    topic_or_pos: str | None = None
    frequency_range: FrequencyRange = field(default_factory=FrequencyRange)
    display_form: DisplayForm = DisplayForm.VOCALIZED

    def __post_init__(self):
        # Accept raw strings from configuration input
        try:
            object.__setattr__(self, 'mode', SelectionMode(self.mode))
            object.__setattr__(self, 'display_form', DisplayForm(self.display_form))
        except ValueError as e:
            raise ConfigurationError(str(e)) from None
        if self.mode in (SelectionMode.BY_TOPIC, SelectionMode.BY_POS):
            if not self.topic_or_pos or not self.topic_or_pos.strip():
                raise ConfigurationError(f"Selection mode '{self.mode.value}' requires a category")

    @property
    def uses_frequency(self) -> bool:
        return self.mode in (SelectionMode.RANDOM, SelectionMode.BY_TOPIC)

    def to_dict(self) -> dict:
        return {
            'mode': self.mode.value,
            'topic_or_pos': self.topic_or_pos,
            'frequency_min': self.frequency_range.min,
            'frequency_max': self.frequency_range.max,
            'display_form': self.display_form.value,
        }
