"""Built-in Syriac vocabulary used when no vocabulary table is configured."""

import logging

from .interfaces import VocabularySource
from .records import record_from_row

logger = logging.getLogger(__name__)

# (English, vocalized, unvocalized, part of speech, topic, frequency)
SEED_ROWS = [
    # Body parts
    ('head', 'ܪܺܫܳܐ', 'ܪܫܐ', 'Noun', 'body-parts', '212'),
    ('eye', 'ܥܰܝܢܳܐ', 'ܥܝܢܐ', 'Noun', 'body-parts', '301'),
    ('hand', 'ܐܺܝܕܳܐ', 'ܐܝܕܐ', 'Noun', 'body-parts', '95'),
    ('foot', 'ܪܶܓܠܳܐ', 'ܪܓܠܐ', 'Noun', 'body-parts', '640'),
    ('mouth', 'ܦܽܘܡܳܐ', 'ܦܘܡܐ', 'Noun', 'body-parts', '455'),
    ('heart', 'ܠܶܒܳܐ', 'ܠܒܐ', 'Noun', 'body-parts', '188'),
    ('ear', 'ܐܶܕܢܳܐ', 'ܐܕܢܐ', 'Noun', 'body-parts', '1,204'),
    # Ritual and religion
    ('pray', 'ܨܠܳܐ', 'ܨܠܐ', 'Verb', 'ritual-religion', '410'),
    ('be baptized', 'ܥܡܰܕ݂', 'ܥܡܕ', 'Verb', 'ritual-religion', '2,310'),
    ('worship', 'ܣܓ݂ܶܕ݂', 'ܣܓܕ', 'Verb', 'ritual-religion', '870'),
    ('minister', 'ܫܰܡܶܫ', 'ܫܡܫ', 'Verb', 'ritual-religion', '1,550'),
    ('blaspheme', 'ܓܰܕܶܦ', 'ܓܕܦ', 'Verb', 'ritual-religion', '3,120'),
    ('swear', 'ܝܺܡܳܐ', 'ܝܡܐ', 'Verb', 'ritual-religion', '2,045'),
    ('prophesy', 'ܐܶܬ݂ܢܰܒܺܝ', 'ܐܬܢܒܝ', 'Verb', 'ritual-religion', '1,980'),
    ('anoint', 'ܡܫܰܚ', 'ܡܫܚ', 'Verb', 'ritual-religion', '2,760'),
    ('to create', 'ܒ݂ܪܳܐ', 'ܒܪܐ', 'Verb', 'ritual-religion', '640'),
    ('God', 'ܐܰܠܳܗܳܐ', 'ܐܠܗܐ', 'NounAdj', 'ritual-religion', '12'),
    ('Jesus', 'ܝܶܫܽܘܥ', 'ܝܫܘܥ', 'Proper noun', 'ritual-religion', '40'),
    # Government and law
    ('king', 'ܡܰܠܟܳܐ', 'ܡܠܟܐ', 'Noun', 'government-law', '60'),
    ('kingdom', 'ܡܰܠܟ݁ܽܘܬ݂ܳܐ', 'ܡܠܟܘܬܐ', 'Noun', 'government-law', '150'),
    ('law', 'ܢܳܡܽܘܣܳܐ', 'ܢܡܘܣܐ', 'Noun', 'government-law', '380'),
    ('judge', 'ܕ݁ܰܝܳܢܳܐ', 'ܕܝܢܐ', 'Noun', 'government-law', '720'),
    ('city', 'ܡܕ݂ܺܝܢ݇ܬ݂ܳܐ', 'ܡܕܝܢܬܐ', 'Noun', 'government-law', '110'),
    ('to judge', 'ܕ݁ܳܢ', 'ܕܢ', 'Verb', 'government-law', '990'),
    ('judgment', 'ܕ݁ܺܝܢܳܐ', 'ܕܝܢܐ', 'Noun', 'government-law', '530'),
    ('counsel', 'ܡܶܠܟ݂ܳܐ', 'ܡܠܟܐ', 'Noun', 'government-law', '1,870'),
    # Family
    ('father', 'ܐܰܒ݂ܳܐ', 'ܐܒܐ', 'Noun', 'family', '30'),
    ('mother', 'ܐܶܡܳܐ', 'ܐܡܐ', 'Noun', 'family', '85'),
    ('son', 'ܒ݁ܪܳܐ', 'ܒܪܐ', 'Noun', 'family', '25'),
    ('daughter', 'ܒ݁ܪܰܬ݂ܳܐ', 'ܒܪܬܐ', 'Noun', 'family', '260'),
    ('brother', 'ܐܰܚܳܐ', 'ܐܚܐ', 'Noun', 'family', '140'),
    # Nature
    ('open country', 'ܒ݁ܰܪܳܐ', 'ܒܪܐ', 'Noun', 'nature', '2,450'),
    # Function words
    ('and', 'ܘ', 'ܘ', 'Particle', 'function-words', '1'),
    ('but', 'ܐܶܠܳܐ', 'ܐܠܐ', 'Particle', 'function-words', '18'),
    ('in', 'ܒ݁', 'ܒ', 'Prep', 'function-words', '2'),
    ('from', 'ܡܶܢ', 'ܡܢ', 'Prep', 'function-words', '5'),
    ('I', 'ܐܶܢܳܐ', 'ܐܢܐ', 'Pronoun', 'function-words', '9'),
    ('he', 'ܗܽܘ', 'ܗܘ', 'Pronoun', 'function-words', '7'),
    ('today', 'ܝܰܘܡܳܢܳܐ', 'ܝܘܡܢܐ', 'Adverb', 'function-words', '330'),
    ('good', 'ܛܳܒ݂ܳܐ', 'ܛܒܐ', 'NounAdj', 'function-words', '75'),
]


def get_seed_data() -> list[dict]:
    """Seed rows keyed by canonical column names."""
    return [
        {
            'english': english,
            'vocalized': vocalized,
            'unvocalized': unvocalized,
            'part_of_speech': pos,
            'topic': topic,
            'frequency': frequency,
        }
        for english, vocalized, unvocalized, pos, topic, frequency in SEED_ROWS
    ]


class StaticVocabularySource(VocabularySource):
    """Vocabulary source backed by the built-in seed table."""

    def __init__(self, rows: list[dict] | None = None):
        self.rows = rows if rows is not None else get_seed_data()

    def load(self) -> list:
        records = [r for r in (record_from_row(row) for row in self.rows) if r is not None]
        dropped = len(self.rows) - len(records)
        if dropped:
            logger.warning(f"Dropped {dropped} seed rows without a gloss or script form")
        return records

    def describe(self) -> str:
        return f"built-in seed table ({len(self.rows)} rows)"
