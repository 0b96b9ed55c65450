from .records import (
    VocabularyRecord, SelectionCriteria, SelectionMode, DisplayForm, FrequencyRange,
    record_from_row
)
from .errors import VocabGameError, DataLoadFailure, ConfigurationError, EmptyPool
from .interfaces import VocabularySource, SessionStore
from .pool import filter_pool, matches, canonical_pos, resolve_topic
from .distractors import generate_distractors, build_options
from .scheduler import DrawScheduler, Question
from .motion import AnswerEntity, MotionLoop
from .clock import RoundClock
from .ledger import ScoreLedger
from .policies import ModePolicy, POLICIES, get_policy
from .engine import RoundEngine, RoundResult
from .runner import RoundRunner
from .session import Session
from .vocabulary import StaticVocabularySource

__all__ = [
    'VocabularyRecord', 'SelectionCriteria', 'SelectionMode', 'DisplayForm', 'FrequencyRange',
    'record_from_row',
    'VocabGameError', 'DataLoadFailure', 'ConfigurationError', 'EmptyPool',
    'VocabularySource', 'SessionStore',
    'filter_pool', 'matches', 'canonical_pos', 'resolve_topic',
    'generate_distractors', 'build_options',
    'DrawScheduler', 'Question',
    'AnswerEntity', 'MotionLoop',
    'RoundClock',
    'ScoreLedger',
    'ModePolicy', 'POLICIES', 'get_policy',
    'RoundEngine', 'RoundResult',
    'RoundRunner',
    'Session',
    'StaticVocabularySource'
]
