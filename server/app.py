"""FastAPI server hosting live vocabulary rounds."""

import asyncio
import logging
import os
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from core.config import DEFAULT_ROUND_SECONDS, DEFAULT_FREQUENCY_MIN, DEFAULT_FREQUENCY_MAX
from core.engine import RoundEngine
from core.errors import ConfigurationError, DataLoadFailure, EmptyPool
from core.interfaces import VocabularySource
from core.policies import POLICIES
from core.pool import list_parts_of_speech, list_topics, TOPIC_LABELS
from core.records import FrequencyRange, SelectionCriteria, VocabularyRecord
from core.runner import RoundRunner
from core.session import Session
from core.vocabulary import StaticVocabularySource

from server.csv_source import CsvVocabularySource

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# Pydantic models for API
class StartRoundRequest(BaseModel):
    user_id: str = "default"
    game_type: str = "balloon"
    selection_mode: str = "random"
    topic_or_pos: Optional[str] = None
    frequency_min: int = DEFAULT_FREQUENCY_MIN
    frequency_max: int = DEFAULT_FREQUENCY_MAX
    display_form: str = "vocalized"
    duration: int = DEFAULT_ROUND_SECONDS
    question_count: Optional[int] = None


class SelectRequest(BaseModel):
    user_id: str = "default"
    entity_id: str
    question_id: Optional[int] = None


class AnswerRequest(BaseModel):
    user_id: str = "default"
    text: str
    question_id: Optional[int] = None


class UserRequest(BaseModel):
    user_id: str = "default"


class RoundStateResponse(BaseModel):
    state: str
    generation: int
    game_type: str
    criteria: dict
    time_remaining: int
    urgency: str
    score: int
    question: Optional[dict]
    question_open: bool
    entities: list[dict]
    message: str
    questions_drawn: int
    questions_left: Optional[int]
    result: Optional[dict]


class SelectionResponse(BaseModel):
    outcome: Optional[str]
    round: RoundStateResponse


class SessionResponse(BaseModel):
    total_score: int
    rounds_played: int
    missed_words: list[dict]
    review_count: int
    last_result: Optional[dict]


class VocabularyResponse(BaseModel):
    source: str
    record_count: int
    topics: list[str]
    topic_labels: dict
    parts_of_speech: list[str]
    game_types: list[str]


# Global state (one live round per user)
vocabulary_source: VocabularySource = None
vocabulary: list[VocabularyRecord] = []
vocabulary_error: Optional[str] = None
sessions: dict[str, Session] = {}
runners: dict[str, RoundRunner] = {}


def create_source() -> VocabularySource:
    """Pick the vocabulary source from the environment."""
    csv_path = os.environ.get('VOCAB_CSV')
    if csv_path:
        return CsvVocabularySource(csv_path)
    return StaticVocabularySource()


async def load_vocabulary(source: VocabularySource) -> list[VocabularyRecord]:
    """Load the vocabulary off the event loop, retrying once on failure."""
    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(None, source.load)
    except DataLoadFailure as e:
        logger.warning(f"Vocabulary load failed, retrying once: {e}")
        return await loop.run_in_executor(None, source.load)


def get_session(user_id: str = "default") -> Session:
    """Get or create the session for a user."""
    if user_id not in sessions:
        sessions[user_id] = Session()
    return sessions[user_id]


def get_runner(user_id: str) -> RoundRunner:
    runner = runners.get(user_id)
    if runner is None:
        raise HTTPException(status_code=404, detail="No round for this user")
    return runner


def round_state(runner: RoundRunner) -> RoundStateResponse:
    return RoundStateResponse(**runner.engine.snapshot())


app = FastAPI(title="Vocab Arcade API", description="Timed vocabulary quiz rounds")


@app.on_event("startup")
async def startup():
    """Load the vocabulary table before any round can start."""
    global vocabulary_source, vocabulary, vocabulary_error

    vocabulary_source = create_source()
    try:
        vocabulary = await load_vocabulary(vocabulary_source)
        vocabulary_error = None
        print(f"Loaded {len(vocabulary)} records from {vocabulary_source.describe()}")
    except DataLoadFailure as e:
        vocabulary = []
        vocabulary_error = str(e)
        logger.error(f"Vocabulary unavailable: {e}")


@app.on_event("shutdown")
async def shutdown():
    """Cancel every live round's timers."""
    for runner in list(runners.values()):
        await runner.stop()
    runners.clear()


@app.get("/")
async def root():
    """Health check."""
    return {
        "status": "ok" if vocabulary else "unavailable",
        "records": len(vocabulary),
        "error": vocabulary_error,
    }


@app.get("/api/vocabulary", response_model=VocabularyResponse)
async def get_vocabulary():
    """Describe the loaded vocabulary and the available round options."""
    return VocabularyResponse(
        source=vocabulary_source.describe() if vocabulary_source else "",
        record_count=len(vocabulary),
        topics=list_topics(vocabulary),
        topic_labels=TOPIC_LABELS,
        parts_of_speech=list_parts_of_speech(vocabulary),
        game_types=list(POLICIES.keys()),
    )


@app.post("/api/rounds", response_model=RoundStateResponse)
async def start_round(request: StartRoundRequest):
    """Start a new round for a user, replacing any round in progress."""
    if not vocabulary:
        raise HTTPException(status_code=503, detail=vocabulary_error or "Vocabulary not loaded")

    try:
        criteria = SelectionCriteria(
            mode=request.selection_mode,
            topic_or_pos=request.topic_or_pos,
            frequency_range=FrequencyRange(request.frequency_min, request.frequency_max),
            display_form=request.display_form,
        )
        engine = RoundEngine(
            vocabulary, criteria,
            game_type=request.game_type,
            duration=request.duration,
            question_count=request.question_count,
            session=get_session(request.user_id),
        )
    except EmptyPool as e:
        raise HTTPException(status_code=422, detail=f"Empty pool: {e}")
    except ConfigurationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    previous = runners.pop(request.user_id, None)
    if previous:
        await previous.stop()

    runner = RoundRunner(engine)
    runner.start()
    runners[request.user_id] = runner
    logger.info(f"Round for {request.user_id}: {request.game_type}/{request.selection_mode}")
    return round_state(runner)


@app.get("/api/rounds/current", response_model=RoundStateResponse)
async def get_round(user_id: str = "default"):
    """Current state of the user's round."""
    return round_state(get_runner(user_id))


@app.post("/api/rounds/select", response_model=SelectionResponse)
async def select_entity(request: SelectRequest):
    """Pop, click or drop an answer entity."""
    runner = get_runner(request.user_id)
    outcome = runner.engine.select(request.entity_id, request.question_id)
    return SelectionResponse(outcome=outcome, round=round_state(runner))


@app.post("/api/rounds/answer", response_model=SelectionResponse)
async def submit_answer(request: AnswerRequest):
    """Type an answer; it selects the on-screen entity it matches."""
    runner = get_runner(request.user_id)
    outcome = runner.engine.answer(request.text, request.question_id)
    return SelectionResponse(outcome=outcome, round=round_state(runner))


@app.post("/api/rounds/restart", response_model=RoundStateResponse)
async def restart_round(request: UserRequest):
    """Restart the user's round with the same configuration."""
    runner = get_runner(request.user_id)
    await runner.restart()
    return round_state(runner)


@app.post("/api/rounds/stop", response_model=RoundStateResponse)
async def stop_round(request: UserRequest):
    """Abandon the user's round."""
    runner = get_runner(request.user_id)
    await runner.stop()
    return round_state(runner)


@app.get("/api/session", response_model=SessionResponse)
async def get_session_summary(user_id: str = "default"):
    """Cumulative score and the words to review."""
    return SessionResponse(**get_session(user_id).to_dict())


@app.delete("/api/session", response_model=SessionResponse)
async def clear_session(user_id: str = "default"):
    """Start a fresh session for the user."""
    session = get_session(user_id)
    session.clear()
    return SessionResponse(**session.to_dict())


def create_app():
    """Factory function for creating the app (useful for testing)."""
    return app
