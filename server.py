# server.py
"""HTTP adapter for the Maternal Wellness screening engine.

Thin layer over AssessmentService: every scoring and escalation rule lives
in the maternal_wellness package. Sessions, results and mood entries are
held in memory for the lifetime of the process.
"""

from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Annotated, cast
from uuid import uuid4

from fastapi import Depends, FastAPI, HTTPException, Query, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

import maternal_wellness
from maternal_wellness.config import Settings, get_settings
from maternal_wellness.domain.entities import AssessmentResult, CarePlan, CarePlanItem, MoodEntry
from maternal_wellness.domain.enums import Instrument, MoodType, SessionState
from maternal_wellness.domain.exceptions import (
    IncompleteAssessmentError,
    InvalidAnswerError,
    SessionStateError,
)
from maternal_wellness.domain.question_bank import get_questions
from maternal_wellness.domain.value_objects import Question
from maternal_wellness.infrastructure.logging import (
    bind_context,
    get_logger,
    setup_logging,
    unbind_context,
)
from maternal_wellness.services import AssessmentService, InMemoryMoodJournal
from maternal_wellness.services.history import HistoryFilter, score_change, severity_trend
from maternal_wellness.services.session import AnswerSession

logger = get_logger("maternal_wellness.server")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the in-memory service graph for the application lifetime."""
    settings = get_settings()
    setup_logging(settings.logging)

    app.state.settings = settings
    app.state.assessment_service = AssessmentService(crisis_settings=settings.crisis)
    app.state.mood_journal = InMemoryMoodJournal()
    app.state.sessions = {}
    logger.info("server_started", version=maternal_wellness.__version__)
    try:
        yield
    finally:
        open_sessions = sum(
            1 for s in app.state.sessions.values() if s.state is SessionState.IN_PROGRESS
        )
        logger.info("server_stopped", abandoned_sessions=open_sessions)


app = FastAPI(
    title="Maternal Wellness Screening API",
    version=maternal_wellness.__version__,
    description="EPDS and PHQ-9 screening with crisis escalation",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().api.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Tag every log event of a request with a request id."""
    request_id = request.headers.get("x-request-id") or uuid4().hex[:12]
    bind_context(request_id=request_id)
    try:
        response = await call_next(request)
        logger.info(
            "request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
        )
        response.headers["x-request-id"] = request_id
        return response
    finally:
        unbind_context("request_id")


# --- Error Mapping ---
@app.exception_handler(InvalidAnswerError)
async def invalid_answer_handler(request: Request, exc: InvalidAnswerError) -> JSONResponse:
    """Map invalid answers to 422 ("please select a valid option")."""
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Please select a valid option.",
            "error": str(exc),
            "question_id": exc.question_id,
            "value": exc.value,
        },
    )


@app.exception_handler(IncompleteAssessmentError)
async def incomplete_handler(request: Request, exc: IncompleteAssessmentError) -> JSONResponse:
    """Map early completion to 409 ("please answer all questions")."""
    return JSONResponse(
        status_code=409,
        content={
            "detail": "Please answer all questions before completing the assessment.",
            "unanswered": list(exc.unanswered),
        },
    )


@app.exception_handler(SessionStateError)
async def session_state_handler(request: Request, exc: SessionStateError) -> JSONResponse:
    """Map operations on finished sessions to 409."""
    return JSONResponse(
        status_code=409,
        content={"detail": str(exc), "state": exc.state.value},
    )


# --- Dependency Injection ---
def get_app_settings(request: Request) -> Settings:
    """Get initialized Settings."""
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        raise HTTPException(status_code=503, detail="Settings not initialized")
    return cast("Settings", settings)


def get_assessment_service(request: Request) -> AssessmentService:
    """Get initialized AssessmentService."""
    service = getattr(request.app.state, "assessment_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Assessment service not initialized")
    return cast("AssessmentService", service)


def get_mood_journal(request: Request) -> InMemoryMoodJournal:
    """Get initialized mood journal."""
    journal = getattr(request.app.state, "mood_journal", None)
    if journal is None:
        raise HTTPException(status_code=503, detail="Mood journal not initialized")
    return cast("InMemoryMoodJournal", journal)


def get_sessions(request: Request) -> dict[str, AnswerSession]:
    """Get the open session registry."""
    sessions = getattr(request.app.state, "sessions", None)
    if sessions is None:
        raise HTTPException(status_code=503, detail="Session registry not initialized")
    return cast("dict[str, AnswerSession]", sessions)


def parse_instrument(instrument: str) -> Instrument:
    """Resolve an instrument path or query value."""
    try:
        return Instrument.parse(instrument)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


# --- Request/Response Models ---
class OptionOut(BaseModel):
    value: int
    label: str


class QuestionOut(BaseModel):
    id: int
    text: str
    options: list[OptionOut]

    @classmethod
    def from_question(cls, question: Question) -> "QuestionOut":
        return cls(
            id=question.id,
            text=question.text,
            options=[OptionOut(value=o.value, label=o.label) for o in question.options],
        )


class StartSessionRequest(BaseModel):
    """Start a questionnaire for a user."""

    user_id: str = Field(min_length=1, description="Opaque id from the auth layer")
    instrument: str = Field(description="EPDS or PHQ-9")


class AnswerRequest(BaseModel):
    question_id: int
    value: int


class NavigateRequest(BaseModel):
    index: int


class SessionOut(BaseModel):
    """Snapshot of an answer session."""

    session_id: str
    user_id: str
    instrument: str
    state: str
    current_index: int
    answered: int
    total: int
    progress: float
    unanswered: list[int]
    current_question: QuestionOut | None


class AssessmentOut(BaseModel):
    """Completed assessment with its recommendations."""

    id: str
    user_id: str
    instrument: str
    timestamp: datetime
    score: int
    max_score: int
    severity: str
    description: str
    color: str
    self_harm_risk: bool
    answers: dict[int, int]
    recommendations: list[str]


class TrendPointOut(BaseModel):
    timestamp: datetime
    score: int
    severity: str
    color: str


class TrendOut(BaseModel):
    instrument: str
    points: list[TrendPointOut]
    score_change: int | None


class MoodRequest(BaseModel):
    mood: MoodType
    notes: str | None = Field(default=None, max_length=2000)


class MoodOut(BaseModel):
    id: str
    mood: str
    emoji: str
    timestamp: datetime
    notes: str | None


class MoodTrendOut(BaseModel):
    trend: str
    message: str
    counts: dict[str, int]


class CarePlanItemOut(BaseModel):
    title: str
    description: str


class CarePlanOut(BaseModel):
    id: str
    source_assessment_id: str
    mind_and_emotions: list[CarePlanItemOut]
    body_and_rest: list[CarePlanItemOut]
    support_and_connection: list[CarePlanItemOut]
    goals: list[CarePlanItemOut]


# --- Endpoints ---
@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "version": maternal_wellness.__version__}


@app.get("/instruments/{instrument}/questions", response_model=list[QuestionOut])
async def list_questions(instrument: str) -> list[QuestionOut]:
    """Return an instrument's questions in display order."""
    return [QuestionOut.from_question(q) for q in get_questions(parse_instrument(instrument))]


@app.post("/sessions", response_model=SessionOut, status_code=201)
async def start_session(
    body: StartSessionRequest,
    service: Annotated[AssessmentService, Depends(get_assessment_service)],
    sessions: Annotated[dict[str, AnswerSession], Depends(get_sessions)],
    app_settings: Annotated[Settings, Depends(get_app_settings)],
) -> SessionOut:
    """Start a questionnaire session."""
    try:
        instrument = Instrument.parse(body.instrument)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    _make_room(sessions, app_settings.api.max_open_sessions)
    session_id = uuid4().hex
    sessions[session_id] = service.start_assessment(body.user_id, instrument)
    return _session_out(session_id, sessions[session_id])


@app.get("/sessions/{session_id}", response_model=SessionOut)
async def get_session(
    session_id: str,
    sessions: Annotated[dict[str, AnswerSession], Depends(get_sessions)],
) -> SessionOut:
    """Return a session snapshot."""
    return _session_out(session_id, _find_session(sessions, session_id))


@app.post("/sessions/{session_id}/answers", response_model=SessionOut)
async def record_answer(
    session_id: str,
    body: AnswerRequest,
    service: Annotated[AssessmentService, Depends(get_assessment_service)],
    sessions: Annotated[dict[str, AnswerSession], Depends(get_sessions)],
) -> SessionOut:
    """Record one answer."""
    session = _find_session(sessions, session_id)
    service.record_answer(session, body.question_id, body.value)
    return _session_out(session_id, session)


@app.post("/sessions/{session_id}/navigate", response_model=SessionOut)
async def navigate(
    session_id: str,
    body: NavigateRequest,
    sessions: Annotated[dict[str, AnswerSession], Depends(get_sessions)],
) -> SessionOut:
    """Move to a question index (clamped)."""
    session = _find_session(sessions, session_id)
    session.go_to(body.index)
    return _session_out(session_id, session)


@app.post("/sessions/{session_id}/complete", response_model=AssessmentOut)
async def complete_session(
    session_id: str,
    service: Annotated[AssessmentService, Depends(get_assessment_service)],
    sessions: Annotated[dict[str, AnswerSession], Depends(get_sessions)],
) -> AssessmentOut:
    """Complete a session; repeated calls return the same result."""
    session = _find_session(sessions, session_id)
    bind_context(session_id=session_id)
    try:
        result = service.complete_assessment(session)
    finally:
        unbind_context("session_id")
    return _assessment_out(result, service)


@app.delete("/sessions/{session_id}", status_code=204)
async def abandon_session(
    session_id: str,
    sessions: Annotated[dict[str, AnswerSession], Depends(get_sessions)],
) -> Response:
    """Discard a session; nothing is persisted for unfinished sessions."""
    _find_session(sessions, session_id)
    del sessions[session_id]
    return Response(status_code=204)


@app.get("/users/{user_id}/assessments", response_model=list[AssessmentOut])
async def list_assessments(
    user_id: str,
    service: Annotated[AssessmentService, Depends(get_assessment_service)],
    instrument: Annotated[str | None, Query()] = None,
    limit: Annotated[int | None, Query(ge=1, le=100)] = None,
    start: Annotated[datetime | None, Query()] = None,
    end: Annotated[datetime | None, Query()] = None,
) -> list[AssessmentOut]:
    """Return a user's assessment history, newest first."""
    history_filter = HistoryFilter(
        instrument=parse_instrument(instrument) if instrument else None,
        start=_as_utc(start),
        end=_as_utc(end),
        limit=limit,
    )
    return [_assessment_out(r, service) for r in service.query_history(user_id, history_filter)]


@app.get("/users/{user_id}/assessments/latest", response_model=AssessmentOut)
async def latest_assessment(
    user_id: str,
    service: Annotated[AssessmentService, Depends(get_assessment_service)],
) -> AssessmentOut:
    """Return the user's most recent assessment."""
    result = service.latest_result(user_id)
    if result is None:
        raise HTTPException(status_code=404, detail="No assessments found")
    return _assessment_out(result, service)


@app.get("/users/{user_id}/assessments/trend", response_model=TrendOut)
async def assessment_trend(
    user_id: str,
    instrument: str,
    service: Annotated[AssessmentService, Depends(get_assessment_service)],
) -> TrendOut:
    """Return one instrument's scores over time, oldest first."""
    resolved = parse_instrument(instrument)
    results = service.query_history(user_id)
    return TrendOut(
        instrument=resolved.value,
        points=[
            TrendPointOut(
                timestamp=p.timestamp,
                score=p.score,
                severity=p.severity_label,
                color=p.color_tag.value,
            )
            for p in severity_trend(results, resolved)
        ],
        score_change=score_change(results, resolved),
    )


@app.post("/users/{user_id}/moods", response_model=MoodOut, status_code=201)
async def record_mood(
    user_id: str,
    body: MoodRequest,
    journal: Annotated[InMemoryMoodJournal, Depends(get_mood_journal)],
) -> MoodOut:
    """Record today's mood (replaces an earlier entry from today)."""
    return _mood_out(journal.record(user_id, body.mood, body.notes))


@app.get("/users/{user_id}/moods", response_model=list[MoodOut])
async def list_moods(
    user_id: str,
    journal: Annotated[InMemoryMoodJournal, Depends(get_mood_journal)],
    since: Annotated[datetime | None, Query()] = None,
) -> list[MoodOut]:
    """Return mood entries, oldest first."""
    since = _as_utc(since)
    entries = journal.entries_since(user_id, since) if since else journal.entries_for(user_id)
    return [_mood_out(e) for e in entries]


@app.get("/users/{user_id}/moods/trend", response_model=MoodTrendOut)
async def mood_trend(
    user_id: str,
    journal: Annotated[InMemoryMoodJournal, Depends(get_mood_journal)],
) -> MoodTrendOut:
    """Return the direction of the user's recent moods."""
    trend = journal.mood_trend(user_id)
    return MoodTrendOut(
        trend=trend.value,
        message=trend.message,
        counts={mood.value: count for mood, count in journal.mood_counts(user_id).items()},
    )


@app.get("/users/{user_id}/care-plan", response_model=CarePlanOut)
async def care_plan(
    user_id: str,
    service: Annotated[AssessmentService, Depends(get_assessment_service)],
) -> CarePlanOut:
    """Return the default care plan for the user's latest assessment."""
    plan = service.care_plan_for(user_id)
    if plan is None:
        raise HTTPException(status_code=404, detail="No assessment to base a care plan on")
    return _care_plan_out(plan)


# --- Helper Functions ---
def _find_session(sessions: dict[str, AnswerSession], session_id: str) -> AnswerSession:
    session = sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Session {session_id} not found")
    return session


def _as_utc(value: datetime | None) -> datetime | None:
    """Read naive query datetimes as UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


def _make_room(sessions: dict[str, AnswerSession], capacity: int) -> None:
    """Evict the oldest completed session when the registry is full.

    Raises:
        HTTPException: 503 if every held session is still in progress.
    """
    if len(sessions) < capacity:
        return
    for session_id, session in sessions.items():
        if session.is_complete:
            del sessions[session_id]
            return
    raise HTTPException(status_code=503, detail="Too many open sessions, try again later")


def _session_out(session_id: str, session: AnswerSession) -> SessionOut:
    instrument = session.instrument
    return SessionOut(
        session_id=session_id,
        user_id=session.user_id,
        instrument=instrument.value if instrument else "",
        state=session.state.value,
        current_index=session.current_index,
        answered=session.answered_count,
        total=len(session.questions),
        progress=session.progress,
        unanswered=session.unanswered(),
        current_question=(
            None if session.is_complete else QuestionOut.from_question(session.current_question)
        ),
    )


def _assessment_out(result: AssessmentResult, service: AssessmentService) -> AssessmentOut:
    return AssessmentOut(
        id=result.id,
        user_id=result.user_id,
        instrument=result.instrument.value,
        timestamp=result.timestamp,
        score=result.score,
        max_score=result.max_score,
        severity=result.interpretation.severity_label,
        description=result.interpretation.description,
        color=result.interpretation.color_tag.value,
        self_harm_risk=result.self_harm_risk,
        answers=dict(result.answers),
        recommendations=service.get_recommendations(result),
    )


def _mood_out(entry: MoodEntry) -> MoodOut:
    return MoodOut(
        id=entry.id,
        mood=entry.mood.value,
        emoji=entry.mood.emoji,
        timestamp=entry.timestamp,
        notes=entry.notes,
    )


def _items_out(items: tuple[CarePlanItem, ...]) -> list[CarePlanItemOut]:
    return [CarePlanItemOut(title=i.title, description=i.description) for i in items]


def _care_plan_out(plan: CarePlan) -> CarePlanOut:
    return CarePlanOut(
        id=plan.id,
        source_assessment_id=plan.source_assessment_id,
        mind_and_emotions=_items_out(plan.mind_and_emotions),
        body_and_rest=_items_out(plan.body_and_rest),
        support_and_connection=_items_out(plan.support_and_connection),
        goals=_items_out(plan.goals),
    )


if __name__ == "__main__":
    import uvicorn

    api_settings = get_settings().api
    uvicorn.run(app, host=api_settings.host, port=api_settings.port, log_config=None)
