import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request

from services.survey_engine import scoring_engine
from services.survey_engine.models import (
    AnalysisResult,
    Answer,
    AxisScores,
    InvalidSubmissionError,
    QuestionBank,
    SequenceError,
)
from src.interpretation.errors import AnalysisUnavailable
from src.interpretation.requestor import AnalysisRequestor
from src.schemas.survey import (
    AnswerRequest,
    AnswersRequest,
    FinalizeResponse,
    QuestionView,
    ScoresResponse,
    SessionResponse,
)
from src.sessions.store import SessionNotFoundError, SessionStore, SurveySession

router = APIRouter()
logger = logging.getLogger(__name__)


# --- Dependencies (populated by the application lifespan) ---

def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_analysis_requestor(request: Request) -> AnalysisRequestor:
    return request.app.state.analysis_requestor


def get_max_option_weight(request: Request) -> int:
    return request.app.state.max_option_weight


def get_question_bank(request: Request) -> QuestionBank:
    return request.app.state.question_bank


def get_sample_size(request: Request) -> int:
    return request.app.state.sample_size


def _session_response(session: SurveySession) -> SessionResponse:
    question = session.collector.current_question
    return SessionResponse(
        session_id=session.session_id,
        state=session.collector.state,
        question=QuestionView.from_question(question) if question else None,
    )


def _load_session(store: SessionStore, session_id: str) -> SurveySession:
    try:
        return store.get(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found")


@router.post("/survey/sessions", response_model=SessionResponse, status_code=201)
async def start_session(store: SessionStore = Depends(get_session_store)):
    """Samples a fresh question set and opens a session on its first question."""
    session = store.create()
    return _session_response(session)


@router.get("/survey/sessions/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str, store: SessionStore = Depends(get_session_store)):
    return _session_response(_load_session(store, session_id))


@router.post("/survey/sessions/{session_id}/answers", response_model=SessionResponse)
async def submit_answer(
    session_id: str,
    body: AnswerRequest,
    store: SessionStore = Depends(get_session_store),
):
    """Records the chosen option for the question currently awaiting an answer."""
    session = _load_session(store, session_id)
    try:
        session.collector.submit_answer(body.option_index, question_id=body.question_id)
    except SequenceError as e:
        logger.warning(f"Out-of-sequence answer for session {session_id}: {e}", extra={"session_id": session_id})
        raise HTTPException(status_code=409, detail=str(e))
    except InvalidSubmissionError as e:
        logger.warning(f"Invalid answer for session {session_id}: {e}", extra={"session_id": session_id})
        raise HTTPException(status_code=400, detail=str(e))
    return _session_response(session)


@router.post("/survey/sessions/{session_id}/finalize", response_model=FinalizeResponse)
async def finalize_session(
    session_id: str,
    store: SessionStore = Depends(get_session_store),
    max_weight: int = Depends(get_max_option_weight),
):
    """Returns the completed answers with their normalized scores and closes the session."""
    session = _load_session(store, session_id)
    try:
        answers = session.collector.finalize()
    except SequenceError as e:
        raise HTTPException(status_code=409, detail=str(e))

    scores = scoring_engine.score(answers, max_weight=max_weight)
    store.discard(session_id)
    return FinalizeResponse(answers=list(answers), scores=scores)


def _score_submitted(answers: List[Answer], bank: QuestionBank, sample_size: int, max_weight: int) -> AxisScores:
    """Scores a client-supplied answer set after checking it against the loaded bank."""
    try:
        scoring_engine.verify_completed_answers(answers, bank, expected_count=sample_size)
        return scoring_engine.score(answers, max_weight=max_weight)
    except InvalidSubmissionError as e:
        logger.warning(f"Rejected submitted answers: {e}")
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/scores", response_model=ScoresResponse)
async def compute_scores(
    body: AnswersRequest,
    bank: QuestionBank = Depends(get_question_bank),
    sample_size: int = Depends(get_sample_size),
    max_weight: int = Depends(get_max_option_weight),
):
    return ScoresResponse(scores=_score_submitted(body.answers, bank, sample_size, max_weight))


@router.post("/analysis", response_model=AnalysisResult)
async def analyze(
    body: AnswersRequest,
    requestor: AnalysisRequestor = Depends(get_analysis_requestor),
    bank: QuestionBank = Depends(get_question_bank),
    sample_size: int = Depends(get_sample_size),
    max_weight: int = Depends(get_max_option_weight),
):
    """
    Scores the answers locally and asks the interpretation service for an archetype.
    The answers must form one completed session's worth of questions from the loaded bank.
    Any failure of the external exchange is reported as 503; the client may retry.
    """
    scores = _score_submitted(body.answers, bank, sample_size, max_weight)

    try:
        return await requestor.request_analysis(body.answers, scores)
    except AnalysisUnavailable as e:
        logger.error(f"Analysis unavailable: {e.reason}")
        raise HTTPException(status_code=503, detail="analysis unavailable")
    except Exception as e:
        logger.exception(f"Unexpected error during analysis: {e}")
        raise HTTPException(status_code=500, detail="Internal server error during analysis.")
