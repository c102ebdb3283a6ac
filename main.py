import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import get_app_settings, get_interpretation_settings, get_survey_settings
from services.survey_engine.loader import load_question_bank_from_file
from services.survey_engine.sampler import QuestionSampler
from src.core.logging_config import setup_logging
from src.interpretation.requestor import AnalysisRequestor
from src.interpretation.service import build_interpretation_service
from src.routers import survey as survey_router
from src.sessions.store import SessionStore

app_settings = get_app_settings()
setup_logging(app_settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Loads the question bank and wires the pipeline once per process.
    Any ConfigurationError raised here stops the application before a session can start.
    """
    survey_settings = get_survey_settings()
    interpretation_settings = get_interpretation_settings()

    bank = load_question_bank_from_file(
        survey_settings.question_bank_path,
        max_option_weight=survey_settings.max_option_weight,
    )
    sampler = QuestionSampler(bank, k=survey_settings.sample_size)
    service = build_interpretation_service(interpretation_settings)

    app.state.question_bank = bank
    app.state.sample_size = sampler.k
    app.state.max_option_weight = survey_settings.max_option_weight
    app.state.session_store = SessionStore(sampler, ttl_seconds=survey_settings.session_ttl_seconds)
    app.state.analysis_requestor = AnalysisRequestor(service, timeout=interpretation_settings.timeout_seconds)

    logger.info(
        f"Survey engine ready: {len(bank)} questions, sample size {sampler.k}, "
        f"interpretation backend '{interpretation_settings.backend}'"
    )
    yield
    logger.info("Survey engine shutting down")


app = FastAPI(title="Political Archetype Profile Engine", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(survey_router.router, prefix="/api/v1", tags=["survey"])


@app.get("/health", tags=["Health Check"])
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    # Prefer `uvicorn main:app --reload` from the project root during development
    uvicorn.run("main:app", host="0.0.0.0", port=8000)
