import os
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from services.survey_engine.loader import DEFAULT_QUESTION_BANK_PATH

# Load .env file if it exists, for local development
# In production, environment variables should be set directly.
if os.path.exists(".env"):
    from dotenv import load_dotenv
    load_dotenv()


class SurveySettings(BaseSettings):
    question_bank_path: Path = DEFAULT_QUESTION_BANK_PATH
    sample_size: int = Field(15, ge=1)
    max_option_weight: int = Field(2, ge=1)
    session_ttl_seconds: int = 3600

    model_config = SettingsConfigDict(env_prefix='SURVEY_')


class InterpretationSettings(BaseSettings):
    backend: Literal["gemini", "remote"] = "gemini"
    model: str = "gemini-2.5-flash"
    gemini_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("GEMINI_API_KEY", "INTERPRETATION_GEMINI_API_KEY"),
    )
    service_url: Optional[str] = None
    timeout_seconds: float = 30.0

    model_config = SettingsConfigDict(env_prefix='INTERPRETATION_')


class AppSettings(BaseSettings):
    log_level: str = "INFO"
    allowed_origins: List[str] = ["*"]

    model_config = SettingsConfigDict(env_prefix='APP_')


def get_survey_settings() -> SurveySettings:
    return SurveySettings()


def get_interpretation_settings() -> InterpretationSettings:
    return InterpretationSettings()


def get_app_settings() -> AppSettings:
    return AppSettings()
