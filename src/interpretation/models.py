from typing import Any, List

from pydantic import StringConstraints, field_validator
from typing_extensions import Annotated

from services.survey_engine.models import Answer, Axis, AxisScores, CamelModel

MAX_CORE_VALUES = 3

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class AnswerContext(CamelModel):
    """One answer as the interpretation service sees it."""
    question_text: str
    chosen_option_text: str
    axis: Axis
    score: int

    @classmethod
    def from_answer(cls, answer: Answer) -> "AnswerContext":
        return cls(
            question_text=answer.question_text,
            chosen_option_text=answer.chosen_option_text,
            axis=answer.axis,
            score=answer.score,
        )


class InterpretationRequest(CamelModel):
    answers: List[AnswerContext]
    normalized_scores: AxisScores


class InterpretationResponse(CamelModel):
    """
    Narrative fields proposed by the interpretation service.

    Unknown keys (including any scores the service echoes back) are ignored.
    core_values policy: blank or non-string entries are dropped, the list is cut to
    the first three, shorter lists are kept without padding, an empty list is invalid.
    """
    archetype: NonEmptyStr
    definition: NonEmptyStr
    core_values: List[str]
    unexpected_trait: NonEmptyStr

    @field_validator('core_values', mode='before')
    @classmethod
    def clamp_core_values(cls, value: Any) -> List[str]:
        if not isinstance(value, list):
            raise ValueError("coreValues must be a list of strings")
        cleaned = [item.strip() for item in value if isinstance(item, str) and item.strip()]
        if not cleaned:
            raise ValueError("coreValues must contain at least one non-empty string")
        return cleaned[:MAX_CORE_VALUES]
