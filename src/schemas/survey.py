from typing import List, Optional

from pydantic import Field

from services.survey_engine.models import Answer, AxisScores, CamelModel, Question, SessionState


class QuestionView(CamelModel):
    """A question as shown to the respondent; option weights stay server-side."""
    id: int
    category: str
    text: str
    options: List[str]

    @classmethod
    def from_question(cls, question: Question) -> "QuestionView":
        return cls(
            id=question.id,
            category=question.category,
            text=question.text,
            options=[o.text for o in question.options],
        )


class SessionResponse(CamelModel):
    session_id: str
    state: SessionState
    question: Optional[QuestionView] = None


class AnswerRequest(CamelModel):
    question_id: int
    option_index: int = Field(..., ge=0)


class FinalizeResponse(CamelModel):
    answers: List[Answer]
    scores: AxisScores


class AnswersRequest(CamelModel):
    answers: List[Answer] = Field(..., min_length=1)


class ScoresResponse(CamelModel):
    scores: AxisScores
