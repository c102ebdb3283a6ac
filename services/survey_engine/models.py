from enum import Enum
from typing import Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Axis(str, Enum):
    """The closed set of profile dimensions."""
    ECONOMY = "economy"      # +Growth, -Welfare
    SOCIETY = "society"      # +Order, -Liberty
    DIPLOMACY = "diplomacy"  # +Alliance, -Autonomy
    APPROACH = "approach"    # +Realism, -Idealism


OPTIONS_PER_QUESTION = 4


class CamelModel(BaseModel):
    """Frozen model that reads and writes camelCase JSON keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Option(CamelModel):
    text: str = Field(..., min_length=1)
    score: int


class Question(CamelModel):
    id: int
    category: str
    text: str = Field(..., min_length=1)
    axis: Axis
    options: Tuple[Option, ...]


class QuestionBank(CamelModel):
    version: str
    questions: Tuple[Question, ...]

    def __len__(self) -> int:
        return len(self.questions)


class Answer(CamelModel):
    question_id: int
    question_text: str
    chosen_option_text: str
    axis: Axis
    score: int


class AxisScores(CamelModel):
    economy: int
    society: int
    diplomacy: int
    approach: int

    @classmethod
    def from_mapping(cls, values: Dict[Axis, int]) -> "AxisScores":
        return cls(**{axis.value: values[axis] for axis in Axis})

    def get(self, axis: Axis) -> int:
        return getattr(self, axis.value)


class AxisTally(CamelModel):
    raw: Dict[Axis, int]
    max_magnitude: Dict[Axis, int]


class SessionStatus(str, Enum):
    AWAITING_ANSWER = "awaiting_answer"
    COMPLETE = "complete"


class SessionState(CamelModel):
    status: SessionStatus
    index: int
    total: int
    answered: int
    progress: int


class AnalysisResult(CamelModel):
    archetype: str
    definition: str
    core_values: List[str]
    unexpected_trait: str
    scores: AxisScores


# Custom Error Classes
class ConfigurationError(RuntimeError):
    """Fatal startup problem: an unusable question bank, sample size or missing credentials."""
    pass

class QuestionBankError(ConfigurationError):
    """The question bank file is missing, unparsable or fails validation."""
    pass

class SequenceError(RuntimeError):
    """A collector was driven out of order (answer after completion, finalize too early)."""
    pass

class InvalidSubmissionError(ValueError):
    """Custom exception for invalid submission data (e.g., bad option index or weight)."""
    pass
