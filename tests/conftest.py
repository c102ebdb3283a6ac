import pytest

from services.survey_engine.models import Answer, Axis, Option, Question, QuestionBank

DEFAULT_WEIGHTS = (-2, -1, 1, 2)


@pytest.fixture
def make_question():
    """Factory for questions with four options weighted -2, -1, +1, +2 by default."""
    def _make(question_id: int, axis: Axis, weights=DEFAULT_WEIGHTS) -> Question:
        return Question(
            id=question_id,
            category=axis.value.title(),
            text=f"Question {question_id} on {axis.value}?",
            axis=axis,
            options=tuple(Option(text=f"Option {w:+d}", score=w) for w in weights),
        )
    return _make


@pytest.fixture
def make_answer():
    def _make(axis: Axis, score: int, question_id: int = 1) -> Answer:
        return Answer(
            question_id=question_id,
            question_text=f"Question {question_id}?",
            chosen_option_text=f"Option {score:+d}",
            axis=axis,
            score=score,
        )
    return _make


@pytest.fixture
def one_per_axis_bank(make_question) -> QuestionBank:
    """One question per axis, four questions in total."""
    return QuestionBank(
        version="test",
        questions=tuple(make_question(i + 1, axis) for i, axis in enumerate(Axis)),
    )


@pytest.fixture
def large_bank(make_question) -> QuestionBank:
    """Twenty questions spread round-robin over the four axes."""
    axes = list(Axis)
    return QuestionBank(
        version="test",
        questions=tuple(make_question(i + 1, axes[i % len(axes)]) for i in range(20)),
    )
