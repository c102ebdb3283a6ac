import pytest

from services.survey_engine.collector import ResponseCollector
from services.survey_engine.models import (
    Axis,
    InvalidSubmissionError,
    Option,
    SequenceError,
    SessionStatus,
)


@pytest.fixture
def collector(one_per_axis_bank):
    return ResponseCollector(one_per_axis_bank.questions)


def test_initial_state(collector):
    state = collector.state
    assert state.status == SessionStatus.AWAITING_ANSWER
    assert state.index == 0
    assert state.total == 4
    assert state.answered == 0
    assert state.progress == 0
    assert collector.current_question.id == 1


def test_answer_advances_state(collector):
    state = collector.submit_answer(3)
    assert state.index == 1
    assert state.progress == 25
    assert collector.current_question.id == 2

    answer = collector.answers[0]
    assert answer.question_id == 1
    assert answer.question_text == "Question 1 on economy?"
    assert answer.chosen_option_text == "Option +2"
    assert answer.axis is Axis.ECONOMY
    assert answer.score == 2


def test_full_run_completes(collector):
    for i in range(3):
        assert collector.submit_answer(i).status == SessionStatus.AWAITING_ANSWER
    state = collector.submit_answer(0)
    assert state.status == SessionStatus.COMPLETE
    assert state.progress == 100
    assert collector.current_question is None
    assert [a.question_id for a in collector.finalize()] == [1, 2, 3, 4]


def test_rejects_answer_once_complete(collector):
    for _ in range(4):
        collector.submit_answer(0)
    with pytest.raises(SequenceError):
        collector.submit_answer(0)
    assert len(collector.answers) == 4


def test_finalize_before_complete_rejected(collector):
    collector.submit_answer(0)
    with pytest.raises(SequenceError, match="1 of 4"):
        collector.finalize()


def test_empty_question_list_rejected():
    with pytest.raises(SequenceError):
        ResponseCollector([])


def test_question_id_mismatch_rejected(collector):
    collector.submit_answer(0, question_id=1)
    with pytest.raises(SequenceError, match="question 1 but question 2"):
        collector.submit_answer(0, question_id=1)
    assert len(collector.answers) == 1


@pytest.mark.parametrize("choice", [-1, 4, "1", 1.0, True])
def test_invalid_choice_leaves_state_untouched(collector, choice):
    with pytest.raises(InvalidSubmissionError):
        collector.submit_answer(choice)
    assert collector.state.index == 0
    assert collector.answers == ()


def test_accepts_option_object(collector, one_per_axis_bank):
    option = one_per_axis_bank.questions[0].options[0]
    collector.submit_answer(option)
    assert collector.answers[0].score == -2


def test_rejects_foreign_option(collector):
    with pytest.raises(InvalidSubmissionError):
        collector.submit_answer(Option(text="Not offered", score=2))


def test_answers_reference_shown_question(make_question):
    """Answers carry the text of the question that was shown, even if a bank entry with the same id changes."""
    shown = make_question(7, Axis.SOCIETY)
    collector = ResponseCollector([shown])
    replacement = make_question(7, Axis.DIPLOMACY)
    assert replacement.axis != shown.axis

    collector.submit_answer(2)
    answer = collector.finalize()[0]
    assert answer.axis is Axis.SOCIETY
    assert answer.question_text == shown.text


def test_collectors_do_not_share_state(one_per_axis_bank):
    first = ResponseCollector(one_per_axis_bank.questions)
    second = ResponseCollector(one_per_axis_bank.questions)
    first.submit_answer(0)
    assert second.state.answered == 0
