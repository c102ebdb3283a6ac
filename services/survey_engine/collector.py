import logging
import threading
from typing import List, Optional, Sequence, Tuple, Union

from .models import (
    Answer,
    InvalidSubmissionError,
    Option,
    Question,
    SequenceError,
    SessionState,
    SessionStatus,
)

logger = logging.getLogger(__name__)


class ResponseCollector:
    """
    Presents sampled questions one at a time and records exactly one answer per question.

    States are AwaitingAnswer(index) for index in [0, total) and Complete. Answers are
    built from the Question objects held here, never re-read from the bank.
    """
    def __init__(self, questions: Sequence[Question]):
        if not questions:
            raise SequenceError("Cannot collect answers before questions have been sampled")
        self._questions: Tuple[Question, ...] = tuple(questions)
        self._answers: List[Answer] = []
        self._lock = threading.Lock()

    @property
    def questions(self) -> Tuple[Question, ...]:
        return self._questions

    @property
    def answers(self) -> Tuple[Answer, ...]:
        return tuple(self._answers)

    @property
    def is_complete(self) -> bool:
        return len(self._answers) == len(self._questions)

    @property
    def current_question(self) -> Optional[Question]:
        if self.is_complete:
            return None
        return self._questions[len(self._answers)]

    @property
    def state(self) -> SessionState:
        total = len(self._questions)
        answered = len(self._answers)
        return SessionState(
            status=SessionStatus.COMPLETE if answered == total else SessionStatus.AWAITING_ANSWER,
            index=answered,
            total=total,
            answered=answered,
            progress=answered * 100 // total,
        )

    def submit_answer(self, choice: Union[int, Option], question_id: Optional[int] = None) -> SessionState:
        """
        Records the respondent's choice for the current question and advances the state.

        Args:
            choice: Index of the chosen option, or the Option object itself.
            question_id: Optional id of the question the client believes it is answering.
                         A mismatch means a stale or repeated submission and is rejected.

        Returns:
            The state after the answer has been recorded.
        """
        with self._lock:
            question = self.current_question
            if question is None:
                raise SequenceError("All questions have been answered; no further answers are accepted")
            if question_id is not None and question_id != question.id:
                raise SequenceError(
                    f"Answer submitted for question {question_id} but question {question.id} is awaiting an answer"
                )

            option = self._resolve_option(question, choice)
            self._answers.append(Answer(
                question_id=question.id,
                question_text=question.text,
                chosen_option_text=option.text,
                axis=question.axis,
                score=option.score,
            ))
            state = self.state

        logger.debug(f"Recorded answer {state.answered}/{state.total} for question {question.id}")
        return state

    def finalize(self) -> Tuple[Answer, ...]:
        """Returns the completed answer sequence. Only valid once every question is answered."""
        if not self.is_complete:
            raise SequenceError(
                f"Session is not complete: {len(self._answers)} of {len(self._questions)} questions answered"
            )
        return tuple(self._answers)

    @staticmethod
    def _resolve_option(question: Question, choice: Union[int, Option]) -> Option:
        if isinstance(choice, Option):
            if choice not in question.options:
                raise InvalidSubmissionError(f"Option '{choice.text}' does not belong to question {question.id}")
            return choice
        if isinstance(choice, bool) or not isinstance(choice, int):
            raise InvalidSubmissionError(f"Invalid option choice {choice!r} for question {question.id}")
        if not 0 <= choice < len(question.options):
            raise InvalidSubmissionError(
                f"Option index {choice} is out of range for question {question.id} "
                f"(expected 0-{len(question.options) - 1})"
            )
        return question.options[choice]
