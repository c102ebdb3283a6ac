# services/survey_engine/scoring_engine.py
# Turns a completed answer sequence into normalized per-axis scores.

import logging
import math
from fractions import Fraction
from typing import Dict, Iterable, Optional, Sequence, Set

from .models import Answer, Axis, AxisScores, AxisTally, InvalidSubmissionError, QuestionBank

logger = logging.getLogger(__name__)

# --- Constants ---

MAX_OPTION_WEIGHT = 2   # Largest absolute weight a single option may carry
NEUTRAL_SCORE = 50      # Normalized value for an axis no sampled question touched
MIN_SCORE = 0
MAX_SCORE = 100

# --- Input Verification ---

def verify_completed_answers(
    answers: Sequence[Answer],
    bank: QuestionBank,
    expected_count: Optional[int] = None,
) -> None:
    """
    Checks that client-supplied answers could have come from a completed session.

    Every answer must name a distinct question of the bank and repeat that question's
    text, axis and one of its options (text and score) exactly. When expected_count is
    given the sequence must have exactly that many answers.

    Raises:
        InvalidSubmissionError: describing the first mismatch found.
    """
    if expected_count is not None and len(answers) != expected_count:
        raise InvalidSubmissionError(
            f"Expected {expected_count} answers for a completed survey, got {len(answers)}"
        )

    questions = {q.id: q for q in bank.questions}
    seen: Set[int] = set()
    for answer in answers:
        qid = answer.question_id
        if qid in seen:
            raise InvalidSubmissionError(f"Question {qid} is answered more than once")
        seen.add(qid)

        question = questions.get(qid)
        if question is None:
            raise InvalidSubmissionError(f"Question {qid} is not in the question bank")
        if answer.axis != question.axis or answer.question_text != question.text:
            raise InvalidSubmissionError(f"Answer to question {qid} does not match the question bank")
        if not any(o.text == answer.chosen_option_text and o.score == answer.score for o in question.options):
            raise InvalidSubmissionError(f"Answer to question {qid} does not match any of its options")


# --- Scoring Functions ---

def tally(answers: Iterable[Answer], max_weight: int = MAX_OPTION_WEIGHT) -> AxisTally:
    """
    Accumulates raw signed sums and the maximum reachable magnitude per axis.

    The magnitude grows by the fixed max_weight for every answer, regardless of the
    option chosen, so an axis answered only on one side is not compressed.
    """
    raw: Dict[Axis, int] = {axis: 0 for axis in Axis}
    max_magnitude: Dict[Axis, int] = {axis: 0 for axis in Axis}

    for answer in answers:
        if abs(answer.score) > max_weight:
            raise InvalidSubmissionError(
                f"Answer to question {answer.question_id} has weight {answer.score}, "
                f"outside -{max_weight}..+{max_weight}"
            )
        raw[answer.axis] += answer.score
        max_magnitude[answer.axis] += max_weight

    return AxisTally(raw=raw, max_magnitude=max_magnitude)


def round_half_up(value: Fraction) -> int:
    """Rounds an exact fraction to the nearest integer, ties toward +infinity."""
    return math.floor(value + Fraction(1, 2))


def normalize_axis(raw: int, max_magnitude: int) -> int:
    """
    Maps a raw axis sum in [-max_magnitude, max_magnitude] onto [0, 100].

    Uses exact rational arithmetic so the result for tied inputs never depends on
    float representation: ((raw / max_magnitude) + 1) * 50, rounded half up.
    """
    if max_magnitude == 0:
        return NEUTRAL_SCORE
    scaled = (Fraction(raw, max_magnitude) + 1) * NEUTRAL_SCORE
    return max(MIN_SCORE, min(MAX_SCORE, round_half_up(scaled)))


def normalize(axis_tally: AxisTally) -> AxisScores:
    return AxisScores.from_mapping({
        axis: normalize_axis(axis_tally.raw[axis], axis_tally.max_magnitude[axis])
        for axis in Axis
    })


def score(answers: Iterable[Answer], max_weight: int = MAX_OPTION_WEIGHT) -> AxisScores:
    """Computes normalized AxisScores for a completed answer sequence."""
    axis_tally = tally(answers, max_weight=max_weight)
    scores = normalize(axis_tally)
    logger.debug(f"Raw axis sums {axis_tally.raw} normalized to {scores.model_dump()}")
    return scores
