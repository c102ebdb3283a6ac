import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml
from pydantic import ValidationError

from services.survey_engine.models import (
    OPTIONS_PER_QUESTION,
    QuestionBank,
    QuestionBankError,
)

logger = logging.getLogger(__name__)

DEFAULT_QUESTION_BANK_PATH = Path(__file__).parent / "question_bank.yml"


def load_question_bank_data(data: Dict[str, Any], max_option_weight: int = 2) -> QuestionBank:
    """
    Validates the raw dictionary data against the QuestionBank model
    and performs the checks pydantic cannot express on its own.
    """
    try:
        bank = QuestionBank.model_validate(data)
    except ValidationError as e:
        raise QuestionBankError(f"Question bank failed schema validation: {e}") from e

    if not bank.questions:
        raise QuestionBankError("Question bank contains no questions")

    question_ids = set()
    for question in bank.questions:
        if question.id in question_ids:
            raise QuestionBankError(f"Duplicate question ID found: {question.id}")
        question_ids.add(question.id)

        if len(question.options) != OPTIONS_PER_QUESTION:
            raise QuestionBankError(
                f"Question '{question.id}' has {len(question.options)} options, "
                f"expected {OPTIONS_PER_QUESTION}"
            )
        for option in question.options:
            if abs(option.score) > max_option_weight:
                raise QuestionBankError(
                    f"Option '{option.text}' of question '{question.id}' has weight {option.score}, "
                    f"outside the allowed range -{max_option_weight}..+{max_option_weight}"
                )

    return bank


def load_question_bank_from_file(
    file_path: Union[str, Path] = DEFAULT_QUESTION_BANK_PATH,
    max_option_weight: int = 2,
) -> QuestionBank:
    """
    Loads the question bank from a YAML file, validates it,
    and returns a QuestionBank object.
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise QuestionBankError(f"File not found: {file_path}")
    except yaml.YAMLError as e:
        raise QuestionBankError(f"Error parsing YAML file {file_path}: {e}")

    if not isinstance(data, dict):
        raise QuestionBankError(f"YAML file is empty or invalid: {file_path}")

    bank = load_question_bank_data(data, max_option_weight=max_option_weight)
    logger.info(f"Loaded question bank version {bank.version} with {len(bank)} questions from {file_path}")
    return bank
