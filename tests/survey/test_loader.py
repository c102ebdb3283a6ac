import copy

import pytest
import yaml

from services.survey_engine.loader import (
    DEFAULT_QUESTION_BANK_PATH,
    load_question_bank_data,
    load_question_bank_from_file,
)
from services.survey_engine.models import Axis, ConfigurationError, QuestionBank, QuestionBankError

MINIMAL_VALID_BANK = {
    "version": "1.0.0",
    "questions": [
        {
            "id": 1,
            "category": "Economy",
            "axis": "economy",
            "text": "Should taxes go down?",
            "options": [
                {"text": "Strongly no", "score": -2},
                {"text": "No", "score": -1},
                {"text": "Yes", "score": 1},
                {"text": "Strongly yes", "score": 2},
            ],
        },
        {
            "id": 2,
            "category": "Society",
            "axis": "society",
            "text": "Should rallies be restricted?",
            "options": [
                {"text": "Yes", "score": 2},
                {"text": "Somewhat", "score": 1},
                {"text": "Hardly", "score": -1},
                {"text": "Never", "score": -2},
            ],
        },
    ],
}


def create_temp_yaml(tmp_path, filename, content):
    filepath = tmp_path / filename
    with open(filepath, 'w') as f:
        yaml.dump(content, f)
    return filepath


# --- load_question_bank_data ---

def test_load_minimal_valid_bank():
    bank = load_question_bank_data(copy.deepcopy(MINIMAL_VALID_BANK))
    assert isinstance(bank, QuestionBank)
    assert len(bank) == 2
    assert bank.questions[0].axis is Axis.ECONOMY
    assert [o.score for o in bank.questions[1].options] == [2, 1, -1, -2]


def test_duplicate_question_id_rejected():
    data = copy.deepcopy(MINIMAL_VALID_BANK)
    data["questions"][1]["id"] = 1
    with pytest.raises(QuestionBankError, match="Duplicate question ID found: 1"):
        load_question_bank_data(data)


def test_wrong_option_count_rejected():
    data = copy.deepcopy(MINIMAL_VALID_BANK)
    data["questions"][0]["options"].pop()
    with pytest.raises(QuestionBankError, match="has 3 options, expected 4"):
        load_question_bank_data(data)


def test_weight_outside_range_rejected():
    data = copy.deepcopy(MINIMAL_VALID_BANK)
    data["questions"][0]["options"][0]["score"] = -3
    with pytest.raises(QuestionBankError, match="outside the allowed range"):
        load_question_bank_data(data)


def test_weight_range_follows_configured_maximum():
    data = copy.deepcopy(MINIMAL_VALID_BANK)
    data["questions"][0]["options"][0]["score"] = -3
    bank = load_question_bank_data(data, max_option_weight=3)
    assert bank.questions[0].options[0].score == -3


def test_unknown_axis_rejected():
    data = copy.deepcopy(MINIMAL_VALID_BANK)
    data["questions"][0]["axis"] = "culture"
    with pytest.raises(QuestionBankError, match="schema validation"):
        load_question_bank_data(data)


def test_empty_bank_rejected():
    with pytest.raises(QuestionBankError, match="no questions"):
        load_question_bank_data({"version": "1.0.0", "questions": []})


def test_question_bank_error_is_configuration_error():
    assert issubclass(QuestionBankError, ConfigurationError)


# --- load_question_bank_from_file ---

def test_load_from_file(tmp_path):
    path = create_temp_yaml(tmp_path, "bank.yml", MINIMAL_VALID_BANK)
    bank = load_question_bank_from_file(path)
    assert bank.version == "1.0.0"
    assert [q.id for q in bank.questions] == [1, 2]


def test_missing_file(tmp_path):
    with pytest.raises(QuestionBankError, match="File not found"):
        load_question_bank_from_file(tmp_path / "missing.yml")


def test_invalid_yaml(tmp_path):
    path = tmp_path / "broken.yml"
    path.write_text("questions: [unclosed")
    with pytest.raises(QuestionBankError, match="Error parsing YAML"):
        load_question_bank_from_file(path)


def test_empty_file(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("")
    with pytest.raises(QuestionBankError, match="empty or invalid"):
        load_question_bank_from_file(path)


def test_packaged_bank_is_valid():
    bank = load_question_bank_from_file(DEFAULT_QUESTION_BANK_PATH)
    assert len(bank) == 40
    for axis in Axis:
        assert sum(1 for q in bank.questions if q.axis is axis) == 10
    for question in bank.questions:
        assert sorted(o.score for o in question.options) == [-2, -1, 1, 2]
