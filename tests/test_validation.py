import pytest

from conftest import full_responses, submission
from api.survey.utils import is_valid_email, validate_submission
from shared.errors import InvalidArgument


def test_valid_submission_is_trimmed():
    result = validate_submission(submission(studentName="  Jane Doe ", studentEmail=" student@example.edu "))

    assert result.student_name == "Jane Doe"
    assert result.student_email == "student@example.edu"
    assert result.professor_email == "prof@example.edu"
    assert result.time_spent == "12 minutes 5 seconds"
    assert result.responses == full_responses()


@pytest.mark.parametrize("value,expected", [
    ("student@example.edu", True),
    ("a@b.co", True),
    ("first.last@sub.example.org", True),
    ("not-an-email", False),
    ("missing-domain@", False),
    ("no-tld@example", False),
    ("spaces in@example.com", False),
    ("two@@example.com", False),
    ("", False),
    (None, False),
])
def test_email_pattern(value, expected):
    assert is_valid_email(value) is expected


@pytest.mark.parametrize("field", ["studentEmail", "professorEmail"])
def test_invalid_email_is_rejected(field):
    with pytest.raises(InvalidArgument) as exc_info:
        validate_submission(submission(**{field: "not-an-email"}))

    assert exc_info.value.code == "invalid-argument"
    assert any(field in error and "not a valid email" in error for error in exc_info.value.errors)


@pytest.mark.parametrize("field", ["studentName", "studentEmail", "professorEmail", "timeSpent"])
def test_missing_required_field(field):
    data = submission()
    del data[field]

    with pytest.raises(InvalidArgument) as exc_info:
        validate_submission(data)

    assert len(exc_info.value.errors) == 1
    assert f"({field}) is required" in exc_info.value.errors[0]


def test_blank_name_is_rejected():
    with pytest.raises(InvalidArgument) as exc_info:
        validate_submission(submission(studentName="   "))

    assert "studentName" in exc_info.value.errors[0]


def test_all_problems_are_reported_together():
    with pytest.raises(InvalidArgument) as exc_info:
        validate_submission({"studentEmail": "nope", "timeSpent": ""})

    errors = exc_info.value.errors
    assert len(errors) == 5
    assert exc_info.value.to_dict() == {"code": "invalid-argument", "details": errors}


def test_responses_required_by_default():
    data = submission()
    del data["responses"]

    with pytest.raises(InvalidArgument) as exc_info:
        validate_submission(data)

    assert "responses" in exc_info.value.errors[0]


def test_responses_optional_when_not_required():
    data = submission()
    del data["responses"]

    assert validate_submission(data, require_responses=False).responses is None


def test_supplied_responses_are_checked_even_when_optional():
    with pytest.raises(InvalidArgument):
        validate_submission(submission(responses={"a1": 3}), require_responses=False)


def test_missing_question_is_reported():
    responses = full_responses()
    del responses["c4"]

    with pytest.raises(InvalidArgument) as exc_info:
        validate_submission(submission(responses=responses))

    assert exc_info.value.errors == ["Question c4 (Dependent Learning Skills) is not answered"]


def test_unknown_question_is_rejected():
    with pytest.raises(InvalidArgument) as exc_info:
        validate_submission(submission(responses=full_responses(f1=3)))

    assert exc_info.value.errors == ["Unknown question ids: f1"]


@pytest.mark.parametrize("answer", [0, 6, -1, "3", 3.5, True, None])
def test_answer_must_be_a_likert_integer(answer):
    with pytest.raises(InvalidArgument) as exc_info:
        validate_submission(submission(responses=full_responses(e13=answer)))

    assert len(exc_info.value.errors) == 1
    assert exc_info.value.errors[0].startswith("Question e13")


def test_custom_likert_range():
    result = validate_submission(submission(responses=full_responses(7)), likert_min=1, likert_max=7)

    assert result.responses["a1"] == 7


def test_responses_must_be_a_mapping():
    with pytest.raises(InvalidArgument) as exc_info:
        validate_submission(submission(responses=[4] * 45))

    assert "responses must be an object" in exc_info.value.errors[0]


def test_body_must_be_an_object():
    with pytest.raises(InvalidArgument):
        validate_submission(["not", "a", "dict"])
