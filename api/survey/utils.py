# ============== UTILS ==============
import re
from typing import Any, Dict, List, Mapping

from lib.survey_questions import QUESTION_IDS, SUBSCALES, subscale_of
from shared.errors import InvalidArgument
from .schemas import SurveySubmission

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

LIKERT_MIN = 1
LIKERT_MAX = 5


def is_valid_email(value: Any) -> bool:
    return isinstance(value, str) and bool(EMAIL_PATTERN.match(value.strip()))


def _required_text(data: Mapping[str, Any], field: str, label: str, errors: List[str]) -> str:
    value = data.get(field)
    if not isinstance(value, str) or not value.strip():
        errors.append(f"{label} ({field}) is required")
        return ""
    return value.strip()


def _required_email(data: Mapping[str, Any], field: str, label: str, errors: List[str]) -> str:
    value = _required_text(data, field, label, errors)
    if value and not is_valid_email(value):
        errors.append(f"{label} ({field}) is not a valid email address")
    return value


def validate_responses(
    responses: Any,
    errors: List[str],
    likert_min: int = LIKERT_MIN,
    likert_max: int = LIKERT_MAX
) -> Dict[str, int]:
    """
    Check the answers cover every question with a Likert value

    Appends one message per problem to `errors`.
    """
    if not isinstance(responses, Mapping):
        errors.append("responses must be an object mapping question ids to answers")
        return {}

    validated = {}
    for question_id in QUESTION_IDS:
        if question_id not in responses:
            label = SUBSCALES[subscale_of(question_id)]["label"]
            errors.append(f"Question {question_id} ({label}) is not answered")
            continue

        answer = responses[question_id]
        if isinstance(answer, bool) or not isinstance(answer, int):
            errors.append(f"Question {question_id} must be a number")
        elif not likert_min <= answer <= likert_max:
            errors.append(f"Question {question_id} must be between {likert_min} and {likert_max}")
        else:
            validated[question_id] = answer

    unknown = sorted(str(key) for key in responses if key not in QUESTION_IDS)
    if unknown:
        errors.append(f"Unknown question ids: {', '.join(unknown)}")

    return validated


def validate_submission(
    data: Any,
    require_responses: bool = True,
    likert_min: int = LIKERT_MIN,
    likert_max: int = LIKERT_MAX
) -> SurveySubmission:
    """
    Validate a raw notification request

    Raises:
        InvalidArgument: listing every missing or malformed field
    """
    if not isinstance(data, Mapping):
        raise InvalidArgument(["Request body must be a JSON object"])

    errors: List[str] = []

    student_name = _required_text(data, "studentName", "Student name", errors)
    student_email = _required_email(data, "studentEmail", "Student email", errors)
    professor_email = _required_email(data, "professorEmail", "Professor email", errors)
    time_spent = _required_text(data, "timeSpent", "Time spent", errors)

    responses = None
    if data.get("responses") is not None:
        responses = validate_responses(data["responses"], errors, likert_min, likert_max)
    elif require_responses:
        errors.append("Survey responses (responses) are required")

    if errors:
        raise InvalidArgument(errors)

    return SurveySubmission(
        professor_email=professor_email,
        student_email=student_email,
        student_name=student_name,
        time_spent=time_spent,
        responses=responses,
    )
