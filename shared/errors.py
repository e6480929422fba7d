# shared/errors.py
from typing import Any, Dict, List, Optional


class SurveyError(Exception):
    """Base error with a stable code that is safe to show to callers"""

    code = "internal"
    http_status = 500
    default_message = "An unexpected error occurred. Please try again."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code}


class InvalidArgument(SurveyError):
    code = "invalid-argument"
    http_status = 400
    default_message = "Invalid survey submission"

    def __init__(self, errors: List[str], message: Optional[str] = None):
        self.errors = list(errors)
        super().__init__(message or f"{self.default_message}: {'; '.join(self.errors)}")

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "details": self.errors}


class QuotaExceeded(SurveyError):
    code = "resource-exhausted"
    http_status = 429
    default_message = "Daily email limit reached. Please try again tomorrow."


class TransportFailure(SurveyError):
    default_message = "Failed to send email. Please try again later."


class QuotaContention(SurveyError):
    """Optimistic quota update kept losing races"""


class InternalError(SurveyError):
    pass
