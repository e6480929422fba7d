# api/base/base_schemas.py
from typing import Generic, Optional, TypeVar
from pydantic import BaseModel, Field

from shared.errors import SurveyError

T = TypeVar("T")

class BaseResponse(BaseModel, Generic[T]):
    status: str = Field(..., description="'success' or 'error'")
    message: Optional[str] = Field(None, description="Human-friendly message")
    errors: Optional[T] = Field(None, description="Error details")
    data: Optional[T] = Field(None, description="Payload data")

    @classmethod
    def success(cls, data: Optional[T] = None, message: Optional[str] = None):
        return cls(status="success", message=message, data=data)

    @classmethod
    def error(cls, message: str, errors: Optional[T] = None):
        return cls(status="error", message=message, errors=errors)

    @classmethod
    def from_exception(cls, exc: SurveyError):
        return cls.error(message=exc.message, errors=exc.to_dict())

    def to_json(self) -> dict:
        return self.model_dump(exclude_none=True)
