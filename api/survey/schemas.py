# api/survey/schemas.py
from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from models.survey_models import ScoreResult


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# REQUEST SCHEMAS
class SurveySubmission(CamelModel):
    """Validated body of POST /notify"""
    professor_email: str
    student_email: str
    student_name: str
    time_spent: str
    responses: Optional[Dict[str, int]] = Field(None, description="Question id -> Likert answer")


# RESPONSE SCHEMAS
class DispatchSummary(CamelModel):
    """Response data for a dispatched survey notification"""
    success: bool = True
    message: str
    professor_email_id: str
    student_email_id: Optional[str] = None
    scores: Optional[ScoreResult] = None
