# models/survey_models.py
from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ReadinessCategory(str, Enum):
    READY_TO_GO = "ReadyToGo"
    ALMOST_THERE = "AlmostThere"
    PROCEED_WITH_CAUTION = "ProceedWithCaution"


class ScoreResult(BaseModel):
    """Subscale averages (2 decimals), raw total and derived interpretation"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    computer: float
    independent: float
    dependent: float
    need: float
    academic: float
    # Sum of every value received, not only the 45 known questions
    total: Union[int, float]
    readiness_category: ReadinessCategory
    has_need: bool = Field(..., description="Need for Online Delivery average >= need threshold")

    def subscale(self, key: str) -> float:
        return getattr(self, key)
