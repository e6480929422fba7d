# models/__init__.py
from .survey_models import ReadinessCategory, ScoreResult
from .quota_models import QuotaRecord, QuotaReservation, QuotaStatus

__all__ = [
    "ReadinessCategory",
    "ScoreResult",
    "QuotaRecord",
    "QuotaReservation",
    "QuotaStatus"
]
