# models/quota_models.py
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class QuotaRecord(BaseModel):
    """Daily outbound email counter, one document per deployment"""
    model_config = ConfigDict(populate_by_name=True)

    date: Optional[str] = Field(default=None, description="Calendar day, YYYY-MM-DD; unset counts as today")
    count: int = Field(0, ge=0)
    last_reset: Optional[datetime] = Field(default=None, alias="lastReset")
    revision: int = Field(0, ge=0)

    @classmethod
    def from_document(cls, doc: Optional[Dict[str, Any]]) -> Optional["QuotaRecord"]:
        if not doc:
            return None
        return cls(
            date=doc.get("date") or None,
            count=doc.get("count") or 0,
            lastReset=doc.get("lastReset"),
            revision=doc.get("revision") or 0,
        )

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class QuotaReservation(BaseModel):
    count: int


class QuotaStatus(BaseModel):
    date: str
    count: int
    limit: int
    remaining: int
    exhausted: bool
