# services/quota_service.py
from datetime import date, datetime, timezone
from typing import Callable, Optional
from zoneinfo import ZoneInfo
import logging

from models.quota_models import QuotaRecord, QuotaReservation, QuotaStatus
from shared.errors import QuotaExceeded
from services.database.quota import QuotaStore

logger = logging.getLogger(__name__)

DEFAULT_DAILY_LIMIT = 90


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class QuotaCounter:
    """
    Daily cap on outbound emails.

    Each calendar day starts under quota; once `limit` reservations are
    made the day is exhausted until the date rolls over.
    """

    def __init__(
        self,
        store: QuotaStore,
        limit: int = DEFAULT_DAILY_LIMIT,
        tz: str = "UTC",
        clock: Callable[[], datetime] = utc_now
    ):
        self.store = store
        self.limit = limit
        self.tz = ZoneInfo(tz)
        self.clock = clock

    def today(self) -> date:
        return self.clock().astimezone(self.tz).date()

    @staticmethod
    def _is_current(record: Optional[QuotaRecord], day: str) -> bool:
        # A record with no date is treated as today's
        return record is not None and (record.date or day) == day

    def _effective_count(self, record: Optional[QuotaRecord], day: str) -> int:
        if not self._is_current(record, day):
            return 0
        return record.count

    def try_reserve_slot(self, today: Optional[date] = None) -> QuotaReservation:
        """
        Atomically take one slot for `today`

        Raises:
            QuotaExceeded: the day's limit is already used up (nothing written)
        """
        day = (today or self.today()).isoformat()

        def reserve(record: Optional[QuotaRecord]) -> QuotaRecord:
            count = self._effective_count(record, day)
            if count >= self.limit:
                raise QuotaExceeded()

            last_reset = record.last_reset if record else None
            if not self._is_current(record, day):
                last_reset = self.clock()
                logger.info(f"Quota reset for {day}")

            return QuotaRecord(date=day, count=count + 1, last_reset=last_reset)

        try:
            record = self.store.transactional_update(reserve)
        except QuotaExceeded:
            logger.warning(f"Daily email limit of {self.limit} reached for {day}")
            raise

        return QuotaReservation(count=record.count)

    def status(self, today: Optional[date] = None) -> QuotaStatus:
        day = (today or self.today()).isoformat()
        count = self._effective_count(self.store.get(), day)
        return QuotaStatus(
            date=day,
            count=count,
            limit=self.limit,
            remaining=max(self.limit - count, 0),
            exhausted=count >= self.limit
        )
