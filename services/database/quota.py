"""
Quota store - the single daily email counter document
"""
import threading
from typing import Callable, Optional
import logging

from pymongo.errors import DuplicateKeyError

from models.quota_models import QuotaRecord
from shared.errors import QuotaContention
from .base import BaseMongoService

logger = logging.getLogger(__name__)

QuotaUpdate = Callable[[Optional[QuotaRecord]], QuotaRecord]


class QuotaStore:
    """
    Transactional holder of one QuotaRecord

    transactional_update runs `update` against the current record and
    writes its result atomically. If `update` raises, nothing is written.
    """

    def get(self) -> Optional[QuotaRecord]:
        raise NotImplementedError

    def transactional_update(self, update: QuotaUpdate) -> QuotaRecord:
        raise NotImplementedError


class MemoryQuotaStore(QuotaStore):
    """Process-local store, for development and tests"""

    def __init__(self, record: Optional[QuotaRecord] = None):
        self._record = record
        self._lock = threading.Lock()

    def get(self) -> Optional[QuotaRecord]:
        with self._lock:
            return self._record

    def transactional_update(self, update: QuotaUpdate) -> QuotaRecord:
        with self._lock:
            new_record = update(self._record)
            revision = self._record.revision + 1 if self._record else 1
            self._record = new_record.model_copy(update={"revision": revision})
            return self._record


class MongoQuotaStore(BaseMongoService, QuotaStore):
    """
    Quota document in MongoDB, updated with optimistic concurrency

    Every write bumps `revision`; a write only lands if the revision it
    read is still current, otherwise the update is re-run on fresh data.
    """

    def __init__(
        self,
        collection_name: str,
        document_id: str,
        max_retries: int = 5,
        uri: Optional[str] = None,
        database: Optional[str] = None
    ):
        super().__init__(collection_name, uri=uri, database=database)
        self.document_id = document_id
        self.max_retries = max_retries

    def get(self) -> Optional[QuotaRecord]:
        self.ensure_connected()
        doc = self.collection.find_one({"_id": self.document_id})
        return QuotaRecord.from_document(doc)

    def transactional_update(self, update: QuotaUpdate) -> QuotaRecord:
        self.ensure_connected()

        for attempt in range(1, self.max_retries + 1):
            current = QuotaRecord.from_document(self.collection.find_one({"_id": self.document_id}))
            new_record = update(current)

            if current is None:
                new_record = new_record.model_copy(update={"revision": 1})
                try:
                    self.collection.insert_one({"_id": self.document_id, **new_record.to_document()})
                    return new_record
                except DuplicateKeyError:
                    logger.debug(f"Quota document created concurrently, retrying (attempt {attempt})")
                    continue

            new_record = new_record.model_copy(update={"revision": current.revision + 1})
            # documents written before revisions existed have no revision field
            expected = current.revision if current.revision else {"$in": [0, None]}
            result = self.collection.update_one(
                {"_id": self.document_id, "revision": expected},
                {"$set": new_record.to_document()}
            )
            if result.matched_count == 1:
                return new_record

            logger.debug(f"Quota revision {current.revision} is stale, retrying (attempt {attempt})")

        logger.error(f"Quota update gave up after {self.max_retries} attempts")
        raise QuotaContention()
