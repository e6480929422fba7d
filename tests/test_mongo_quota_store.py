from datetime import date
from unittest.mock import MagicMock

import pytest
from pymongo.errors import DuplicateKeyError

from conftest import FIXED_NOW, TODAY, YESTERDAY, fixed_clock
from services.database.quota import MongoQuotaStore
from services.quota_service import QuotaCounter
from shared.errors import QuotaContention, QuotaExceeded

DAY = date(2026, 10, 18)


def matched(n):
    result = MagicMock()
    result.matched_count = n
    return result


@pytest.fixture
def collection():
    return MagicMock()


@pytest.fixture
def mongo_store(collection):
    store = MongoQuotaStore("metadata", "emailCount", max_retries=3,
                            uri="mongodb://localhost:27017", database="survey_test")
    store.collection = collection
    store._connected = True
    return store


@pytest.fixture
def counter(mongo_store):
    return QuotaCounter(mongo_store, limit=90, clock=fixed_clock)


def test_first_write_inserts_document(counter, collection):
    collection.find_one.return_value = None

    assert counter.try_reserve_slot(DAY).count == 1

    collection.insert_one.assert_called_once_with({
        "_id": "emailCount",
        "date": TODAY,
        "count": 1,
        "lastReset": FIXED_NOW,
        "revision": 1,
    })
    collection.update_one.assert_not_called()


def test_update_is_conditional_on_revision(counter, collection):
    collection.find_one.return_value = {"_id": "emailCount", "date": TODAY, "count": 5, "revision": 7}
    collection.update_one.return_value = matched(1)

    assert counter.try_reserve_slot(DAY).count == 6

    query, update = collection.update_one.call_args[0]
    assert query == {"_id": "emailCount", "revision": 7}
    assert update["$set"]["count"] == 6
    assert update["$set"]["revision"] == 8


def test_document_without_revision_is_matched(counter, collection):
    collection.find_one.return_value = {"_id": "emailCount", "date": YESTERDAY, "count": 90}
    collection.update_one.return_value = matched(1)

    assert counter.try_reserve_slot(DAY).count == 1

    query, update = collection.update_one.call_args[0]
    assert query == {"_id": "emailCount", "revision": {"$in": [0, None]}}
    assert update["$set"]["date"] == TODAY


def test_lost_race_retries_on_fresh_data(counter, collection):
    collection.find_one.side_effect = [
        {"_id": "emailCount", "date": TODAY, "count": 3, "revision": 3},
        {"_id": "emailCount", "date": TODAY, "count": 4, "revision": 4},
    ]
    collection.update_one.side_effect = [matched(0), matched(1)]

    assert counter.try_reserve_slot(DAY).count == 5
    assert collection.update_one.call_count == 2


def test_concurrent_insert_falls_back_to_update(counter, collection):
    collection.find_one.side_effect = [
        None,
        {"_id": "emailCount", "date": TODAY, "count": 1, "revision": 1},
    ]
    collection.insert_one.side_effect = DuplicateKeyError("duplicate key")
    collection.update_one.return_value = matched(1)

    assert counter.try_reserve_slot(DAY).count == 2


def test_gives_up_after_max_retries(counter, collection):
    collection.find_one.return_value = {"_id": "emailCount", "date": TODAY, "count": 3, "revision": 3}
    collection.update_one.return_value = matched(0)

    with pytest.raises(QuotaContention) as exc_info:
        counter.try_reserve_slot(DAY)

    assert exc_info.value.code == "internal"
    assert collection.update_one.call_count == 3


def test_exceeded_quota_writes_nothing(counter, collection):
    collection.find_one.return_value = {"_id": "emailCount", "date": TODAY, "count": 90, "revision": 90}

    with pytest.raises(QuotaExceeded):
        counter.try_reserve_slot(DAY)

    collection.update_one.assert_not_called()
    collection.insert_one.assert_not_called()


def test_get_reads_the_document(mongo_store, collection):
    collection.find_one.return_value = {"_id": "emailCount", "date": TODAY, "count": 12, "revision": 12}

    record = mongo_store.get()

    assert record.date == TODAY
    assert record.count == 12
    collection.find_one.assert_called_once_with({"_id": "emailCount"})


def test_get_missing_document(mongo_store, collection):
    collection.find_one.return_value = None

    assert mongo_store.get() is None


def test_document_without_date_keeps_its_count(counter, collection):
    collection.find_one.return_value = {"_id": "emailCount", "count": 5, "revision": 5}
    collection.update_one.return_value = matched(1)

    assert counter.try_reserve_slot(DAY).count == 6

    query, update = collection.update_one.call_args[0]
    assert query == {"_id": "emailCount", "revision": 5}
    assert update["$set"]["date"] == TODAY
    assert update["$set"]["count"] == 6
