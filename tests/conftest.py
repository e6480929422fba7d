from datetime import datetime, timezone

import pytest

from config.settings import Settings
from lib.survey_questions import QUESTION_IDS
from services.database.quota import MemoryQuotaStore
from services.mail_service import MailTransport
from services.quota_service import QuotaCounter

# 3:04 PM in New York (EDT)
FIXED_NOW = datetime(2026, 10, 18, 19, 4, tzinfo=timezone.utc)
TODAY = "2026-10-18"
YESTERDAY = "2026-10-17"


class RecordingTransport(MailTransport):
    """Keeps sent emails in memory; can be told to fail"""

    def __init__(self, fail_with=None, fail_on_call=1):
        self.sent = []
        self.fail_with = fail_with
        self.fail_on_call = fail_on_call

    def send(self, email):
        if self.fail_with is not None and len(self.sent) + 1 >= self.fail_on_call:
            raise self.fail_with
        self.sent.append(email)
        return f"email-{len(self.sent)}"


def full_responses(value=4, **overrides):
    responses = {question_id: value for question_id in QUESTION_IDS}
    responses.update(overrides)
    return responses


def submission(**overrides):
    data = {
        "professorEmail": "prof@example.edu",
        "studentEmail": "student@example.edu",
        "studentName": "Jane Doe",
        "timeSpent": "12 minutes 5 seconds",
        "responses": full_responses(),
    }
    data.update(overrides)
    return data


def fixed_clock():
    return FIXED_NOW


@pytest.fixture
def store():
    return MemoryQuotaStore()


@pytest.fixture
def quota(store):
    return QuotaCounter(store, limit=90, tz="UTC", clock=fixed_clock)


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def test_settings():
    settings = Settings()
    settings.ENVIRONMENT = "testing"
    settings.QUOTA_BACKEND = "memory"
    settings.QUOTA_DAILY_LIMIT = 90
    settings.QUOTA_TIMEZONE = "UTC"
    settings.REFERENCE_TIMEZONE = "America/New_York"
    settings.MAIL_FROM = "Student Survey <noreply@example.com>"
    settings.NOTIFY_STUDENT_TOO = True
    settings.REQUIRE_RESPONSES = True
    settings.LIKERT_MIN = 1
    settings.LIKERT_MAX = 5
    settings.CORS_ORIGINS = ["*"]
    return settings


@pytest.fixture
def app(test_settings, store, transport):
    from main import create_app

    app = create_app(test_settings, quota_store=store, mail_transport=transport, clock=fixed_clock)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


