#!/usr/bin/env python3
"""
Manual smoke test - posts a sample survey to a running server

Usage:
    python testing.py prof@example.edu student@example.edu "Test Student"
"""

import sys
import json
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from lib.survey_questions import QUESTION_IDS

BASE_URL = "http://127.0.0.1:5001"


def create_session():
    """Session that retries connection hiccups (never on POST rate limits)"""
    session = requests.Session()
    session.headers.update({
        'Accept': 'application/json',
        'Content-Type': 'application/json',
    })

    retry_strategy = Retry(
        total=3,
        backoff_factor=1,
        status_forcelist=[502, 503, 504],
        allowed_methods=["GET"],
    )

    adapter = HTTPAdapter(max_retries=retry_strategy)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    return session


def print_response(test_name, response):
    """Print response in a readable format"""
    print(f"\n{'='*50}")
    print(f"TEST: {test_name}")
    print(f"{'='*50}")
    print(f"Status Code: {response.status_code}")

    try:
        print(json.dumps(response.json(), indent=2, ensure_ascii=False))
    except ValueError:
        print(response.text[:500])

    print(f"{'='*50}")


def sample_submission(professor_email, student_email, student_name, with_responses=True):
    payload = {
        "professorEmail": professor_email,
        "studentEmail": student_email,
        "studentName": student_name,
        "timeSpent": "2 minutes 30 seconds",
    }
    if with_responses:
        payload["responses"] = {question_id: 4 for question_id in QUESTION_IDS}
    return payload


def main(argv):
    professor_email = argv[1] if len(argv) > 1 else "test@example.com"
    student_email = argv[2] if len(argv) > 2 else "student@example.com"
    student_name = argv[3] if len(argv) > 3 else "Test Student"

    session = create_session()

    print_response("Quota before", session.get(f"{BASE_URL}/api/v1/survey/quota", timeout=10))

    response = session.post(
        f"{BASE_URL}/api/v1/survey/notify",
        json=sample_submission(professor_email, student_email, student_name),
        timeout=30,
    )
    print_response("Send survey notification", response)

    print_response("Quota after", session.get(f"{BASE_URL}/api/v1/survey/quota", timeout=10))

    return 0 if response.status_code == 200 else 1


if __name__ == "__main__":
    sys.exit(main(sys.argv))
