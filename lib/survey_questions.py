# lib/survey_questions.py
# Online Learning Self-Assessment: question ids grouped by subscale

SUBSCALES = {
    "computer": {
        "label": "Computer Skills",
        "questions": [f"a{i}" for i in range(1, 12)],
    },
    "independent": {
        "label": "Independent Learning Skills",
        "questions": [f"b{i}" for i in range(1, 11)],
    },
    "dependent": {
        "label": "Dependent Learning Skills",
        "questions": [f"c{i}" for i in range(1, 7)],
    },
    "need": {
        "label": "Need for Online Delivery",
        "questions": [f"d{i}" for i in range(1, 6)],
    },
    "academic": {
        "label": "Academic Skills",
        "questions": [f"e{i}" for i in range(1, 14)],
    },
}

# Order used when listing subscales in emails
SUBSCALE_DISPLAY_ORDER = ["computer", "independent", "dependent", "academic", "need"]

QUESTION_IDS = [q for subscale in SUBSCALES.values() for q in subscale["questions"]]


def subscale_of(question_id: str):
    """Return the subscale key a question belongs to, or None"""
    for key, subscale in SUBSCALES.items():
        if question_id in subscale["questions"]:
            return key
    return None
