# services/scoring_service.py
"""
Scoring for the Online Learning Self-Assessment.

Subscale averages divide by the fixed group size, so an unanswered
question counts as 0. The total adds up every value received, including
keys outside the 45 known questions.
"""
from dataclasses import dataclass
from typing import Mapping, Union

from lib.survey_questions import SUBSCALES
from models.survey_models import ReadinessCategory, ScoreResult

Number = Union[int, float]


@dataclass(frozen=True)
class ScoringThresholds:
    ready: float = 190
    almost: float = 178
    need: float = 3.4


DEFAULT_THRESHOLDS = ScoringThresholds()

READINESS_LABELS = {
    ReadinessCategory.READY_TO_GO: "Ready to go",
    ReadinessCategory.ALMOST_THERE: "Almost there",
    ReadinessCategory.PROCEED_WITH_CAUTION: "Proceed with caution",
}

READINESS_TEXTS = {
    ReadinessCategory.READY_TO_GO: (
        "You are more prepared for online learning than 50-75 percent of your "
        "student peers. Congratulations!"
    ),
    ReadinessCategory.ALMOST_THERE: (
        "You may experience some difficulty with online courses. However, with "
        "some improvement in certain areas, you should be successful. Review your "
        "subscale scores below to identify areas for growth."
    ),
    ReadinessCategory.PROCEED_WITH_CAUTION: (
        "Individuals with a score in this range may need to acquire some new skills "
        "before proceeding with online courses. You may need to increase your reading "
        "and writing skills, learn some time management skills, or take an "
        "introduction to computers course. Look over the statements again to identify "
        "the areas in which you need the most help and start there."
    ),
}

NEED_TEXT = (
    "Your score indicates that your lifestyle (i.e., career, family structure, "
    "personal responsibilities, distance to higher education entities) may demand "
    "the flexibility that the online classroom can provide."
)

NO_NEED_TEXT = (
    "Your score suggests that you do not have a pressing need for online delivery "
    "of instruction. Online courses are just one of several options for you."
)


def subscale_average(responses: Mapping[str, Number], subscale: str) -> float:
    """Full precision average of one subscale, missing answers count as 0"""
    questions = SUBSCALES[subscale]["questions"]
    return sum(responses.get(q, 0) for q in questions) / len(questions)


def classify_readiness(total: Number, thresholds: ScoringThresholds = DEFAULT_THRESHOLDS) -> ReadinessCategory:
    if total >= thresholds.ready:
        return ReadinessCategory.READY_TO_GO
    elif total >= thresholds.almost:
        return ReadinessCategory.ALMOST_THERE
    else:
        return ReadinessCategory.PROCEED_WITH_CAUTION


def has_online_need(need_average: float, thresholds: ScoringThresholds = DEFAULT_THRESHOLDS) -> bool:
    return need_average >= thresholds.need


def compute_scores(
    responses: Mapping[str, Number],
    thresholds: ScoringThresholds = DEFAULT_THRESHOLDS
) -> ScoreResult:
    """
    Compute subscale averages, total and interpretation

    Args:
        responses: question id -> Likert answer
        thresholds: readiness and need cut-offs

    Returns:
        ScoreResult with averages rounded to 2 decimals
    """
    averages = {key: subscale_average(responses, key) for key in SUBSCALES}
    total = sum(responses.values())

    return ScoreResult(
        computer=round(averages["computer"], 2),
        independent=round(averages["independent"], 2),
        dependent=round(averages["dependent"], 2),
        need=round(averages["need"], 2),
        academic=round(averages["academic"], 2),
        total=total,
        readiness_category=classify_readiness(total, thresholds),
        has_need=has_online_need(averages["need"], thresholds),
    )


def readiness_label(category: ReadinessCategory) -> str:
    return READINESS_LABELS[category]


def readiness_text(category: ReadinessCategory) -> str:
    return READINESS_TEXTS[category]


def need_interpretation(has_need: bool) -> str:
    return NEED_TEXT if has_need else NO_NEED_TEXT


def needs_success_tips(scores: ScoreResult, thresholds: ScoringThresholds = DEFAULT_THRESHOLDS) -> bool:
    """Tips block is only shown below the 'almost there' band"""
    return scores.total < thresholds.almost
