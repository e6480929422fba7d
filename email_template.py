# email_template.py
from dataclasses import dataclass
from datetime import datetime
from html import escape
from typing import Optional
from zoneinfo import ZoneInfo

from lib.survey_questions import SUBSCALES, SUBSCALE_DISPLAY_ORDER
from models.survey_models import ScoreResult
from services.scoring_service import (
    need_interpretation,
    needs_success_tips,
    readiness_label,
    readiness_text,
)

SURVEY_NAME = "Online Learning Self-Assessment Survey"

NEED_NOTE = (
    "Note: Unlike the other subscales, the Need for Online Delivery score identifies "
    "a need instead of a skill. If your score is 3.4 or higher, it indicates that your "
    "lifestyle may demand the flexibility that the online classroom can provide."
)

SUCCESS_TIPS = [
    ("Time Management",
     "Consider if you have adequate time for online learning. Although online education "
     "offers accessibility and convenience, you need to create a schedule that allows you "
     "to focus on your studies while attending to other life commitments."),
    ("Discipline and Determination",
     "Online learning requires self-discipline. Make sure you can avoid distractions during "
     "study time and allot time for relaxation and extra-curricular activities that enrich "
     "your learning experience."),
]

BASE_STYLE = """
    body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; }
    .container { max-width: 600px; margin: 0 auto; padding: 20px; }
    .content { margin: 20px 0; }
    .info-row { margin: 10px 0; }
    .label { font-weight: bold; }
    .subscale { margin: 10px 0; padding: 10px; background-color: #fff; border: 1px solid #ddd; }
    .subscale-score { float: right; color: #4CAF50; font-weight: bold; }
"""


@dataclass(frozen=True)
class RenderedEmail:
    subject: str
    html: str
    text: str


def format_timestamp(moment: datetime, tz: str) -> str:
    """Long date, short time, e.g. 'October 18, 2026 at 3:04 PM'"""
    local = moment.astimezone(ZoneInfo(tz))
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return f"{local:%B} {local.day}, {local.year} at {hour}:{local:%M} {meridiem}"


def _subscale_rows(scores: ScoreResult):
    return [(SUBSCALES[key]["label"], f"{scores.subscale(key):.2f}") for key in SUBSCALE_DISPLAY_ORDER]


def _page(header_style: str, title: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html>
<head>
  <style>{BASE_STYLE}
    .header {{ {header_style} padding: 20px; border-radius: 5px; }}
  </style>
</head>
<body>
  <div class="container">
    <div class="header"><h2>{title}</h2></div>
    <div class="content">
{body}
    </div>
  </div>
</body>
</html>
"""


def generate_professor_email(
    student_name: str,
    student_email: str,
    time_spent: str,
    submitted_at: str,
    scores: Optional[ScoreResult] = None
) -> RenderedEmail:
    """Completion notice for the professor, with a score summary when available"""
    rows = [
        ("Student Name", student_name),
        ("Student Email", student_email),
        ("Time Spent", time_spent),
        ("Submitted", submitted_at),
    ]
    if scores is not None:
        rows.append(("Total Score", str(scores.total)))
        rows.append(("Readiness", readiness_label(scores.readiness_category)))

    html_rows = "\n".join(
        f'      <div class="info-row"><span class="label">{escape(label)}:</span> {escape(value)}</div>'
        for label, value in rows
    )
    text_rows = "\n".join(f"{label}: {value}" for label, value in rows)

    html_subscales = ""
    text_subscales = ""
    if scores is not None:
        subscales = _subscale_rows(scores)
        html_subscales = "\n      <h3>Subscale Scores</h3>\n" + "\n".join(
            f'      <div class="subscale">{label}: <span class="subscale-score">{value}</span></div>'
            for label, value in subscales
        )
        text_subscales = "\n\nSUBSCALE SCORES:\n" + "\n".join(f"- {label}: {value}" for label, value in subscales)

    html_body = (
        f"      <p>A student has completed the {SURVEY_NAME}.</p>\n"
        f"{html_rows}{html_subscales}"
    )
    text = (
        "Student Survey Completion Notification\n\n"
        f"A student has completed the {SURVEY_NAME}.\n\n"
        f"{text_rows}{text_subscales}\n\n---\n"
    )

    return RenderedEmail(
        subject=f"Student Survey Completion - {student_name}",
        html=_page("background-color: #f4f4f4;", "Student Survey Completion Notification", html_body),
        text=text,
    )


def generate_student_email(
    student_name: str,
    time_spent: str,
    submitted_at: str,
    scores: ScoreResult
) -> RenderedEmail:
    """Results and interpretation for the student"""
    label = readiness_label(scores.readiness_category)
    explanation = readiness_text(scores.readiness_category)
    need_text = need_interpretation(scores.has_need)
    subscales = _subscale_rows(scores)
    show_tips = needs_success_tips(scores)

    html_parts = [
        f"      <p>Dear {escape(student_name)},</p>",
        f"      <p>Thank you for completing the {SURVEY_NAME}. Here are your results:</p>",
        '      <div class="score-section">',
        "        <h3>Your Total Score</h3>",
        f"        <p><strong>{scores.total}</strong></p>",
        f"        <p><strong>{label}</strong></p>",
        f"        <p>{explanation}</p>",
        "      </div>",
        "      <h3>Subscale Scores</h3>",
    ]
    html_parts += [
        f'      <div class="subscale">{name}: <span class="subscale-score">{value}</span></div>'
        for name, value in subscales
    ]
    html_parts += [
        '      <div class="interpretation">',
        "        <h4>Need for Online Delivery</h4>",
        f"        <p>{need_text}</p>",
        f"        <p><em>{NEED_NOTE}</em></p>",
        "      </div>",
    ]
    if show_tips:
        html_parts.append('      <div class="resources">')
        html_parts.append("        <h4>Tips for Online Learning Success</h4>")
        html_parts += [f"        <p><strong>{title}:</strong> {tip}</p>" for title, tip in SUCCESS_TIPS]
        html_parts.append("      </div>")
    html_parts.append(
        f"      <p>Submitted: {escape(submitted_at)}<br>Time Spent: {escape(time_spent)}</p>"
    )

    text_parts = [
        "Your Online Learning Self-Assessment Results",
        "",
        f"Dear {student_name},",
        "",
        f"Thank you for completing the {SURVEY_NAME}. Here are your results:",
        "",
        f"YOUR TOTAL SCORE: {scores.total}",
        label,
        "",
        explanation,
        "",
        "SUBSCALE SCORES:",
    ]
    text_parts += [f"- {name}: {value}" for name, value in subscales]
    text_parts += ["", "NEED FOR ONLINE DELIVERY:", need_text, "", NEED_NOTE, ""]
    if show_tips:
        text_parts += ["TIPS FOR ONLINE LEARNING SUCCESS:", ""]
        for title, tip in SUCCESS_TIPS:
            text_parts += [f"{title}: {tip}", ""]
    text_parts += [f"Submitted: {submitted_at}", f"Time Spent: {time_spent}", "", "---", ""]

    return RenderedEmail(
        subject="Your Online Learning Self-Assessment Results",
        html=_page("background-color: #4CAF50; color: white;", "Your Online Learning Self-Assessment Results",
                   "\n".join(html_parts)),
        text="\n".join(text_parts),
    )
