from datetime import datetime
from typing import Any, Callable, Optional
import logging

from email_template import format_timestamp, generate_professor_email, generate_student_email
from services.mail_service import MailTransport, OutboundEmail
from services.quota_service import QuotaCounter, utc_now
from services.scoring_service import DEFAULT_THRESHOLDS, ScoringThresholds, compute_scores
from shared.errors import InternalError, SurveyError
from .schemas import DispatchSummary
from .utils import LIKERT_MAX, LIKERT_MIN, validate_submission

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Survey notifications sent successfully"


class SurveyNotificationDispatcher:
    """
    Validate -> reserve quota -> score -> compose -> send.

    A reserved quota slot is never given back, even if sending fails:
    the quota guards the mail account's budget, not delivery.
    """

    def __init__(
        self,
        quota: QuotaCounter,
        transport: MailTransport,
        sender: str,
        reference_timezone: str = "America/New_York",
        notify_student_too: bool = True,
        require_responses: bool = True,
        thresholds: ScoringThresholds = DEFAULT_THRESHOLDS,
        likert_min: int = LIKERT_MIN,
        likert_max: int = LIKERT_MAX,
        clock: Callable[[], datetime] = utc_now
    ):
        self.quota = quota
        self.transport = transport
        self.sender = sender
        self.reference_timezone = reference_timezone
        self.notify_student_too = notify_student_too
        self.require_responses = require_responses
        self.thresholds = thresholds
        self.likert_min = likert_min
        self.likert_max = likert_max
        self.clock = clock

    def dispatch(self, data: Any) -> DispatchSummary:
        """
        Handle one survey submission

        Raises:
            InvalidArgument: bad or missing fields, nothing consumed
            QuotaExceeded: daily cap reached, nothing sent
            SurveyError: code 'internal' for transport and unexpected failures
        """
        try:
            return self._dispatch(data)
        except SurveyError as e:
            if e.code == "internal":
                logger.error(f"Survey notification failed ({e.code}): {e.message}", exc_info=True)
            else:
                logger.warning(f"Survey notification rejected ({e.code}): {e.message}")
            raise
        except Exception as e:
            logger.error(f"Error sending survey notification: {e}", exc_info=True)
            raise InternalError() from e

    def _dispatch(self, data: Any) -> DispatchSummary:
        submission = validate_submission(data, self.require_responses, self.likert_min, self.likert_max)

        now = self.clock()
        reservation = self.quota.try_reserve_slot(self.quota.today())

        scores = None
        if submission.responses is not None:
            scores = compute_scores(submission.responses, self.thresholds)

        submitted_at = format_timestamp(now, self.reference_timezone)

        professor_email = generate_professor_email(
            submission.student_name,
            submission.student_email,
            submission.time_spent,
            submitted_at,
            scores
        )
        professor_email_id = self.transport.send(OutboundEmail(
            sender=self.sender,
            to=submission.professor_email,
            subject=professor_email.subject,
            html=professor_email.html,
            text=professor_email.text,
        ))

        student_email_id: Optional[str] = None
        if self.notify_student_too and scores is not None:
            student_email = generate_student_email(
                submission.student_name,
                submission.time_spent,
                submitted_at,
                scores
            )
            student_email_id = self.transport.send(OutboundEmail(
                sender=self.sender,
                to=submission.student_email,
                subject=student_email.subject,
                html=student_email.html,
                text=student_email.text,
            ))

        logger.info(
            f"Emails sent successfully - professorEmailId={professor_email_id} "
            f"studentEmailId={student_email_id} student={submission.student_name} "
            f"emailCount={reservation.count} total={scores.total if scores else None}"
        )

        return DispatchSummary(
            success=True,
            message=SUCCESS_MESSAGE,
            professor_email_id=professor_email_id,
            student_email_id=student_email_id,
            scores=scores,
        )


def build_dispatcher(settings, store, transport: MailTransport, clock: Callable[[], datetime] = utc_now) -> SurveyNotificationDispatcher:
    """Wire the dispatcher from settings"""
    quota = QuotaCounter(store, limit=settings.QUOTA_DAILY_LIMIT, tz=settings.QUOTA_TIMEZONE, clock=clock)
    return SurveyNotificationDispatcher(
        quota=quota,
        transport=transport,
        sender=settings.MAIL_FROM,
        reference_timezone=settings.REFERENCE_TIMEZONE,
        notify_student_too=settings.NOTIFY_STUDENT_TOO,
        require_responses=settings.REQUIRE_RESPONSES,
        likert_min=settings.LIKERT_MIN,
        likert_max=settings.LIKERT_MAX,
        clock=clock,
    )
