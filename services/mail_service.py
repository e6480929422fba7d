# services/mail_service.py
from dataclasses import dataclass
import logging

import resend
from resend.exceptions import ResendError

from shared.errors import TransportFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutboundEmail:
    sender: str
    to: str
    subject: str
    html: str
    text: str


class MailTransport:
    """Delivers one email and returns the provider's message id"""

    def send(self, email: OutboundEmail) -> str:
        raise NotImplementedError


class ResendMailTransport(MailTransport):
    """Send email notifications using Resend"""

    def __init__(self, api_key: str):
        resend.api_key = api_key

    def send(self, email: OutboundEmail) -> str:
        params = {
            "from": email.sender,
            "to": [email.to],
            "subject": email.subject,
            "html": email.html,
            "text": email.text,
        }

        try:
            response = resend.Emails.send(params)
        except ResendError as e:
            logger.error(f"Resend rejected email to {email.to}: {e}", exc_info=True)
            raise TransportFailure() from e

        email_id = response.get("id") if response else None
        if not email_id:
            logger.error(f"Resend returned no message id for email to {email.to}: {response}")
            raise TransportFailure()

        logger.info(f"Email sent successfully to {email.to} (id {email_id})")
        return email_id


def create_mail_transport(settings) -> MailTransport:
    """Build the process-wide mail transport, once, at app start"""
    if not settings.MAIL_RESEND_API_KEY:
        logger.warning("MAIL_RESEND_API_KEY is not set, sending will fail")
    return ResendMailTransport(settings.MAIL_RESEND_API_KEY)
