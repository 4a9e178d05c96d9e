# admin_portal/core/notifier.py
import logging
import smtplib
from typing import Protocol

from admin_portal.core.email_client import send_email

logger = logging.getLogger(__name__)

INVITE_SUBJECT = "Set your password"


class NotificationError(Exception):
    """The invitation could not be delivered."""


class Notifier(Protocol):
    def send_invite_link(self, from_email: str, to_email: str, link: str) -> None: ...


class EmailNotifier:
    """Delivers invitation links over SMTP."""

    def send_invite_link(self, from_email: str, to_email: str, link: str) -> None:
        """
        Email the onboarding link to `to_email` on behalf of `from_email`.

        Raises:
            NotificationError: on missing SMTP config or any SMTP/network failure.
        """
        text_body = (
            "Hello,\n\n"
            "You have been invited to the Admin Portal.\n"
            "Open the following link to set your password (valid for 10 minutes):\n"
            f"{link}\n\n"
            "If you didn't request this, you can ignore this email."
        )
        html_body = (
            "<p>Hello,</p>"
            "<p>You have been invited to the Admin Portal.</p>"
            "<p>Please click the following link to set your password "
            "(valid for 10 minutes):</p>"
            f'<p><a href="{link}">{link}</a></p>'
            "<p>If you didn't request this, you can ignore this email.</p>"
        )
        try:
            send_email(
                to_email=to_email,
                subject=INVITE_SUBJECT,
                text_body=text_body,
                html_body=html_body,
                reply_to=from_email or None,
            )
        except (RuntimeError, smtplib.SMTPException, OSError) as exc:
            logger.warning("Invite email to %s failed: %s", to_email, exc)
            raise NotificationError(str(exc)) from exc


def get_notifier() -> Notifier:
    """FastAPI dependency; overridden in tests with a recording fake."""
    return EmailNotifier()
