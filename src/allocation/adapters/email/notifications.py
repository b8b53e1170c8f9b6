"""Email adapter – EmailNotifications, the production Notifications port."""
from __future__ import annotations

import aiosmtplib

from allocation.adapters.email.message import EmailMessage
from allocation.adapters.email.smtp import SmtpConfig, SmtpEmailSender
from allocation.kernel.errors import TransportError
from allocation.observability.logging import get_logger

logger = get_logger(__name__)

DEFAULT_SUBJECT = "allocation service notification"

__all__ = ["EmailNotifications"]


class EmailNotifications:
    """Deliver notifications as plain-text email."""

    def __init__(
        self,
        config: SmtpConfig,
        sender: str,
        *,
        subject: str = DEFAULT_SUBJECT,
        smtp: SmtpEmailSender | None = None,
    ) -> None:
        self._sender = sender
        self._subject = subject
        self._smtp = smtp or SmtpEmailSender(config)

    async def send(self, destination: str, message: str) -> None:
        mail = EmailMessage(
            to=(destination,),
            subject=self._subject,
            text_body=message,
            sender=self._sender,
        )
        try:
            await self._smtp.send(mail)
        except (OSError, aiosmtplib.SMTPException) as exc:
            raise TransportError("smtp", f"Could not send mail to {destination}", cause=exc) from exc
        logger.info("notification.sent", destination=destination)
