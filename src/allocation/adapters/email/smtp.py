"""Email adapter – SmtpEmailSender (aiosmtplib)."""
from __future__ import annotations

import email.mime.text
from dataclasses import dataclass
from typing import Any

import aiosmtplib

from allocation.adapters.email.message import EmailMessage

__all__ = ["SmtpConfig", "SmtpEmailSender"]


@dataclass
class SmtpConfig:
    hostname: str
    port: int = 587
    username: str | None = None
    password: str | None = None
    use_tls: bool = False
    start_tls: bool = False
    timeout: float = 30.0


class SmtpEmailSender:
    """Send :class:`EmailMessage` objects over SMTP, one connection per call."""

    def __init__(self, config: SmtpConfig) -> None:
        self._config = config

    def _build_mime(self, message: EmailMessage) -> email.mime.text.MIMEText:
        msg = email.mime.text.MIMEText(message.text_body, "plain", "utf-8")
        msg["Subject"] = message.subject
        msg["From"] = message.sender
        msg["To"] = ", ".join(message.to)
        if message.cc:
            msg["Cc"] = ", ".join(message.cc)
        return msg

    async def send(self, message: EmailMessage) -> Any:
        config = self._config
        return await aiosmtplib.send(
            self._build_mime(message),
            sender=message.sender,
            recipients=message.all_recipients(),
            hostname=config.hostname,
            port=config.port,
            username=config.username,
            password=config.password,
            use_tls=config.use_tls,
            start_tls=config.start_tls,
            timeout=config.timeout,
        )
