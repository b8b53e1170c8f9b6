"""Email adapter – SMTP-backed notifications."""
from allocation.adapters.email.message import EmailMessage
from allocation.adapters.email.notifications import EmailNotifications
from allocation.adapters.email.smtp import SmtpConfig, SmtpEmailSender

__all__ = ["EmailMessage", "EmailNotifications", "SmtpConfig", "SmtpEmailSender"]
