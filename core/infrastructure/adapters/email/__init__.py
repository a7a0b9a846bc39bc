"""Email adapters."""

from .mock_email_sender import MockEmailSender
from .smtp_email_sender import SmtpEmailSender

__all__ = ["MockEmailSender", "SmtpEmailSender"]
