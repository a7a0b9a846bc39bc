"""
SMTP Email Sender.

Delivers transactional email through the store mailbox. smtplib is
blocking, so each send runs in a worker thread.
"""
import asyncio
import logging
import smtplib
from email.message import EmailMessage

from core.application.interfaces import IEmailSender, OutboundEmail
from core.settings.modules.email_settings import EmailSettings


logger = logging.getLogger(__name__)


class SmtpEmailSender(IEmailSender):
    """
    SMTP implementation of the email sender.

    Port 465 uses implicit SSL; anything else upgrades with STARTTLS.
    """

    def __init__(self, settings: EmailSettings, timeout: float = 30.0):
        """
        Args:
            settings: SMTP host and credentials
            timeout: Socket timeout for the SMTP connection
        """
        self.settings = settings
        self.timeout = timeout
        logger.info(f"SmtpEmailSender initialized ({settings.host}:{settings.port})")

    async def send(self, message: OutboundEmail) -> None:
        await asyncio.to_thread(self._send_sync, message)
        logger.info(f"Email sent to {message.to}: {message.subject}")

    def _build(self, message: OutboundEmail) -> EmailMessage:
        email = EmailMessage()
        email["Subject"] = message.subject
        email["From"] = self.settings.sender
        email["To"] = message.to
        email.set_content(message.text or "Please view this message in an HTML-capable client.")
        email.add_alternative(message.html, subtype="html")
        return email

    def _send_sync(self, message: OutboundEmail) -> None:
        email = self._build(message)
        settings = self.settings

        if settings.use_ssl:
            connection = smtplib.SMTP_SSL(settings.host, settings.port, timeout=self.timeout)
        else:
            connection = smtplib.SMTP(settings.host, settings.port, timeout=self.timeout)

        with connection:
            if not settings.use_ssl:
                connection.starttls()
            if settings.has_credentials:
                connection.login(settings.user, settings.password)
            connection.send_message(email)
