"""Tests for the email adapters."""
from unittest.mock import MagicMock, patch

import pytest

from core.application.interfaces import OutboundEmail
from core.infrastructure.adapters.email.mock_email_sender import MockEmailSender
from core.infrastructure.adapters.email.smtp_email_sender import SmtpEmailSender
from core.settings.modules.email_settings import EmailSettings


MESSAGE = OutboundEmail(
    to="ayesha@example.com",
    subject="Order Confirmation #AB123456 - TARZIFY",
    html="<p>Thanks!</p>",
    text="Thanks!",
)


def email_settings(**overrides) -> EmailSettings:
    values = dict(
        TARZIFY_EMAIL_ENABLED=True,
        SMTP_HOST="smtp.hostinger.com",
        SMTP_PORT=465,
        SMTP_SECURE=True,
        SMTP_USER="order@tarzify.com",
        SMTP_PASS="secret",
    )
    values.update(overrides)
    return EmailSettings(**values)


def smtp_connection():
    connection = MagicMock()
    connection.__enter__ = MagicMock(return_value=connection)
    connection.__exit__ = MagicMock(return_value=False)
    return connection


class TestSmtpEmailSender:

    @pytest.mark.asyncio
    async def test_ssl_send(self):
        connection = smtp_connection()
        sender = SmtpEmailSender(email_settings())

        with patch("smtplib.SMTP_SSL", return_value=connection) as smtp_ssl:
            await sender.send(MESSAGE)

        smtp_ssl.assert_called_once_with("smtp.hostinger.com", 465, timeout=30.0)
        connection.login.assert_called_once_with("order@tarzify.com", "secret")
        connection.starttls.assert_not_called()
        sent = connection.send_message.call_args.args[0]
        assert sent["To"] == "ayesha@example.com"
        assert sent["Subject"] == "Order Confirmation #AB123456 - TARZIFY"
        assert "order@tarzify.com" in str(sent["From"])

    @pytest.mark.asyncio
    async def test_starttls_when_not_ssl(self):
        connection = smtp_connection()
        sender = SmtpEmailSender(email_settings(SMTP_PORT=587, SMTP_SECURE=False))

        with patch("smtplib.SMTP", return_value=connection):
            await sender.send(MESSAGE)

        connection.starttls.assert_called_once()
        connection.send_message.assert_called_once()

    @pytest.mark.asyncio
    async def test_transport_errors_propagate(self):
        sender = SmtpEmailSender(email_settings())

        with patch("smtplib.SMTP_SSL", side_effect=OSError("connection refused")):
            with pytest.raises(OSError):
                await sender.send(MESSAGE)


class TestMockEmailSender:

    @pytest.mark.asyncio
    async def test_records_messages(self):
        sender = MockEmailSender()

        await sender.send(MESSAGE)

        assert sender.sent == [MESSAGE]
