"""Mock email sender: keeps messages in memory."""
import logging
from typing import List

from core.application.interfaces import IEmailSender, OutboundEmail


logger = logging.getLogger(__name__)


class MockEmailSender(IEmailSender):
    """Records outgoing email instead of sending it."""

    def __init__(self):
        self.sent: List[OutboundEmail] = []

    async def send(self, message: OutboundEmail) -> None:
        self.sent.append(message)
        logger.info(f"📧 EMAIL (mock) to {message.to}: {message.subject}")

    def clear(self) -> None:
        self.sent.clear()
