"""
Mock Notification Service Implementation.

Records operator alerts for tests and local runs.
"""
import logging

from core.application.interfaces import INotificationService


logger = logging.getLogger(__name__)


class MockNotificationService(INotificationService):
    """
    Mock implementation of notification service.

    Logs notifications instead of actually sending them.
    """

    def __init__(self):
        self.notifications_sent = []
        logger.info("MockNotificationService initialized (console logging)")

    async def notify(self, message: str, severity: int = 50) -> bool:
        notification = {
            "type": "generic",
            "message": message,
            "severity": severity,
        }
        self.notifications_sent.append(notification)

        severity_emoji = "🔴" if severity >= 80 else "🟡" if severity >= 50 else "🟢"
        logger.info(f"{severity_emoji} 🔔 NOTIFICATION (severity={severity}): {message}")
        return True

    def get_notifications(self) -> list:
        """Get all sent notifications (for testing)."""
        return self.notifications_sent

    def clear(self) -> None:
        """Clear notifications (for testing)."""
        self.notifications_sent.clear()
