"""Application layer interfaces."""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CustomerProfile:
    """Customer as resolved by the auth directory."""
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None
    role: str = "customer"


@dataclass(frozen=True)
class OutboundEmail:
    """A single transactional email."""
    to: str
    subject: str
    html: str
    text: Optional[str] = None


class ICustomerDirectory(ABC):
    """
    Interface for the auth/customer directory.

    Placement uses it to validate the customer id and to find the
    address the confirmation email goes to.
    """

    @abstractmethod
    async def get_customer(self, customer_id: str) -> Optional[CustomerProfile]:
        """
        Resolve a customer id.

        Args:
            customer_id: Auth user id

        Returns:
            CustomerProfile if known, None otherwise

        Raises:
            PersistenceError: If the directory cannot be reached
        """
        pass


class IEmailSender(ABC):
    """Interface for transactional email delivery."""

    @abstractmethod
    async def send(self, message: OutboundEmail) -> None:
        """
        Deliver one email.

        Raises:
            Exception: Any transport failure (callers treat email as best-effort)
        """
        pass


class IMediaStorage(ABC):
    """Interface for uploading images and getting back a public URL."""

    @abstractmethod
    async def upload(self, content: bytes, filename: str, content_type: Optional[str] = None) -> str:
        """
        Upload a blob.

        Args:
            content: Raw file bytes
            filename: Original file name (used for the public id)
            content_type: MIME type reported by the client

        Returns:
            Public HTTPS URL of the stored object
        """
        pass


class INotificationService(ABC):
    """
    Interface for operator alerts.

    This interface defines the contract for sending notifications,
    allowing different implementations (Slack, mock, ...).
    """

    @abstractmethod
    async def notify(self, message: str, severity: int = 50) -> bool:
        """
        Send a generic notification message.

        Args:
            message: Notification message
            severity: Severity level (0-100, higher = more critical)

        Returns:
            True if the alert was delivered
        """
        pass


__all__ = [
    "CustomerProfile",
    "ICustomerDirectory",
    "IEmailSender",
    "IMediaStorage",
    "INotificationService",
    "OutboundEmail",
]
