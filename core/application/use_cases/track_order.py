"""
Track Order Use Case.

Public lookup of an order by the code printed on the receipt.
"""
from typing import Optional
import logging

from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.services.timeouts import with_timeout
from core.data.uow import create_uow
from core.domain.entities.order import Order
from core.domain.exceptions import OrderValidationError
from core.domain.value_objects import OrderCode


logger = logging.getLogger(__name__)


class TrackOrderUseCase:
    """Resolve a user-typed order code to its order."""

    def __init__(self, session_factory: async_sessionmaker, timeout_seconds: float = 10.0):
        self._session_factory = session_factory
        self._timeout = timeout_seconds

    async def execute(self, raw_code: str) -> Optional[Order]:
        """
        Look an order up by code.

        Input is trimmed and uppercased first, so " ab123456 " matches
        "AB123456".

        Args:
            raw_code: Code as typed by the visitor

        Returns:
            The order, or None if no order has this code

        Raises:
            OrderValidationError: If the input is blank
        """
        code = OrderCode.normalize(raw_code)
        if not code:
            raise OrderValidationError("Order code is required")

        # Anything off-format cannot exist; skip the round trip
        if not OrderCode.is_well_formed(code):
            logger.info(f"Tracking lookup for malformed code: {code!r}")
            return None

        async with create_uow(self._session_factory) as uow:
            return await with_timeout(
                uow.orders.find_by_code(code), self._timeout, "tracking lookup"
            )
