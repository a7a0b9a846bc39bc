"""Customer directory backed by the customers table."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.interfaces import CustomerProfile, ICustomerDirectory
from core.domain.exceptions import PersistenceError

from ..models.customer_model import CustomerModel


class SqlCustomerDirectory(ICustomerDirectory):
    """Read-only lookups; runs outside the order transaction."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    async def get_customer(self, customer_id: str) -> Optional[CustomerProfile]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(CustomerModel).where(CustomerModel.id == customer_id)
                )
                model = result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Customer lookup failed: {exc}") from exc

        if model is None:
            return None
        return CustomerProfile(
            id=model.id,
            email=model.email,
            full_name=model.full_name,
            role=model.role,
        )
