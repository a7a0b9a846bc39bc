"""Unit of Work pattern for atomic transactions."""

from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.domain.exceptions import PersistenceError
from core.domain.value_objects import ExecutionID

from .repositories.order_repository_impl import SqlAlchemyOrderRepository
from .repositories.product_repository_impl import SqlAlchemyProductRepository


class UnitOfWork:
    """
    Unit of Work pattern for atomic transactions.

    Responsibilities:
    1. Manage SQLAlchemy session lifecycle
    2. Propagate ExecutionID across all operations
    3. Atomic commit/rollback of all repository operations
    4. Lazy initialization of repositories
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        execution_id: Optional[ExecutionID] = None,
    ) -> None:
        """Initialize Unit of Work.

        Args:
            session_factory: SQLAlchemy async session factory
            execution_id: Reuse the caller's execution id instead of a fresh one
        """
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None
        self._execution_id: Optional[ExecutionID] = execution_id

        # Lazy-loaded repositories
        self._order_repository: Optional[SqlAlchemyOrderRepository] = None
        self._product_repository: Optional[SqlAlchemyProductRepository] = None

    async def __aenter__(self) -> "UnitOfWork":
        """Start transaction scope."""
        self._session = self._session_factory()
        if self._execution_id is None:
            self._execution_id = ExecutionID.generate()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Rollback on exception, then release the session.

        Anything not explicitly committed is discarded on close.
        """
        if exc_type is not None:
            await self._session.rollback()
        await self._session.close()
        self._order_repository = None
        self._product_repository = None

    @property
    def execution_id(self) -> ExecutionID:
        """Get current execution ID for tracing.

        Returns:
            ExecutionID value object
        """
        if self._execution_id is None:
            raise RuntimeError("UnitOfWork not initialized. Use async context manager.")
        return self._execution_id

    @property
    def orders(self) -> SqlAlchemyOrderRepository:
        """Lazy-load order repository.

        Returns:
            SqlAlchemyOrderRepository instance
        """
        self._require_session()
        if self._order_repository is None:
            self._order_repository = SqlAlchemyOrderRepository(self._session)
        return self._order_repository

    @property
    def products(self) -> SqlAlchemyProductRepository:
        """Lazy-load product stock repository."""
        self._require_session()
        if self._product_repository is None:
            self._product_repository = SqlAlchemyProductRepository(self._session)
        return self._product_repository

    async def commit(self) -> None:
        """Commit all pending changes."""
        self._require_session()
        try:
            await self._session.commit()
        except SQLAlchemyError as exc:
            await self._session.rollback()
            raise PersistenceError(f"Commit failed: {exc}") from exc

    async def rollback(self) -> None:
        """Rollback all pending changes."""
        self._require_session()
        await self._session.rollback()

    def _require_session(self) -> None:
        if self._session is None:
            raise RuntimeError("UnitOfWork not initialized. Use async context manager.")


def create_uow(
    session_factory: async_sessionmaker,
    execution_id: Optional[ExecutionID] = None,
) -> UnitOfWork:
    """Create a new Unit of Work instance.

    Args:
        session_factory: SQLAlchemy async session factory
        execution_id: Optional execution id to propagate

    Returns:
        UnitOfWork instance
    """
    return UnitOfWork(session_factory, execution_id=execution_id)
