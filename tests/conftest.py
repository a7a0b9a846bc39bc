"""Shared fixtures: in-memory database, seeded collaborators and fakes."""

from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from core.data.models import Base, CustomerModel, ProductModel
from core.infrastructure.adapters.email.mock_email_sender import MockEmailSender
from core.infrastructure.adapters.notifications.mock_notification_service import MockNotificationService
from core.settings.modules.orders_settings import OrdersSettings
from tests.factories import CUSTOMER_EMAIL, CUSTOMER_ID


# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_engine) -> async_sessionmaker:
    """Session factory over a database seeded with customers and stocked products."""
    factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    await seed_directory_and_catalog(factory)
    return factory


@pytest_asyncio.fixture
async def file_session_factory(tmp_path):
    """Seeded session factory over a file database; each session gets its own connection."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'orders.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await seed_directory_and_catalog(factory)

    yield factory

    await engine.dispose()


async def seed_directory_and_catalog(factory: async_sessionmaker) -> None:
    async with factory() as session:
        session.add_all(
            [
                CustomerModel(
                    id=CUSTOMER_ID,
                    email=CUSTOMER_EMAIL,
                    full_name="Ayesha Khan",
                    role="customer",
                ),
                CustomerModel(id="cust-no-email", email=None, full_name="No Mail"),
                ProductModel(id=1, name="Leather Jacket", price=Decimal("5000"), stock=10),
                ProductModel(id=2, name="Silk Scarf", price=Decimal("3000"), stock=5),
            ]
        )
        await session.commit()


@pytest.fixture
def orders_settings() -> OrdersSettings:
    return OrdersSettings(
        code_max_attempts=3,
        status_policy="permissive",
        total_check="warn",
    )


@pytest.fixture
def email_sender() -> MockEmailSender:
    return MockEmailSender()


@pytest.fixture
def notifier() -> MockNotificationService:
    return MockNotificationService()
