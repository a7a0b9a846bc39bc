"""Fixtures for API tests: the FastAPI app over the in-memory database."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from apps.api import deps
from apps.api.main import app
from core.infrastructure.adapters.media.mock_media_storage import MockMediaStorage
from core.settings import AppSettings
from tests.factories import ADMIN_KEY, MERCHANT_KEY, build_app_settings


@pytest.fixture
def media_storage() -> MockMediaStorage:
    return MockMediaStorage()


@pytest.fixture
def app_settings(orders_settings) -> AppSettings:
    return build_app_settings(orders_settings)


@pytest_asyncio.fixture
async def client(session_factory, app_settings, email_sender, notifier, media_storage):
    """Create API client with test database and mock collaborators."""
    app.dependency_overrides[deps.get_session_factory] = lambda: session_factory
    app.dependency_overrides[deps.get_settings] = lambda: app_settings
    app.dependency_overrides[deps.get_email_sender] = lambda: email_sender
    app.dependency_overrides[deps.get_notification_service] = lambda: notifier
    app.dependency_overrides[deps.get_media_storage] = lambda: media_storage

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http:
        yield http

    app.dependency_overrides.clear()


@pytest.fixture
def merchant_headers() -> dict:
    return {"Authorization": f"Bearer {MERCHANT_KEY}"}


@pytest.fixture
def admin_headers() -> dict:
    return {"X-Api-Key": ADMIN_KEY}
