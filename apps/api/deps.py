"""
FastAPI Dependencies.

Builds use cases and services from settings; tests swap any of these
through ``app.dependency_overrides``.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables ONCE before any settings objects are created
_PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(dotenv_path=_PROJECT_ROOT / ".env")

from fastapi import Depends
from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.interfaces import (
    ICustomerDirectory,
    IEmailSender,
    IMediaStorage,
    INotificationService,
)
from core.application.services.order_confirmation import StoreInfo
from core.application.services.order_service import OrderApplicationService
from core.application.use_cases.place_order import PlaceOrderUseCase
from core.application.use_cases.track_order import TrackOrderUseCase
from core.data.repositories.customer_directory_impl import SqlCustomerDirectory
from core.infrastructure.adapters.email.mock_email_sender import MockEmailSender
from core.infrastructure.adapters.media.mock_media_storage import MockMediaStorage
from core.infrastructure.adapters.notifications.mock_notification_service import MockNotificationService
from core.infrastructure.database import config as database_config
from core.settings import AppSettings, get_app_settings

logger = logging.getLogger(__name__)


# =============================================================================
# SINGLETON INSTANCES
# =============================================================================

_email_sender: Optional[IEmailSender] = None
_notification_service: Optional[INotificationService] = None
_media_storage: Optional[IMediaStorage] = None
_session_factory: Optional[async_sessionmaker] = None


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_settings() -> AppSettings:
    return get_app_settings()


def get_session_factory() -> async_sessionmaker:
    global _session_factory

    if _session_factory is None:
        _session_factory = database_config.get_session_factory(
            database_config.get_engine(get_app_settings().database)
        )

    return _session_factory


def get_customer_directory(
    session_factory: async_sessionmaker = Depends(get_session_factory),
) -> ICustomerDirectory:
    return SqlCustomerDirectory(session_factory)


def get_email_sender() -> IEmailSender:
    global _email_sender

    if _email_sender is None:
        settings = get_app_settings().email

        if settings.enabled and settings.has_credentials:
            from core.infrastructure.adapters.email.smtp_email_sender import SmtpEmailSender

            _email_sender = SmtpEmailSender(settings)
            logger.info("Created SmtpEmailSender instance")
        else:
            _email_sender = MockEmailSender()
            logger.info("Using MockEmailSender (email disabled)")

    return _email_sender


def get_notification_service() -> INotificationService:
    global _notification_service

    if _notification_service is None:
        settings = get_app_settings()

        if settings.slack.enabled:
            try:
                from core.infrastructure.adapters.notifications.slack_notification_service import SlackNotificationService
                _notification_service = SlackNotificationService(settings.slack)
                logger.info("Created SlackNotificationService instance")
            except Exception as e:
                logger.warning(f"Failed SlackNotificationService: {e}, fallback to mock")
                _notification_service = MockNotificationService()
        else:
            _notification_service = MockNotificationService()
            logger.info("Using MockNotificationService (notifications disabled)")

    return _notification_service


def get_media_storage() -> IMediaStorage:
    global _media_storage

    if _media_storage is None:
        settings = get_app_settings().cloudinary

        if settings.enabled:
            from core.infrastructure.adapters.media.cloudinary_media_storage import CloudinaryMediaStorage

            _media_storage = CloudinaryMediaStorage(settings)
            logger.info("Created CloudinaryMediaStorage instance")
        else:
            _media_storage = MockMediaStorage()
            logger.info("Using MockMediaStorage (uploads disabled)")

    return _media_storage


def get_place_order_use_case(
    session_factory: async_sessionmaker = Depends(get_session_factory),
    customer_directory: ICustomerDirectory = Depends(get_customer_directory),
    email_sender: IEmailSender = Depends(get_email_sender),
    notification_service: INotificationService = Depends(get_notification_service),
    settings: AppSettings = Depends(get_settings),
) -> PlaceOrderUseCase:
    email = settings.email
    return PlaceOrderUseCase(
        session_factory=session_factory,
        customer_directory=customer_directory,
        settings=settings.orders,
        email_sender=email_sender,
        notification_service=notification_service,
        store=StoreInfo(
            name=email.store_name,
            track_order_url=email.track_order_url,
            support_email=email.support_email,
        ),
    )


def get_order_service(
    session_factory: async_sessionmaker = Depends(get_session_factory),
    settings: AppSettings = Depends(get_settings),
) -> OrderApplicationService:
    return OrderApplicationService(session_factory, settings.orders)


def get_track_order_use_case(
    session_factory: async_sessionmaker = Depends(get_session_factory),
    settings: AppSettings = Depends(get_settings),
) -> TrackOrderUseCase:
    return TrackOrderUseCase(
        session_factory, timeout_seconds=settings.orders.record_store_timeout_seconds
    )
