# Settings modules
from .api_settings import ApiSettings
from .app_settings import AppSettings, IntegrationsSettings, get_app_settings
from .auth_settings import AuthSettings
from .database_settings import DatabaseSettings
from .email_settings import EmailSettings
from .integrations_settings import SlackSettings
from .media_settings import CloudinarySettings
from .orders_settings import OrdersSettings

__all__ = [
    "ApiSettings",
    "AppSettings",
    "AuthSettings",
    "CloudinarySettings",
    "DatabaseSettings",
    "EmailSettings",
    "IntegrationsSettings",
    "OrdersSettings",
    "SlackSettings",
    "get_app_settings",
]
