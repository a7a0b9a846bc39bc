from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict

from core.settings.modules.api_settings import ApiSettings
from core.settings.modules.auth_settings import AuthSettings
from core.settings.modules.database_settings import DatabaseSettings
from core.settings.modules.email_settings import EmailSettings
from core.settings.modules.integrations_settings import SlackSettings
from core.settings.modules.media_settings import CloudinarySettings
from core.settings.modules.orders_settings import OrdersSettings


class IntegrationsSettings(BaseModel):
    """Aggregates third-party integrations as nested objects."""

    model_config = ConfigDict(extra="ignore")

    email: EmailSettings
    slack: SlackSettings
    cloudinary: CloudinarySettings


class AppSettings(BaseModel):
    """Application settings aggregator."""

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="ignore")

    api: ApiSettings
    auth: AuthSettings
    database: DatabaseSettings
    orders: OrdersSettings
    integrations: IntegrationsSettings

    @property
    def email(self) -> EmailSettings:
        return self.integrations.email

    @property
    def slack(self) -> SlackSettings:
        return self.integrations.slack

    @property
    def cloudinary(self) -> CloudinarySettings:
        return self.integrations.cloudinary


@lru_cache()
def get_app_settings() -> AppSettings:
    return AppSettings(
        api=ApiSettings(),
        auth=AuthSettings(),
        database=DatabaseSettings(),
        orders=OrdersSettings(),
        integrations=IntegrationsSettings(
            email=EmailSettings(),
            slack=SlackSettings(),
            cloudinary=CloudinarySettings(),
        ),
    )
