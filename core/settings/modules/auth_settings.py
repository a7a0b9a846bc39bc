from __future__ import annotations

from pydantic_settings import SettingsConfigDict

from core.settings.base import TarzifyBaseSettings

DEFAULT_MERCHANT_API_KEY = "tz-merchant-dev-key"
DEFAULT_ADMIN_API_KEY = "tz-admin-dev-key"


class AuthSettings(TarzifyBaseSettings):
    """Operator (merchant/admin) API keys."""

    model_config = SettingsConfigDict(env_prefix="AUTH_")

    enabled: bool = True
    merchant_api_key: str = DEFAULT_MERCHANT_API_KEY
    admin_api_key: str = DEFAULT_ADMIN_API_KEY
    merchant_actor_id: str = "merchant-001"
    admin_actor_id: str = "admin-001"
