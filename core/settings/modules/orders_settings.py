from __future__ import annotations

from decimal import Decimal
from typing import Literal

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from core.settings.base import TarzifyBaseSettings


class OrdersSettings(TarzifyBaseSettings):
    """Order pipeline knobs."""

    model_config = SettingsConfigDict(env_prefix="ORDERS_")

    currency: str = "PKR"

    # Order code allocation
    code_max_attempts: int = Field(default=3, ge=1)

    # permissive | monotonic
    status_policy: Literal["permissive", "monotonic"] = "permissive"

    # off | warn | enforce
    total_check: Literal["off", "warn", "enforce"] = "warn"
    total_tolerance: Decimal = Decimal("0.01")

    # Per-collaborator timeouts (seconds)
    record_store_timeout_seconds: float = 10.0
    directory_timeout_seconds: float = 5.0
    email_timeout_seconds: float = 15.0
    stock_timeout_seconds: float = 5.0
    upload_timeout_seconds: float = 30.0
