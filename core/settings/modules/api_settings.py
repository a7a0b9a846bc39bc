from __future__ import annotations

from typing import List

from pydantic_settings import SettingsConfigDict

from core.settings.base import TarzifyBaseSettings


class ApiSettings(TarzifyBaseSettings):
    model_config = SettingsConfigDict(env_prefix="API_")

    title: str = "TARZIFY Orders API"
    version: str = "1.0.0"
    log_level: str = "INFO"
    cors_origins: List[str] = ["http://localhost:5173", "http://localhost:3000"]
