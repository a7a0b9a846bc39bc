from __future__ import annotations

from pydantic_settings import SettingsConfigDict

from core.settings.base import TarzifyBaseSettings


class DatabaseSettings(TarzifyBaseSettings):
    """
    Database configuration settings.

    Local development runs on SQLite; production points DB_DATABASE_URL at
    PostgreSQL (postgresql+asyncpg://...).
    """

    model_config = SettingsConfigDict(env_prefix="DB_")

    database_url: str = "sqlite+aiosqlite:///./tarzify.db"

    # Connection pool settings (ignored for SQLite)
    pool_size: int = 10
    max_overflow: int = 20
    pool_timeout: int = 30
    pool_recycle: int = 3600  # 1 hour

    # Echo SQL (for debugging)
    echo_sql: bool = False

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")
