from __future__ import annotations

from typing import Optional

from pydantic import Field

from core.settings.base import TarzifyBaseSettings


class EmailSettings(TarzifyBaseSettings):
    """
    Transactional email (SMTP) settings.
    Variable names match the storefront's existing .env.
    """

    enabled: bool = Field(default=False, alias="TARZIFY_EMAIL_ENABLED")
    host: str = Field(default="smtp.hostinger.com", alias="SMTP_HOST")
    port: int = Field(default=465, alias="SMTP_PORT")
    use_ssl: bool = Field(default=True, alias="SMTP_SECURE")
    user: str = Field(default="", alias="SMTP_USER")
    password: str = Field(default="", alias="SMTP_PASS")
    from_address: Optional[str] = Field(default=None, alias="SMTP_FROM")

    store_name: str = Field(default="TARZIFY", alias="TARZIFY_STORE_NAME")
    track_order_url: str = Field(
        default="https://tarzify.com/#track-order", alias="TARZIFY_TRACK_ORDER_URL"
    )
    support_email: str = Field(default="order@tarzify.com", alias="TARZIFY_SUPPORT_EMAIL")

    @property
    def has_credentials(self) -> bool:
        return bool(self.user and self.password)

    @property
    def sender(self) -> str:
        return self.from_address or f'"{self.store_name}" <{self.user}>'
