from __future__ import annotations

from pydantic import Field

from core.settings.base import TarzifyBaseSettings


class SlackSettings(TarzifyBaseSettings):
    """
    Slack operator-alert settings.
    Loaded from .env file with exact variable name matching.
    """

    enabled: bool = Field(default=False, alias="TARZIFY_SLACK_ENABLED")
    webhook_url: str = Field(default="", alias="SLACK_WEBHOOK_URL")
    prefix: str = Field(default="[TARZIFY]", alias="TARZIFY_SLACK_PREFIX")
    timeout_seconds: float = Field(default=10.0, alias="TARZIFY_SLACK_TIMEOUT_SECONDS")
