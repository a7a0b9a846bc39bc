from __future__ import annotations

from pydantic import Field

from core.settings.base import TarzifyBaseSettings


class CloudinarySettings(TarzifyBaseSettings):
    """Media CDN settings for shipping-proof uploads."""

    enabled: bool = Field(default=False, alias="TARZIFY_CLOUDINARY_ENABLED")
    cloud_name: str = Field(default="", alias="CLOUDINARY_CLOUD_NAME")
    api_key: str = Field(default="", alias="CLOUDINARY_API_KEY")
    api_secret: str = Field(default="", alias="CLOUDINARY_API_SECRET")
    folder: str = Field(default="tarzify/shipping-proofs", alias="CLOUDINARY_FOLDER")
    max_upload_bytes: int = Field(default=10 * 1024 * 1024, alias="TARZIFY_MAX_UPLOAD_BYTES")
