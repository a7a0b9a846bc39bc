"""
Cloudinary Media Storage.

Uploads shipping-proof photos to Cloudinary and returns the secure URL.
"""
import asyncio
import io
import logging
from typing import Optional

import cloudinary
import cloudinary.uploader

from core.application.interfaces import IMediaStorage
from core.domain.exceptions import PersistenceError
from core.settings.modules.media_settings import CloudinarySettings


logger = logging.getLogger(__name__)


class CloudinaryMediaStorage(IMediaStorage):
    """Cloudinary implementation of media storage."""

    def __init__(self, settings: CloudinarySettings):
        self.settings = settings
        cloudinary.config(
            cloud_name=settings.cloud_name,
            api_key=settings.api_key,
            api_secret=settings.api_secret,
            secure=True,
        )
        logger.info(f"CloudinaryMediaStorage initialized (folder={settings.folder})")

    async def upload(self, content: bytes, filename: str, content_type: Optional[str] = None) -> str:
        try:
            response = await asyncio.to_thread(
                cloudinary.uploader.upload,
                io.BytesIO(content),
                folder=self.settings.folder,
                resource_type="image",
                use_filename=True,
                unique_filename=True,
                filename_override=filename,
            )
        except Exception as e:
            logger.error(f"Cloudinary upload failed for {filename}: {e}", exc_info=True)
            raise PersistenceError(f"Upload failed: {e}") from e

        url = response.get("secure_url") or response.get("url")
        if not url:
            raise PersistenceError("Upload succeeded but no URL was returned")

        logger.info(f"Uploaded {filename} to {url}")
        return url
