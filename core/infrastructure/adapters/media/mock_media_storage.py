"""Mock media storage: keeps uploads in memory and hands out fake URLs."""
import logging
from typing import Dict, Optional
from uuid import uuid4

from core.application.interfaces import IMediaStorage


logger = logging.getLogger(__name__)


class MockMediaStorage(IMediaStorage):

    def __init__(self, base_url: str = "https://media.example.test/tarzify"):
        self.base_url = base_url.rstrip("/")
        self.uploads: Dict[str, bytes] = {}

    async def upload(self, content: bytes, filename: str, content_type: Optional[str] = None) -> str:
        url = f"{self.base_url}/{uuid4().hex}-{filename}"
        self.uploads[url] = content
        logger.info(f"🖼️ UPLOAD (mock) {filename} ({len(content)} bytes) -> {url}")
        return url
