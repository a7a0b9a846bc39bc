"""Media storage adapters.

Import the Cloudinary adapter from its module; it pulls in the SDK.
"""

from .mock_media_storage import MockMediaStorage

__all__ = ["MockMediaStorage"]
