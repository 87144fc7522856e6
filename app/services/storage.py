"""
Media CDN access.

Services depend on the MediaStore protocol; the Cloudinary implementation is
injected at runtime and replaced by an in-memory fake in tests.
"""

from dataclasses import dataclass
from typing import Optional, Protocol
from pathlib import PurePosixPath
import logging
import re
import uuid

import cloudinary
import cloudinary.uploader
from starlette.concurrency import run_in_threadpool

from app.config import Settings, settings as default_settings
from app.models.media import MediaType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredMedia:
    """Result of an upload: where the asset lives and what it is."""
    storage_id: str
    url: str
    media_type: MediaType


class MediaStore(Protocol):
    """Hosted media storage."""

    @property
    def is_configured(self) -> bool:
        ...

    async def upload(self, file_data: str, folder: str, file_name: Optional[str] = None) -> StoredMedia:
        ...

    async def delete(self, storage_id: str, media_type: MediaType = MediaType.IMAGE) -> None:
        ...


def build_public_id(file_name: Optional[str]) -> str:
    """Unique CDN public id, keeping a readable stem of the original file name."""
    stem = PurePosixPath(file_name or "").stem.lower()
    stem = re.sub(r"[^a-z0-9]+", "-", stem).strip("-")[:50]
    suffix = uuid.uuid4().hex[:12]
    return f"{stem}-{suffix}" if stem else suffix


class CloudinaryMediaStore:
    """
    MediaStore backed by the Cloudinary SDK.

    The SDK is blocking, so calls run in the thread pool.
    """

    def __init__(self, config: Optional[Settings] = None):
        self.settings = config or default_settings
        if self.is_configured:
            cloudinary.config(
                cloud_name=self.settings.cloudinary_cloud_name,
                api_key=self.settings.cloudinary_api_key,
                api_secret=self.settings.cloudinary_api_secret,
                secure=True,
            )

    @property
    def is_configured(self) -> bool:
        return self.settings.cloudinary_configured

    async def upload(self, file_data: str, folder: str, file_name: Optional[str] = None) -> StoredMedia:
        """
        Upload a data URI, base64 payload or remote URL.

        Raises:
            cloudinary.exceptions.Error: If Cloudinary rejects the upload
        """
        result = await run_in_threadpool(
            cloudinary.uploader.upload,
            file_data,
            folder=folder,
            public_id=build_public_id(file_name),
            resource_type="auto",
        )

        media_type = MediaType.VIDEO if result.get("resource_type") == "video" else MediaType.IMAGE
        logger.info(f"Uploaded {media_type.value} to Cloudinary: {result['public_id']}")
        return StoredMedia(
            storage_id=result["public_id"],
            url=result["secure_url"],
            media_type=media_type,
        )

    async def delete(self, storage_id: str, media_type: MediaType = MediaType.IMAGE) -> None:
        result = await run_in_threadpool(
            cloudinary.uploader.destroy,
            storage_id,
            resource_type=media_type.value,
        )
        logger.info(f"Deleted {storage_id} from Cloudinary: {result.get('result')}")
