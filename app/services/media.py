"""
Property media service.
Uploads go to the media store; records of uploaded assets live in property_media.
"""

from typing import Any, Dict, List, Optional, Tuple
import base64
from fastapi import UploadFile
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from app.config import settings
from app.models.media import PropertyMedia
from app.repositories.media import MediaRepository
from app.repositories.property import PropertyRepository
from app.schemas.media import MediaCreate, MediaUploadRequest
from app.services.storage import MediaStore, StoredMedia
from app.utils.exceptions import (
    BadRequestError,
    NotFoundError,
    PropertyNotFoundError,
    ServiceUnavailableError,
    ValidationError
)
from app.utils.params import parse_id
import logging

logger = logging.getLogger(__name__)

TEMP_PROPERTY_ID = "temp"
ALLOWED_UPLOAD_TYPES = ("image/", "video/")


class MediaService:
    """Media records and their CDN assets."""

    def __init__(self, db_session: AsyncSession, media_store: Optional[MediaStore] = None):
        self.db = db_session
        self.media_store = media_store
        self.media_repo = MediaRepository(db_session)
        self.property_repo = PropertyRepository(db_session)

    def _require_store(self) -> MediaStore:
        if self.media_store is None or not self.media_store.is_configured:
            raise ServiceUnavailableError("Media storage is not configured")
        return self.media_store

    async def upload(self, request: MediaUploadRequest) -> Tuple[StoredMedia, Optional[PropertyMedia]]:
        """
        Upload a file to the media store.

        For ``propertyId == "temp"`` only the upload happens; the caller attaches
        the asset once the property exists. Otherwise a record is appended to the
        property's gallery.

        Raises:
            ServiceUnavailableError: If the media store is not configured
            BadRequestError: If no file data was sent or the property ID is invalid
            PropertyNotFoundError: If the property doesn't exist
        """
        store = self._require_store()

        if not request.file_data:
            raise BadRequestError("No file data provided")

        property_id = None
        if request.property_id != TEMP_PROPERTY_ID:
            property_id = parse_id(request.property_id, "property")
            if not await self.property_repo.exists(property_id):
                raise PropertyNotFoundError(property_id)

        folder = f"{settings.media_folder}/{request.property_id}"
        stored = await store.upload(request.file_data, folder, request.file_name)
        logger.info(f"Uploaded {request.file_name or 'file'} as {stored.storage_id}")

        if property_id is None:
            return stored, None

        media = await self.media_repo.create_media({
            "property_id": property_id,
            "media_type": stored.media_type,
            "storage_id": stored.storage_id,
            "url": stored.url,
            "is_featured": False,
            "order_index": await self.media_repo.count_by_property_id(property_id),
        })
        return stored, media

    async def upload_files(self, files: List[UploadFile]) -> List[Tuple[Optional[str], StoredMedia]]:
        """
        Upload multipart files into the temporary folder. No records are created;
        the caller attaches the returned assets to a property later.

        Every file is checked before the first upload starts.

        Returns:
            List of (original file name, stored asset) in request order

        Raises:
            ServiceUnavailableError: If the media store is not configured
            BadRequestError: If no files or too many files were sent
            ValidationError: If a file is empty, too large, or not an image or video
        """
        store = self._require_store()

        if not files:
            raise BadRequestError("No files uploaded")
        if len(files) > settings.max_upload_files:
            raise BadRequestError(f"Maximum {settings.max_upload_files} files allowed per upload")

        payloads = []
        for file in files:
            content_type = file.content_type or ""
            if not content_type.startswith(ALLOWED_UPLOAD_TYPES):
                raise ValidationError(f"File type '{content_type}' not allowed for {file.filename}")

            content = await file.read()
            if not content:
                raise ValidationError(f"File {file.filename} is empty")
            if len(content) > settings.max_upload_file_size:
                max_mb = settings.max_upload_file_size / (1024 * 1024)
                raise ValidationError(f"File {file.filename} exceeds maximum size of {max_mb:.0f}MB")

            encoded = base64.b64encode(content).decode("ascii")
            payloads.append((file.filename, f"data:{content_type};base64,{encoded}"))

        folder = f"{settings.media_folder}/{TEMP_PROPERTY_ID}"
        uploaded = []
        for file_name, data_uri in payloads:
            uploaded.append((file_name, await store.upload(data_uri, folder, file_name)))

        logger.info(f"Uploaded {len(uploaded)} files to {folder}")
        return uploaded

    async def create_media(self, property_id: int, media_data: MediaCreate) -> PropertyMedia:
        """
        Attach an uploaded asset to a property.

        Raises:
            PropertyNotFoundError: If the property doesn't exist
        """
        if not await self.property_repo.exists(property_id):
            raise PropertyNotFoundError(property_id)

        data = media_data.model_dump()
        data["property_id"] = property_id
        if data["order_index"] is None:
            data["order_index"] = await self.media_repo.count_by_property_id(property_id)

        media = await self.media_repo.create_media(data)
        logger.info(f"Media {media.id} attached to property {property_id}")
        return media

    async def create_media_batch(
        self,
        property_id: int,
        items: List[Dict[str, Any]]
    ) -> Tuple[List[PropertyMedia], List[Dict[str, Any]]]:
        """
        Attach several assets. Each item's order defaults to its position in the list.

        Items that fail validation or persistence are reported, the rest are kept.

        Returns:
            Tuple of (created media, errors as {index, message})
        """
        if not await self.property_repo.exists(property_id):
            raise PropertyNotFoundError(property_id)

        created: List[PropertyMedia] = []
        errors: List[Dict[str, Any]] = []
        rolled_back = False

        for index, item in enumerate(items):
            try:
                media_data = MediaCreate.model_validate(item)
                data = media_data.model_dump()
                data["property_id"] = property_id
                if data["order_index"] is None:
                    data["order_index"] = index
                created.append(await self.media_repo.create_media(data))
            except PydanticValidationError as e:
                message = "; ".join(err["msg"] for err in e.errors())
                errors.append({"index": index, "message": message})
            except SQLAlchemyError as e:
                logger.error(f"Failed to save media item {index} for property {property_id}: {e}")
                errors.append({"index": index, "message": "Failed to save media item"})
                rolled_back = True

        # A rollback expires the rows committed earlier in the batch
        if rolled_back:
            for media in created:
                await self.db.refresh(media)

        logger.info(f"Batch media for property {property_id}: {len(created)} created, {len(errors)} failed")
        return created, errors

    async def set_featured(self, property_id: int, media_id: int) -> PropertyMedia:
        """
        Make one media item the property's featured item.

        Raises:
            NotFoundError: If the media doesn't belong to the property
        """
        media = await self.media_repo.set_featured(property_id, media_id)
        if media is None:
            raise NotFoundError("Media", media_id)
        return media

    async def delete_media(self, media_id: int) -> bool:
        """
        Delete a media record, then its CDN asset.

        The CDN delete is best-effort; a failure is logged.
        """
        media = await self.media_repo.get_by_id(media_id)
        if not media:
            raise NotFoundError("Media", media_id)

        storage_id, media_type = media.storage_id, media.media_type
        await self.media_repo.delete(media_id)
        logger.info(f"Media deleted: {media_id}")

        if self.media_store is not None and self.media_store.is_configured:
            try:
                await self.media_store.delete(storage_id, media_type)
            except Exception as e:
                logger.error(f"Failed to delete {storage_id} from media store: {e}")
        else:
            logger.warning(f"Media store unavailable, CDN asset {storage_id} left in place")

        return True
