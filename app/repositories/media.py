"""
Repository for PropertyMedia model operations.
"""

from typing import List, Optional, Dict, Any
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.models.media import PropertyMedia
from app.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class MediaRepository(BaseRepository[PropertyMedia]):
    """Repository for PropertyMedia database operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(PropertyMedia, db)

    async def get_by_property_id(self, property_id: int) -> List[PropertyMedia]:
        """
        Media of a property, featured first, then by display order.
        """
        query = (
            select(PropertyMedia)
            .where(PropertyMedia.property_id == property_id)
            .order_by(
                PropertyMedia.is_featured.desc(),
                PropertyMedia.order_index.asc(),
                PropertyMedia.id.asc()
            )
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def count_by_property_id(self, property_id: int) -> int:
        result = await self.db.execute(
            select(func.count(PropertyMedia.id)).where(PropertyMedia.property_id == property_id)
        )
        return result.scalar() or 0

    async def create_media(self, media_data: Dict[str, Any]) -> PropertyMedia:
        """
        Create a media record.

        When the new item is featured, the property's other items lose the flag
        in the same transaction.
        """
        siblings = []
        if media_data.get("is_featured"):
            siblings = await self.get_by_property_id(media_data["property_id"])

        media = PropertyMedia(**media_data)
        async with self._writing(f"create for property {media_data.get('property_id')}"):
            for item in siblings:
                item.is_featured = False
            self.db.add(media)
        await self.db.refresh(media)
        logger.info(f"Created media {media.id} for property {media.property_id}")
        return media

    async def set_featured(self, property_id: int, media_id: int) -> Optional[PropertyMedia]:
        """
        Make one media item the property's only featured item.

        Clearing the old flag and setting the new one commit together, so readers
        never see zero or two featured items.

        Returns:
            The featured media, or None if it does not belong to the property
        """
        items = await self.get_by_property_id(property_id)
        target = next((item for item in items if item.id == media_id), None)
        if target is None:
            logger.debug(f"Media {media_id} not found on property {property_id}")
            return None

        async with self._writing(f"featured update of {media_id}"):
            for item in items:
                item.is_featured = item.id == media_id
        await self.db.refresh(target)
        logger.info(f"Media {media_id} set as featured for property {property_id}")
        return target

    async def count_featured(self, property_id: int) -> int:
        result = await self.db.execute(
            select(func.count(PropertyMedia.id)).where(
                PropertyMedia.property_id == property_id,
                PropertyMedia.is_featured.is_(True)
            )
        )
        return result.scalar() or 0
