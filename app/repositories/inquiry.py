"""
Repository for Inquiry model operations.
"""

from typing import Dict, List, Optional
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
import logging

from app.models.inquiry import Inquiry, InquiryStatus
from app.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class InquiryRepository(BaseRepository[Inquiry]):
    """Repository for Inquiry database operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(Inquiry, db)

    async def get_with_property(self, inquiry_id: int) -> Optional[Inquiry]:
        query = (
            select(Inquiry)
            .options(selectinload(Inquiry.property_rel))
            .where(Inquiry.id == inquiry_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def list_inquiries(
        self,
        property_id: Optional[int] = None,
        status: Optional[InquiryStatus] = None,
        limit: Optional[int] = None
    ) -> List[Inquiry]:
        """
        Inquiries newest first, optionally narrowed to a property and/or status.
        """
        try:
            query = select(Inquiry).options(selectinload(Inquiry.property_rel))

            if property_id is not None:
                query = query.where(Inquiry.property_id == property_id)
            if status is not None:
                query = query.where(Inquiry.status == status)

            query = query.order_by(Inquiry.created_at.desc(), Inquiry.id.desc())
            if limit is not None:
                query = query.limit(limit)

            result = await self.db.execute(query)
            return list(result.scalars().all())
        except Exception as e:
            logger.error(f"Failed to list inquiries: {e}")
            raise

    async def get_status_counts(self) -> Dict[str, int]:
        result = await self.db.execute(
            select(Inquiry.status, func.count(Inquiry.id)).group_by(Inquiry.status)
        )
        counts = {status.value: 0 for status in InquiryStatus}
        for status, count in result.all():
            counts[status.value] = count
        return counts
