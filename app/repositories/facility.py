"""
Repository for NearbyFacility model operations.
"""

from typing import List
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.facility import NearbyFacility
from app.repositories.base import BaseRepository


class FacilityRepository(BaseRepository[NearbyFacility]):
    """Repository for NearbyFacility database operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(NearbyFacility, db)

    async def get_by_property_id(self, property_id: int) -> List[NearbyFacility]:
        query = (
            select(NearbyFacility)
            .where(NearbyFacility.property_id == property_id)
            .order_by(NearbyFacility.id.asc())
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())
