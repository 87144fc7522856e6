"""
Nearby facility service.
Facilities get a canonical distance on creation; radius queries filter on it at read time.
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from app.config import settings
from app.models.facility import NearbyFacility
from app.repositories.facility import FacilityRepository
from app.repositories.property import PropertyRepository
from app.schemas.facility import FacilityCreate
from app.utils.distance import normalize_facility_distance, filter_facilities_by_radius
from app.utils.exceptions import NotFoundError, PropertyNotFoundError
import logging

logger = logging.getLogger(__name__)


class FacilityService:
    """Facilities attached to properties."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.facility_repo = FacilityRepository(db_session)
        self.property_repo = PropertyRepository(db_session)

    async def create_facility(self, property_id: int, facility_data: FacilityCreate) -> NearbyFacility:
        """
        Add a facility to a property.

        The stored distance comes from, in order: the explicit meters value, the
        display text, or the coordinates of property and facility. A facility
        whose distance cannot be worked out is still saved, without one.

        Raises:
            PropertyNotFoundError: If the property doesn't exist
        """
        property_obj = await self.property_repo.get_by_id(property_id)
        if not property_obj:
            raise PropertyNotFoundError(property_id)

        normalized = normalize_facility_distance(
            distance_value=facility_data.distance_value,
            distance_text=facility_data.distance,
            property_coordinates=(property_obj.latitude, property_obj.longitude),
            facility_coordinates=(facility_data.latitude, facility_data.longitude),
        )

        facility = await self.facility_repo.create({
            "property_id": property_id,
            "facility_name": facility_data.facility_name,
            "facility_type": facility_data.facility_type,
            "distance": normalized.distance,
            "distance_value": normalized.distance_value,
            "latitude": facility_data.latitude,
            "longitude": facility_data.longitude,
        })

        if normalized.distance_value is None:
            logger.warning(f"Facility {facility.id} saved without a known distance")
        logger.info(
            f"Facility created: {facility.facility_name} for property {property_id} "
            f"({normalized.distance_value} m)"
        )
        return facility

    async def get_nearby_facilities(
        self,
        property_id: int,
        radius_km: Optional[float] = None,
        facility_type: Optional[str] = None
    ) -> List[NearbyFacility]:
        """
        Facilities of a property within ``radius_km``, nearest first.

        Raises:
            PropertyNotFoundError: If the property doesn't exist
        """
        if not await self.property_repo.exists(property_id):
            raise PropertyNotFoundError(property_id)

        if radius_km is None or radius_km <= 0:
            radius_km = settings.default_radius_km

        facilities = await self.facility_repo.get_by_property_id(property_id)
        nearby = filter_facilities_by_radius(facilities, radius_km, facility_type)

        logger.debug(
            f"{len(nearby)} of {len(facilities)} facilities within {radius_km} km of property {property_id}"
        )
        return nearby

    async def delete_facility(self, facility_id: int) -> bool:
        deleted = await self.facility_repo.delete(facility_id)
        if not deleted:
            raise NotFoundError("Facility", facility_id)
        logger.info(f"Facility deleted: {facility_id}")
        return True
