"""
Property service for managing property listings with business logic validation.
Handles CRUD operations, slug generation, listing queries and back-office statistics.
"""

from typing import Optional, List, Dict, Any, Tuple
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.property import PropertyRepository, PropertySearchFilters
from app.repositories.media import MediaRepository
from app.repositories.facility import FacilityRepository
from app.repositories.inquiry import InquiryRepository
from app.models.property import (
    Property,
    PropertyStatus,
    PropertyCategory,
    PropertyType,
    PropertySubType,
    AreaUnit,
    FurnishedStatus,
    ParkingOption,
    FacingOption,
)
from app.models.facility import FacilityType
from app.models.inquiry import Inquiry
from app.schemas.property import PropertyCreate, PropertyUpdate
from app.services.storage import MediaStore
from app.utils.exceptions import (
    APIException,
    PropertyNotFoundError,
    ValidationError,
    BadRequestError
)
from app.utils.validators import slugify
import logging

logger = logging.getLogger(__name__)


class PropertyService:
    """
    Property service for listings.
    Public reads and back-office writes both go through here.
    """

    def __init__(self, db_session: AsyncSession, media_store: Optional[MediaStore] = None):
        self.db = db_session
        self.media_store = media_store
        self.property_repo = PropertyRepository(db_session)
        self.media_repo = MediaRepository(db_session)
        self.facility_repo = FacilityRepository(db_session)
        self.inquiry_repo = InquiryRepository(db_session)

    async def list_properties(self, filters: PropertySearchFilters) -> Tuple[List[Property], int]:
        """
        Page of properties matching the filters.

        Returns:
            Tuple of (properties on the page, total matching count)
        """
        properties, total = await self.property_repo.search_properties(filters)
        logger.debug(f"Listing {filters!r} returned {len(properties)} of {total}")
        return properties, total

    async def get_featured_properties(self, limit: int) -> List[Property]:
        return await self.property_repo.get_featured_properties(limit)

    async def get_property(self, property_id: int) -> Property:
        """
        Get property by ID with media and facilities.

        Raises:
            PropertyNotFoundError: If property doesn't exist
        """
        property_obj = await self.property_repo.get_property_with_details(property_id)
        if not property_obj:
            raise PropertyNotFoundError(property_id)
        return property_obj

    async def get_property_by_slug(self, slug: str) -> Property:
        property_obj = await self.property_repo.get_by_slug(slug)
        if not property_obj:
            raise PropertyNotFoundError(slug)
        return property_obj

    async def generate_unique_slug(self, source: str) -> str:
        """
        Slug for a new property; taken slugs get a numeric suffix.

        "Sea View Flat" -> "sea-view-flat", then "sea-view-flat-2", ...
        """
        base = slugify(source)
        candidate = base
        suffix = 2
        while await self.property_repo.slug_exists(candidate):
            candidate = f"{base}-{suffix}"
            suffix += 1
        return candidate

    async def create_property(self, property_data: PropertyCreate) -> Property:
        """
        Create a new property listing.

        Raises:
            BadRequestError: If business rules are violated
        """
        try:
            create_data = property_data.model_dump(exclude={"slug"})
            create_data["slug"] = await self.generate_unique_slug(property_data.slug or property_data.title)

            property_obj = await self.property_repo.create_property(create_data)

            logger.info(f"Property created: {property_obj.title} (ID: {property_obj.id}, slug: {property_obj.slug})")
            return await self.get_property(property_obj.id)

        except (APIException, SQLAlchemyError):
            raise
        except Exception as e:
            logger.error(f"Failed to create property: {e}")
            raise BadRequestError(f"Failed to create property: {str(e)}")

    async def update_property(self, property_id: int, property_data: PropertyUpdate) -> Property:
        """
        Update the fields that were sent. The slug never changes.

        Raises:
            PropertyNotFoundError: If property doesn't exist
            ValidationError: If no fields were sent
        """
        try:
            update_data = property_data.model_dump(exclude_unset=True)
            if not update_data:
                raise ValidationError("No valid fields provided for update")

            non_nullable = {"title", "description", "status", "category", "property_type",
                            "area", "area_unit", "price", "is_active"}
            for field in non_nullable & update_data.keys():
                if update_data[field] is None:
                    raise ValidationError(f"{field} cannot be null")

            updated_property = await self.property_repo.update(property_id, update_data)
            if not updated_property:
                raise PropertyNotFoundError(property_id)

            logger.info(f"Property updated: {property_id} ({', '.join(sorted(update_data))})")
            return await self.get_property(property_id)

        except (APIException, SQLAlchemyError):
            raise
        except Exception as e:
            logger.error(f"Failed to update property {property_id}: {e}")
            raise BadRequestError(f"Failed to update property: {str(e)}")

    async def delete_property(self, property_id: int) -> bool:
        """
        Delete property with its media and facilities; inquiries are detached.

        CDN assets are removed after the database commit. CDN failures are logged
        and do not fail the request.
        """
        property_obj = await self.get_property(property_id)
        stored_assets = [(item.storage_id, item.media_type) for item in property_obj.media]

        deleted = await self.property_repo.delete_property(property_id)
        if not deleted:
            raise PropertyNotFoundError(property_id)

        logger.info(f"Property deleted: {property_id} (with {len(stored_assets)} media items)")
        await self._remove_from_media_store(stored_assets)
        return True

    async def _remove_from_media_store(self, assets) -> None:
        if not assets:
            return
        if self.media_store is None or not self.media_store.is_configured:
            logger.warning(f"Media store unavailable, {len(assets)} CDN assets left in place")
            return

        for storage_id, media_type in assets:
            try:
                await self.media_store.delete(storage_id, media_type)
            except Exception as e:
                logger.error(f"Failed to delete {storage_id} from media store: {e}")

    @staticmethod
    def get_property_types() -> Dict[str, List[str]]:
        """Allowed values of every listing enum."""
        def values(enum_cls):
            return [member.value for member in enum_cls]

        return {
            "property_types": values(PropertyType),
            "property_categories": values(PropertyCategory),
            "status": values(PropertyStatus),
            "sub_types": values(PropertySubType),
            "area_units": values(AreaUnit),
            "furnished_status": values(FurnishedStatus),
            "facing_options": values(FacingOption),
            "parking_options": values(ParkingOption),
            "facility_types": values(FacilityType),
        }

    async def get_dashboard_stats(self) -> Dict[str, Any]:
        """Counts for the back-office overview plus the latest inquiries."""
        properties_by_status = await self.property_repo.get_status_counts()
        inquiries_by_status = await self.inquiry_repo.get_status_counts()
        recent: List[Inquiry] = await self.inquiry_repo.list_inquiries(limit=5)

        return {
            "total_properties": await self.property_repo.count(),
            "active_properties": await self.property_repo.count({"is_active": True}),
            "properties_by_status": properties_by_status,
            "total_inquiries": sum(inquiries_by_status.values()),
            "inquiries_by_status": inquiries_by_status,
            "total_media": await self.media_repo.count(),
            "total_facilities": await self.facility_repo.count(),
            "recent_inquiries": [inquiry.to_dict() for inquiry in recent],
        }
