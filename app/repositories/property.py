"""
Property repository for managing listings with filtering and pagination.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_, or_, func, update
from sqlalchemy.orm import selectinload
from app.repositories.base import BaseRepository
from app.models.property import (
    Property,
    PropertyStatus,
    PropertyCategory,
    PropertyType,
    PropertySubType,
    FurnishedStatus,
    ParkingOption,
    FacingOption,
)
from app.models.inquiry import Inquiry
from typing import Optional, List, Dict, Any, Tuple
import logging

logger = logging.getLogger(__name__)


class PropertySearchFilters:
    """Normalized listing criteria. None means "no constraint"."""

    def __init__(
        self,
        status: Optional[PropertyStatus] = None,
        category: Optional[PropertyCategory] = None,
        property_type: Optional[PropertyType] = None,
        sub_type: Optional[PropertySubType] = None,
        min_price: Optional[int] = None,
        max_price: Optional[int] = None,
        min_area: Optional[int] = None,
        max_area: Optional[int] = None,
        bedrooms: Optional[int] = None,
        bathrooms: Optional[int] = None,
        furnished_status: Optional[FurnishedStatus] = None,
        parking: Optional[ParkingOption] = None,
        facing: Optional[FacingOption] = None,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
        page: int = 1,
        limit: int = 9
    ):
        self.status = status
        self.category = category
        self.property_type = property_type
        self.sub_type = sub_type
        self.min_price = min_price
        self.max_price = max_price
        self.min_area = min_area
        self.max_area = max_area
        self.bedrooms = bedrooms
        self.bathrooms = bathrooms
        self.furnished_status = furnished_status
        self.parking = parking
        self.facing = facing
        self.search = search
        self.is_active = is_active
        self.page = page
        self.limit = limit

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def __repr__(self) -> str:
        active = {k: v for k, v in vars(self).items() if v is not None}
        return f"<PropertySearchFilters({active})>"


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class PropertyRepository(BaseRepository[Property]):
    """
    Repository for property listings.
    Listing queries are ordered newest first with the id as tie-breaker, so
    consecutive pages never overlap.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)

    def _with_details(self, query):
        return query.options(
            selectinload(Property.media),
            selectinload(Property.facilities)
        )

    async def create_property(self, property_data: Dict[str, Any]) -> Property:
        """
        Create a new property with validation.

        Raises:
            ValueError: If validation fails
        """
        property_obj = Property(**property_data)
        property_obj.validate_all()

        created_property = await self.create(property_data)
        logger.info(f"Created property: {created_property.title} (ID: {created_property.id})")
        return created_property

    async def get_property_with_details(self, property_id: int) -> Optional[Property]:
        """
        Get property with media and facilities loaded.

        Args:
            property_id: ID of the property

        Returns:
            Property with loaded relationships or None if not found
        """
        try:
            query = self._with_details(
                select(Property).where(Property.id == property_id)
            ).execution_options(populate_existing=True)

            result = await self.db.execute(query)
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error(f"Failed to get property with details {property_id}: {e}")
            raise

    async def get_by_slug(self, slug: str) -> Optional[Property]:
        try:
            query = self._with_details(select(Property).where(Property.slug == slug))
            result = await self.db.execute(query)
            return result.scalar_one_or_none()
        except Exception as e:
            logger.error(f"Failed to get property by slug {slug}: {e}")
            raise

    async def slug_exists(self, slug: str) -> bool:
        result = await self.db.execute(select(func.count(Property.id)).where(Property.slug == slug))
        return (result.scalar() or 0) > 0

    async def search_properties(self, filters: PropertySearchFilters) -> Tuple[List[Property], int]:
        """
        Page of properties matching every active constraint, plus the total match count.

        Args:
            filters: Normalized search criteria including page and limit

        Returns:
            Tuple of (properties on the requested page, total matching count)
        """
        try:
            conditions = self._build_filter_conditions(filters)

            count_query = select(func.count(Property.id))
            query = self._with_details(select(Property))

            if conditions:
                count_query = count_query.where(and_(*conditions))
                query = query.where(and_(*conditions))

            count_result = await self.db.execute(count_query)
            total_count = count_result.scalar() or 0

            query = (
                query.order_by(Property.created_at.desc(), Property.id.desc())
                .offset(filters.offset)
                .limit(filters.limit)
            )

            result = await self.db.execute(query)
            properties = list(result.scalars().all())

            logger.debug(
                f"Property search returned {len(properties)} of {total_count} results "
                f"(page={filters.page}, limit={filters.limit})"
            )
            return properties, total_count
        except Exception as e:
            logger.error(f"Failed to search properties: {e}")
            raise

    def _build_filter_conditions(self, filters: PropertySearchFilters) -> List:
        """
        Build filter conditions for property search.

        Args:
            filters: PropertySearchFilters instance

        Returns:
            List of SQLAlchemy filter conditions
        """
        conditions = []

        equality_filters = (
            (Property.status, filters.status),
            (Property.category, filters.category),
            (Property.property_type, filters.property_type),
            (Property.sub_type, filters.sub_type),
            (Property.furnished_status, filters.furnished_status),
            (Property.parking, filters.parking),
            (Property.facing, filters.facing),
            (Property.bedrooms, filters.bedrooms),
            (Property.bathrooms, filters.bathrooms),
            (Property.is_active, filters.is_active),
        )
        for column, value in equality_filters:
            if value is not None:
                conditions.append(column == value)

        # Range filters
        if filters.min_price is not None:
            conditions.append(Property.price >= filters.min_price)
        if filters.max_price is not None:
            conditions.append(Property.price <= filters.max_price)
        if filters.min_area is not None:
            conditions.append(Property.area >= filters.min_area)
        if filters.max_area is not None:
            conditions.append(Property.area <= filters.max_area)

        # Case-insensitive substring search on title and description
        if filters.search:
            pattern = f"%{_escape_like(filters.search)}%"
            conditions.append(
                or_(
                    Property.title.ilike(pattern, escape="\\"),
                    Property.description.ilike(pattern, escape="\\")
                )
            )

        return conditions

    async def get_featured_properties(self, limit: int) -> List[Property]:
        """Newest active listings."""
        properties, _ = await self.search_properties(
            PropertySearchFilters(is_active=True, page=1, limit=limit)
        )
        return properties

    async def delete_property(self, property_id: int) -> bool:
        """
        Delete a property with its media and facilities.
        Inquiries about it are kept and detached.
        """
        property_obj = await self.get_property_with_details(property_id)
        if property_obj is None:
            return False

        async with self._writing(f"delete of {property_id}"):
            await self.db.execute(
                update(Inquiry)
                .where(Inquiry.property_id == property_id)
                .values(property_id=None)
                .execution_options(synchronize_session=False)
            )
            await self.db.delete(property_obj)

        logger.info(f"Deleted property {property_id}")
        return True

    async def get_status_counts(self) -> Dict[str, int]:
        result = await self.db.execute(
            select(Property.status, func.count(Property.id)).group_by(Property.status)
        )
        counts = {status.value: 0 for status in PropertyStatus}
        for status, count in result.all():
            counts[status.value] = count
        return counts
