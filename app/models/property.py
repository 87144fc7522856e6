"""
Property model for sale and rent listings.
Handles listing data, classification enums, location and relationship management.
"""

from sqlalchemy import String, Text, Integer, BigInteger, Boolean, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base, value_enum
import enum
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.media import PropertyMedia
    from app.models.facility import NearbyFacility


class PropertyStatus(str, enum.Enum):
    """Transaction status of a listing."""
    SALE = "sale"
    RENT = "rent"


class PropertyCategory(str, enum.Enum):
    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"


class PropertyType(str, enum.Enum):
    APARTMENT = "apartment"
    INDEPENDENT_HOUSE = "independent-house"
    VILLA = "villa"
    FARM_HOUSE = "farm-house"
    SHOP = "shop"
    BASEMENT = "basement"


class PropertySubType(str, enum.Enum):
    ONE_RK = "1rk"
    ONE_BHK = "1bhk"
    TWO_BHK = "2bhk"
    THREE_BHK = "3bhk"
    FOUR_BHK = "4bhk"
    PLOT = "plot"
    OTHER = "other"


class AreaUnit(str, enum.Enum):
    SQ_FT = "sq_ft"
    SQ_MT = "sq_mt"
    SQ_YD = "sq_yd"


class FurnishedStatus(str, enum.Enum):
    FURNISHED = "furnished"
    SEMI_FURNISHED = "semi-furnished"
    UNFURNISHED = "unfurnished"


class ParkingOption(str, enum.Enum):
    CAR = "car"
    TWO_WHEELER = "two-wheeler"
    BOTH = "both"
    NONE = "none"


class FacingOption(str, enum.Enum):
    EAST = "east"
    WEST = "west"
    NORTH = "north"
    SOUTH = "south"
    ROAD = "road"
    PARK = "park"
    GREENERY = "greenery"


class Property(Base):
    """
    Property listing.
    The slug is derived from the title on creation and never changes afterwards.
    """

    __tablename__ = "properties"

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Property listing title"
    )

    slug: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="URL-safe identifier derived from the title"
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Detailed property description"
    )

    status: Mapped[PropertyStatus] = mapped_column(
        value_enum(PropertyStatus, "property_status"),
        nullable=False,
        index=True,
        comment="Transaction status - sale or rent"
    )

    category: Mapped[PropertyCategory] = mapped_column(
        value_enum(PropertyCategory, "property_category"),
        nullable=False,
        index=True
    )

    property_type: Mapped[PropertyType] = mapped_column(
        value_enum(PropertyType, "property_type"),
        nullable=False,
        index=True
    )

    sub_type: Mapped[Optional[PropertySubType]] = mapped_column(
        value_enum(PropertySubType, "property_sub_type"),
        nullable=True
    )

    # Size and pricing
    area: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Property area expressed in area_unit"
    )

    area_unit: Mapped[AreaUnit] = mapped_column(
        value_enum(AreaUnit, "area_unit"),
        nullable=False,
        default=AreaUnit.SQ_FT
    )

    price: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        index=True,
        comment="Price in the smallest currency unit"
    )

    bedrooms: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    bathrooms: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    balconies: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    # Amenities
    furnished_status: Mapped[Optional[FurnishedStatus]] = mapped_column(
        value_enum(FurnishedStatus, "furnished_status"),
        nullable=True
    )

    parking: Mapped[Optional[ParkingOption]] = mapped_column(
        value_enum(ParkingOption, "parking_option"),
        nullable=True
    )

    facing: Mapped[Optional[FacingOption]] = mapped_column(
        value_enum(FacingOption, "facing_option"),
        nullable=True
    )

    # Location and contact
    address: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    contact_details: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    latitude: Mapped[Optional[str]] = mapped_column(
        String(32),
        nullable=True,
        comment="Latitude as a decimal string"
    )

    longitude: Mapped[Optional[str]] = mapped_column(
        String(32),
        nullable=True,
        comment="Longitude as a decimal string"
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        index=True,
        comment="Whether the listing is shown publicly"
    )

    # Relationships
    media: Mapped[List["PropertyMedia"]] = relationship(
        "PropertyMedia",
        back_populates="property_rel",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="PropertyMedia.is_featured.desc(), PropertyMedia.order_index.asc(), PropertyMedia.id.asc()"
    )

    facilities: Mapped[List["NearbyFacility"]] = relationship(
        "NearbyFacility",
        back_populates="property_rel",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="NearbyFacility.id.asc()"
    )

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, slug={self.slug}, price={self.price})>"

    @property
    def featured_media(self) -> Optional["PropertyMedia"]:
        """Featured media item, falling back to the first one."""
        for item in self.media:
            if item.is_featured:
                return item
        return self.media[0] if self.media else None

    def validate_price(self) -> None:
        if self.price is None or self.price < 0:
            raise ValueError("Property price cannot be negative")

    def validate_area(self) -> None:
        if self.area is None or self.area < 0:
            raise ValueError("Property area cannot be negative")

    def validate_all(self) -> None:
        """
        Run all validation checks on the property.

        Raises:
            ValueError: If any validation fails
        """
        self.validate_price()
        self.validate_area()

    def to_dict(self, include_media: bool = True, include_facilities: bool = True) -> dict:
        """
        Convert property to dictionary.

        Args:
            include_media: Whether to include media items
            include_facilities: Whether to include nearby facilities

        Returns:
            Dictionary representation of property
        """
        result = {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "description": self.description,
            "status": self.status.value,
            "category": self.category.value,
            "property_type": self.property_type.value,
            "sub_type": self.sub_type.value if self.sub_type else None,
            "area": self.area,
            "area_unit": self.area_unit.value,
            "price": self.price,
            "bedrooms": self.bedrooms,
            "bathrooms": self.bathrooms,
            "balconies": self.balconies,
            "furnished_status": self.furnished_status.value if self.furnished_status else None,
            "parking": self.parking.value if self.parking else None,
            "facing": self.facing.value if self.facing else None,
            "address": self.address,
            "contact_details": self.contact_details,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

        if include_media:
            result["media"] = [item.to_dict() for item in self.media]
            featured = self.featured_media
            result["featured_media"] = featured.to_dict() if featured else None

        if include_facilities:
            result["facilities"] = [facility.to_dict() for facility in self.facilities]

        return result


# Composite indexes for the listing filters
status_active_index = Index(
    "idx_properties_status_active_created",
    Property.status,
    Property.is_active,
    Property.created_at.desc()
)

type_category_index = Index(
    "idx_properties_type_category",
    Property.property_type,
    Property.category,
    Property.is_active
)

price_area_index = Index(
    "idx_properties_price_area",
    Property.price,
    Property.area
)
