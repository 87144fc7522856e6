"""
NearbyFacility model for amenities located around a property.
"""

from sqlalchemy import String, Integer, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base, value_enum
import enum
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from app.models.property import Property


class FacilityType(str, enum.Enum):
    SCHOOL = "school"
    HOSPITAL = "hospital"
    MARKET = "market"
    PARK = "park"
    METRO = "metro"
    BUS_STOP = "bus-stop"
    BANK = "bank"
    ATM = "atm"
    RESTAURANT = "restaurant"
    GYM = "gym"
    TEMPLE = "temple"
    MALL = "mall"
    GAS_STATION = "gas-station"
    OTHER = "other"


class NearbyFacility(Base):
    """
    Amenity near a property.

    ``distance`` is the display string shown to visitors, ``distance_value`` the
    canonical distance in meters used by radius queries. Either may be null.
    """

    __tablename__ = "nearby_facilities"

    property_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    facility_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False
    )

    facility_type: Mapped[FacilityType] = mapped_column(
        value_enum(FacilityType, "facility_type"),
        nullable=False,
        index=True
    )

    distance: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
        comment="Human-readable distance, e.g. '1.2 km'"
    )

    distance_value: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        comment="Canonical distance from the property in meters"
    )

    latitude: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    longitude: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)

    property_rel: Mapped["Property"] = relationship(
        "Property",
        back_populates="facilities"
    )

    def __repr__(self) -> str:
        return f"<NearbyFacility(id={self.id}, name={self.facility_name}, distance_value={self.distance_value})>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "property_id": self.property_id,
            "facility_name": self.facility_name,
            "facility_type": self.facility_type.value,
            "distance": self.distance,
            "distance_value": self.distance_value,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


property_type_index = Index(
    "idx_nearby_facilities_property_type",
    NearbyFacility.property_id,
    NearbyFacility.facility_type
)
