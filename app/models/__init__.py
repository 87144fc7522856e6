"""
Database models for the Realty Listings API.
Includes User, Property, PropertyMedia, NearbyFacility and Inquiry models.
"""

from app.models.user import User, UserRole
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
from app.models.media import PropertyMedia, MediaType
from app.models.facility import NearbyFacility, FacilityType
from app.models.inquiry import Inquiry, InquiryStatus

__all__ = [
    "User",
    "UserRole",
    "Property",
    "PropertyStatus",
    "PropertyCategory",
    "PropertyType",
    "PropertySubType",
    "AreaUnit",
    "FurnishedStatus",
    "ParkingOption",
    "FacingOption",
    "PropertyMedia",
    "MediaType",
    "NearbyFacility",
    "FacilityType",
    "Inquiry",
    "InquiryStatus",
]
