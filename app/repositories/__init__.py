"""
Repository layer for data access operations.
"""

from app.repositories.base import BaseRepository
from app.repositories.property import PropertyRepository, PropertySearchFilters
from app.repositories.media import MediaRepository
from app.repositories.facility import FacilityRepository
from app.repositories.inquiry import InquiryRepository
from app.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "PropertyRepository",
    "PropertySearchFilters",
    "MediaRepository",
    "FacilityRepository",
    "InquiryRepository",
    "UserRepository"
]
