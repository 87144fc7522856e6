"""
Service layer for business logic implementation.
Contains services for listings, media, facilities, inquiries, users and error handling.
"""

from .auth import AuthService
from .property import PropertyService
from .media import MediaService
from .facility import FacilityService
from .inquiry import InquiryService
from .user import UserService
from .storage import MediaStore, StoredMedia, CloudinaryMediaStore
from .notifier import Notifier, EmailNotifier
from .error_handler import ErrorHandlerService

__all__ = [
    "AuthService",
    "PropertyService",
    "MediaService",
    "FacilityService",
    "InquiryService",
    "UserService",
    "MediaStore",
    "StoredMedia",
    "CloudinaryMediaStore",
    "Notifier",
    "EmailNotifier",
    "ErrorHandlerService"
]
