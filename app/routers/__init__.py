"""
API routers for the Realty Listings API.
"""

from .auth import router as auth_router
from .properties import router as properties_router
from .admin import router as admin_router
from .facilities import router as facilities_router
from .media import router as media_router
from .inquiries import router as inquiries_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "properties_router",
    "admin_router",
    "facilities_router",
    "media_router",
    "inquiries_router",
    "users_router",
]
