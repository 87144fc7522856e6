"""
Test configuration and fixtures for the realty listings API.
Provides an in-memory database, fake CDN and e-mail collaborators, test data
factories and authenticated clients.
"""

import os

# Settings are read at import time, so the environment is fixed before the app loads
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["CLOUDINARY_CLOUD_NAME"] = ""
os.environ["EMAIL_API_KEY"] = ""
os.environ["INQUIRY_NOTIFICATION_EMAIL"] = ""

import uuid
from typing import AsyncGenerator, Dict, List, Optional

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.main import app as fastapi_app
from app.database import Base, get_db
from app.models.user import User, UserRole
from app.models.property import Property, PropertyStatus, PropertyCategory, PropertyType
from app.models.media import PropertyMedia, MediaType
from app.models.facility import NearbyFacility, FacilityType
from app.models.inquiry import Inquiry, InquiryStatus
from app.repositories.user import UserRepository
from app.repositories.property import PropertyRepository
from app.repositories.media import MediaRepository
from app.repositories.facility import FacilityRepository
from app.repositories.inquiry import InquiryRepository
from app.services.storage import StoredMedia, build_public_id
from app.utils.auth import create_access_token
from app.utils.dependencies import get_media_store, get_notifier
from app.utils.validators import slugify


TEST_PASSWORD = "testpassword123"


class FakeMediaStore:
    """In-memory stand-in for the CDN."""

    def __init__(self, configured: bool = True):
        self.configured = configured
        self.uploads: List[Dict] = []
        self.deleted: List[str] = []
        self.fail_deletes = False

    @property
    def is_configured(self) -> bool:
        return self.configured

    async def upload(self, file_data: str, folder: str, file_name: Optional[str] = None) -> StoredMedia:
        storage_id = f"{folder}/{build_public_id(file_name)}"
        media_type = MediaType.VIDEO if file_data.startswith("data:video") else MediaType.IMAGE
        self.uploads.append({"folder": folder, "file_name": file_name, "storage_id": storage_id})
        return StoredMedia(
            storage_id=storage_id,
            url=f"https://cdn.example.com/{storage_id}",
            media_type=media_type,
        )

    async def delete(self, storage_id: str, media_type: MediaType = MediaType.IMAGE) -> None:
        if self.fail_deletes:
            raise RuntimeError("CDN unavailable")
        self.deleted.append(storage_id)


class FakeNotifier:
    """Records inquiry notifications instead of sending e-mail."""

    def __init__(self, configured: bool = True):
        self.configured = configured
        self.sent: List[Dict] = []
        self.test_sends = 0
        self.fail = False

    @property
    def is_configured(self) -> bool:
        return self.configured

    async def send_test_email(self) -> bool:
        if self.fail:
            return False
        self.test_sends += 1
        return True

    async def send_inquiry_notification(self, inquiry, property_obj=None) -> bool:
        if self.fail:
            raise RuntimeError("mail API down")
        self.sent.append({
            "inquiry_id": inquiry.id,
            "property_id": property_obj.id if property_obj else None,
        })
        return True


@pytest.fixture
async def test_engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker:
    return async_sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Session used by factories and repository/service tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def media_store() -> FakeMediaStore:
    return FakeMediaStore()


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
async def client(session_factory, media_store, notifier) -> AsyncGenerator[AsyncClient, None]:
    """
    Async client against the app. Each request gets its own session, as in
    production, so no request sees another's identity map.
    """
    async def override_get_db():
        async with session_factory() as session:
            yield session

    fastapi_app.dependency_overrides[get_db] = override_get_db
    fastapi_app.dependency_overrides[get_media_store] = lambda: media_store
    fastapi_app.dependency_overrides[get_notifier] = lambda: notifier

    transport = ASGITransport(app=fastapi_app)
    async with AsyncClient(transport=transport, base_url="http://test") as async_client:
        yield async_client

    fastapi_app.dependency_overrides.clear()


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    def create_user_data(
        username: Optional[str] = None,
        email: Optional[str] = None,
        password: str = TEST_PASSWORD,
        role: UserRole = UserRole.STAFF
    ) -> dict:
        suffix = uuid.uuid4().hex[:8]
        return {
            "username": username or f"user{suffix}",
            "email": email or f"user{suffix}@example.com",
            "password": password,
            "role": role,
        }

    @staticmethod
    async def create_user(session: AsyncSession, **overrides) -> User:
        """Create a test user in the database."""
        return await UserRepository(session).create_user(UserFactory.create_user_data(**overrides))


class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    def create_property_data(
        title: str = "Test Apartment",
        status: PropertyStatus = PropertyStatus.SALE,
        category: PropertyCategory = PropertyCategory.RESIDENTIAL,
        property_type: PropertyType = PropertyType.APARTMENT,
        price: int = 5000000,
        area: int = 1200,
        **extra
    ) -> dict:
        data = {
            "title": title,
            "slug": f"{slugify(title)}-{uuid.uuid4().hex[:6]}",
            "description": "A bright apartment close to the metro",
            "status": status,
            "category": category,
            "property_type": property_type,
            "price": price,
            "area": area,
            "is_active": True,
        }
        data.update(extra)
        return data

    @staticmethod
    async def create_property(session: AsyncSession, **overrides) -> Property:
        """Create a test property in the database."""
        data = PropertyFactory.create_property_data(**overrides)
        return await PropertyRepository(session).create_property(data)


class MediaFactory:
    """Factory for creating test media records."""

    @staticmethod
    async def create_media(
        session: AsyncSession,
        property_id: int,
        is_featured: bool = False,
        order_index: int = 0,
        media_type: MediaType = MediaType.IMAGE
    ) -> PropertyMedia:
        storage_id = f"realty-listings/{property_id}/{uuid.uuid4().hex[:8]}"
        return await MediaRepository(session).create_media({
            "property_id": property_id,
            "storage_id": storage_id,
            "url": f"https://cdn.example.com/{storage_id}",
            "media_type": media_type,
            "is_featured": is_featured,
            "order_index": order_index,
        })


class FacilityFactory:
    """Factory for creating test facilities with a stored distance."""

    @staticmethod
    async def create_facility(
        session: AsyncSession,
        property_id: int,
        facility_name: str = "City School",
        facility_type: FacilityType = FacilityType.SCHOOL,
        distance: Optional[str] = None,
        distance_value: Optional[int] = None
    ) -> NearbyFacility:
        return await FacilityRepository(session).create({
            "property_id": property_id,
            "facility_name": facility_name,
            "facility_type": facility_type,
            "distance": distance,
            "distance_value": distance_value,
        })


class InquiryFactory:
    """Factory for creating test inquiries."""

    @staticmethod
    def create_inquiry_data(property_id: Optional[int] = None, **extra) -> dict:
        data = {
            "name": "Priya Sharma",
            "email": "priya@example.com",
            "phone": "+91 98200 00000",
            "message": "Is the flat still available?",
            "property_id": property_id,
        }
        data.update(extra)
        return data

    @staticmethod
    async def create_inquiry(
        session: AsyncSession,
        property_id: Optional[int] = None,
        status: InquiryStatus = InquiryStatus.NEW,
        **extra
    ) -> Inquiry:
        data = InquiryFactory.create_inquiry_data(property_id, status=status, **extra)
        return await InquiryRepository(session).create(data)


def auth_headers_for(user: User) -> Dict[str, str]:
    token = create_access_token(user_id=user.id, username=user.username, role=user.role)
    return {"Authorization": f"Bearer {token}"}


# Common test fixtures
@pytest.fixture
async def staff_user(db_session: AsyncSession) -> User:
    return await UserFactory.create_user(db_session, username="staff", email="staff@example.com")


@pytest.fixture
async def admin_user(db_session: AsyncSession) -> User:
    return await UserFactory.create_user(
        db_session, username="admin", email="admin@example.com", role=UserRole.ADMIN
    )


@pytest.fixture
async def superadmin_user(db_session: AsyncSession) -> User:
    return await UserFactory.create_user(
        db_session, username="root", email="root@example.com", role=UserRole.SUPERADMIN
    )


@pytest.fixture
def staff_headers(staff_user: User) -> Dict[str, str]:
    return auth_headers_for(staff_user)


@pytest.fixture
def admin_headers(admin_user: User) -> Dict[str, str]:
    return auth_headers_for(admin_user)


@pytest.fixture
def superadmin_headers(superadmin_user: User) -> Dict[str, str]:
    return auth_headers_for(superadmin_user)


@pytest.fixture
async def test_property(db_session: AsyncSession) -> Property:
    """Active sale listing with coordinates in South Delhi."""
    return await PropertyFactory.create_property(
        db_session,
        title="Park Facing Flat",
        latitude="28.5355",
        longitude="77.2410",
        bedrooms=3,
    )
