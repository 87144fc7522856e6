"""
Tests for database models.
Covers validation helpers, derived properties and dictionary serialization.
"""

import pytest

from app.models.user import User, UserRole
from app.models.property import Property, PropertyStatus, AreaUnit, FurnishedStatus
from app.models.facility import FacilityType
from app.repositories.inquiry import InquiryRepository
from app.repositories.property import PropertyRepository
from tests.conftest import (
    UserFactory,
    PropertyFactory,
    MediaFactory,
    FacilityFactory,
    InquiryFactory,
)


async def reload_property(session, property_id):
    return await PropertyRepository(session).get_property_with_details(property_id)


class TestUserModel:
    """Test User model validation and methods."""

    def test_email_validation_valid(self):
        """Addresses are normalized to lower case."""
        for email in ["test@example.com", "User.Name@Example.co.uk", "user+tag@example.org"]:
            assert User.validate_email_format(email) == email.lower()

    @pytest.mark.parametrize("email", ["invalid-email", "@example.com", "test@", "test..test@example.com"])
    def test_email_validation_invalid(self, email):
        with pytest.raises(ValueError, match="Invalid email format"):
            User.validate_email_format(email)

    def test_password_hashing(self):
        hashed = User.hash_password("secret123")
        assert hashed != "secret123"
        assert hashed.startswith("$pbkdf2-sha512$")

    @pytest.mark.parametrize("password", ["", "short"])
    def test_password_too_short(self, password):
        with pytest.raises(ValueError, match="at least 6 characters"):
            User.hash_password(password)

    def test_password_verification(self):
        user = User(username="priya", email="priya@example.com", hashed_password=User.hash_password("secret123"))
        assert user.verify_password("secret123")
        assert not user.verify_password("wrong-password")

    def test_set_password(self):
        user = User(username="priya", email="priya@example.com", hashed_password=User.hash_password("secret123"))
        user.set_password("another123")
        assert user.verify_password("another123")
        assert not user.verify_password("secret123")

    def test_role_properties(self):
        staff = User(username="s", email="s@example.com", hashed_password="x", role=UserRole.STAFF)
        admin = User(username="a", email="a@example.com", hashed_password="x", role=UserRole.ADMIN)
        root = User(username="r", email="r@example.com", hashed_password="x", role=UserRole.SUPERADMIN)

        assert not staff.is_admin and not staff.is_superadmin
        assert admin.is_admin and not admin.is_superadmin
        assert root.is_admin and root.is_superadmin

    async def test_to_dict_excludes_password(self, db_session):
        user = await UserFactory.create_user(db_session, username="priya", email="Priya@Example.com")
        data = user.to_dict()

        assert data["username"] == "priya"
        assert data["email"] == "priya@example.com"
        assert data["role"] == "staff"
        assert "hashed_password" not in data
        assert "password" not in data

    def test_user_repr(self):
        user = User(id=3, username="priya", email="priya@example.com", hashed_password="x", role=UserRole.ADMIN)
        assert "priya" in repr(user)


class TestPropertyModel:
    """Test Property model validation and serialization."""

    def test_validate_all_accepts_zero(self):
        Property(title="Plot", price=0, area=0).validate_all()

    def test_negative_price_rejected(self):
        with pytest.raises(ValueError, match="price"):
            Property(title="Plot", price=-1, area=100).validate_all()

    def test_negative_area_rejected(self):
        with pytest.raises(ValueError, match="area"):
            Property(title="Plot", price=100, area=-5).validate_all()

    async def test_defaults_applied_on_insert(self, db_session):
        property_obj = await PropertyFactory.create_property(db_session)

        assert property_obj.id is not None
        assert property_obj.area_unit == AreaUnit.SQ_FT
        assert property_obj.is_active is True
        assert property_obj.created_at is not None
        assert property_obj.updated_at is not None

    async def test_featured_media_prefers_flag(self, db_session):
        property_obj = await PropertyFactory.create_property(db_session)
        await MediaFactory.create_media(db_session, property_obj.id, order_index=0)
        featured = await MediaFactory.create_media(db_session, property_obj.id, is_featured=True, order_index=1)

        reloaded = await reload_property(db_session, property_obj.id)
        assert reloaded.featured_media.id == featured.id
        assert reloaded.media[0].id == featured.id

    async def test_featured_media_falls_back_to_first(self, db_session):
        property_obj = await PropertyFactory.create_property(db_session)
        second = await MediaFactory.create_media(db_session, property_obj.id, order_index=1)
        first = await MediaFactory.create_media(db_session, property_obj.id, order_index=0)

        reloaded = await reload_property(db_session, property_obj.id)
        assert [item.id for item in reloaded.media] == [first.id, second.id]
        assert reloaded.featured_media.id == first.id

    async def test_featured_media_none_without_media(self, db_session):
        property_obj = await PropertyFactory.create_property(db_session)
        reloaded = await reload_property(db_session, property_obj.id)
        assert reloaded.featured_media is None

    async def test_to_dict(self, db_session):
        property_obj = await PropertyFactory.create_property(
            db_session,
            title="Corner Villa",
            status=PropertyStatus.RENT,
            furnished_status=FurnishedStatus.SEMI_FURNISHED,
        )
        await FacilityFactory.create_facility(db_session, property_obj.id, distance="800 m", distance_value=800)

        data = (await reload_property(db_session, property_obj.id)).to_dict()

        assert data["title"] == "Corner Villa"
        assert data["status"] == "rent"
        assert data["furnished_status"] == "semi-furnished"
        assert data["sub_type"] is None
        assert data["media"] == []
        assert data["featured_media"] is None
        assert len(data["facilities"]) == 1
        assert data["facilities"][0]["distance_value"] == 800

    async def test_to_dict_without_relations(self, db_session):
        property_obj = await PropertyFactory.create_property(db_session)
        data = (await reload_property(db_session, property_obj.id)).to_dict(
            include_media=False, include_facilities=False
        )
        assert "media" not in data
        assert "facilities" not in data


class TestFacilityAndMediaModels:
    """Test NearbyFacility and PropertyMedia serialization."""

    async def test_facility_to_dict(self, db_session):
        property_obj = await PropertyFactory.create_property(db_session)
        facility = await FacilityFactory.create_facility(
            db_session,
            property_obj.id,
            facility_name="Metro Station",
            facility_type=FacilityType.METRO,
            distance="1.2 km",
            distance_value=1200,
        )
        data = facility.to_dict()

        assert data["facility_type"] == "metro"
        assert data["distance"] == "1.2 km"
        assert data["distance_value"] == 1200
        assert data["property_id"] == property_obj.id

    async def test_media_to_dict(self, db_session):
        property_obj = await PropertyFactory.create_property(db_session)
        media = await MediaFactory.create_media(db_session, property_obj.id, is_featured=True)
        data = media.to_dict()

        assert data["media_type"] == "image"
        assert data["is_featured"] is True
        assert data["url"].startswith("https://cdn.example.com/")


class TestInquiryModel:
    """Test Inquiry serialization."""

    async def test_to_dict_with_property(self, db_session):
        property_obj = await PropertyFactory.create_property(db_session, title="Sea View Flat")
        inquiry = await InquiryFactory.create_inquiry(db_session, property_id=property_obj.id)

        data = (await InquiryRepository(db_session).get_with_property(inquiry.id)).to_dict()

        assert data["status"] == "new"
        assert data["property_title"] == "Sea View Flat"
        assert data["property_slug"] == property_obj.slug

    async def test_to_dict_general_inquiry(self, db_session):
        inquiry = await InquiryFactory.create_inquiry(db_session)

        data = (await InquiryRepository(db_session).get_with_property(inquiry.id)).to_dict()

        assert data["property_id"] is None
        assert data["property_title"] is None
        assert data["property_slug"] is None
