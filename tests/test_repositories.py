"""
Tests for repository classes.
Covers CRUD, the paginated listing query, featured media and inquiry queries.
"""

import pytest

from app.models.user import UserRole
from app.models.property import PropertyStatus, PropertyType, PropertyCategory
from app.models.inquiry import InquiryStatus
from app.repositories.base import BaseRepository
from app.repositories.user import UserRepository
from app.repositories.property import PropertyRepository, PropertySearchFilters
from app.repositories.media import MediaRepository
from app.repositories.facility import FacilityRepository
from app.repositories.inquiry import InquiryRepository
from app.models.property import Property
from tests.conftest import (
    UserFactory,
    PropertyFactory,
    MediaFactory,
    FacilityFactory,
    InquiryFactory,
)


class TestBaseRepository:
    """Test generic CRUD through BaseRepository."""

    async def test_create_and_get(self, db_session):
        repo = BaseRepository(Property, db_session)
        created = await repo.create(PropertyFactory.create_property_data(title="Base Flat"))

        fetched = await repo.get_by_id(created.id)
        assert fetched is not None
        assert fetched.title == "Base Flat"

    async def test_get_missing(self, db_session):
        assert await BaseRepository(Property, db_session).get_by_id(999) is None

    async def test_update_only_given_fields(self, db_session):
        property_obj = await PropertyFactory.create_property(db_session, price=100)
        repo = BaseRepository(Property, db_session)

        updated = await repo.update(property_obj.id, {"price": 250, "address": None})
        assert updated.price == 250
        assert updated.address is None
        assert updated.title == property_obj.title

    async def test_update_missing(self, db_session):
        assert await BaseRepository(Property, db_session).update(999, {"price": 1}) is None

    async def test_delete(self, db_session):
        property_obj = await PropertyFactory.create_property(db_session)
        repo = BaseRepository(Property, db_session)

        assert await repo.delete(property_obj.id) is True
        assert await repo.exists(property_obj.id) is False
        assert await repo.delete(property_obj.id) is False

    async def test_count_with_filters(self, db_session):
        await PropertyFactory.create_property(db_session, is_active=True)
        await PropertyFactory.create_property(db_session, is_active=False)
        repo = BaseRepository(Property, db_session)

        assert await repo.count() == 2
        assert await repo.count({"is_active": True}) == 1

    async def test_get_by_field_unknown_field(self, db_session):
        with pytest.raises(ValueError):
            await BaseRepository(Property, db_session).get_by_field("nope", 1)


class TestUserRepository:
    """Test UserRepository."""

    async def test_create_user_hashes_password(self, db_session):
        user = await UserFactory.create_user(db_session, username="priya", password="secret123")
        assert user.hashed_password != "secret123"
        assert user.verify_password("secret123")
        assert user.role == UserRole.STAFF

    async def test_create_user_invalid_email(self, db_session):
        with pytest.raises(ValueError):
            await UserRepository(db_session).create_user(
                UserFactory.create_user_data(email="not-an-email")
            )

    async def test_get_by_email_is_case_insensitive(self, db_session):
        user = await UserFactory.create_user(db_session, email="Priya@Example.com")
        repo = UserRepository(db_session)

        assert (await repo.get_by_email("PRIYA@example.com")).id == user.id
        assert await repo.get_by_email("other@example.com") is None

    async def test_authenticate_user(self, db_session):
        await UserFactory.create_user(db_session, username="priya", password="secret123")
        repo = UserRepository(db_session)

        assert (await repo.authenticate_user("priya", "secret123")).username == "priya"
        assert await repo.authenticate_user("priya", "wrong-pass") is None
        assert await repo.authenticate_user("nobody", "secret123") is None

    async def test_update_password(self, db_session):
        user = await UserFactory.create_user(db_session, password="secret123")
        repo = UserRepository(db_session)

        updated = await repo.update_password(user.id, "changed123")
        assert updated.verify_password("changed123")
        assert await repo.update_password(999, "changed123") is None

    async def test_count_by_role(self, db_session):
        await UserFactory.create_user(db_session)
        await UserFactory.create_user(db_session, role=UserRole.ADMIN)
        await UserFactory.create_user(db_session, role=UserRole.ADMIN)
        repo = UserRepository(db_session)

        assert await repo.count_by_role(UserRole.ADMIN) == 2
        assert await repo.count_by_role(UserRole.SUPERADMIN) == 0


class TestPropertyRepository:
    """Test PropertyRepository listing and lookups."""

    async def test_create_property_rejects_negative_price(self, db_session):
        with pytest.raises(ValueError):
            await PropertyRepository(db_session).create_property(
                PropertyFactory.create_property_data(price=-1)
            )

    async def test_get_by_slug(self, db_session):
        property_obj = await PropertyFactory.create_property(db_session, slug="sea-view-flat")
        repo = PropertyRepository(db_session)

        assert (await repo.get_by_slug("sea-view-flat")).id == property_obj.id
        assert await repo.get_by_slug("missing") is None
        assert await repo.slug_exists("sea-view-flat") is True
        assert await repo.slug_exists("missing") is False

    async def test_search_total_ignores_pagination(self, db_session):
        for i in range(7):
            await PropertyFactory.create_property(db_session, title=f"Flat {i}")
        repo = PropertyRepository(db_session)

        items, total = await repo.search_properties(PropertySearchFilters(page=2, limit=3))
        assert total == 7
        assert len(items) == 3

        items, total = await repo.search_properties(PropertySearchFilters(page=3, limit=3))
        assert total == 7
        assert len(items) == 1

    async def test_pages_partition_results(self, db_session):
        """Consecutive pages cover every match exactly once."""
        created = [await PropertyFactory.create_property(db_session) for _ in range(8)]
        repo = PropertyRepository(db_session)

        seen = []
        for page in (1, 2, 3):
            items, _ = await repo.search_properties(PropertySearchFilters(page=page, limit=3))
            seen.extend(item.id for item in items)

        assert len(seen) == len(set(seen))
        assert sorted(seen) == sorted(p.id for p in created)

    async def test_newest_first(self, db_session):
        first = await PropertyFactory.create_property(db_session)
        second = await PropertyFactory.create_property(db_session)

        items, _ = await PropertyRepository(db_session).search_properties(PropertySearchFilters())
        assert [item.id for item in items] == [second.id, first.id]

    async def test_equality_filters(self, db_session):
        sale = await PropertyFactory.create_property(db_session, status=PropertyStatus.SALE, bedrooms=2)
        await PropertyFactory.create_property(db_session, status=PropertyStatus.RENT, bedrooms=2)
        await PropertyFactory.create_property(
            db_session, status=PropertyStatus.SALE, bedrooms=3,
            category=PropertyCategory.COMMERCIAL, property_type=PropertyType.SHOP
        )
        repo = PropertyRepository(db_session)

        items, total = await repo.search_properties(
            PropertySearchFilters(status=PropertyStatus.SALE, bedrooms=2)
        )
        assert total == 1
        assert items[0].id == sale.id

        _, total = await repo.search_properties(PropertySearchFilters(property_type=PropertyType.SHOP))
        assert total == 1

    async def test_range_filters(self, db_session):
        await PropertyFactory.create_property(db_session, price=1_000_000, area=500)
        mid = await PropertyFactory.create_property(db_session, price=5_000_000, area=1200)
        await PropertyFactory.create_property(db_session, price=9_000_000, area=3000)
        repo = PropertyRepository(db_session)

        items, total = await repo.search_properties(
            PropertySearchFilters(min_price=2_000_000, max_price=6_000_000)
        )
        assert total == 1 and items[0].id == mid.id

        _, total = await repo.search_properties(PropertySearchFilters(min_area=1200, max_area=3000))
        assert total == 2

    async def test_search_matches_title_or_description(self, db_session):
        await PropertyFactory.create_property(db_session, title="Garden Villa")
        await PropertyFactory.create_property(db_session, title="Flat", description="Large private GARDEN")
        await PropertyFactory.create_property(db_session, title="Shop", description="Main road")
        repo = PropertyRepository(db_session)

        _, total = await repo.search_properties(PropertySearchFilters(search="garden"))
        assert total == 2

    async def test_search_escapes_wildcards(self, db_session):
        await PropertyFactory.create_property(db_session, title="100% power backup")
        await PropertyFactory.create_property(db_session, title="100 sq yd plot")
        repo = PropertyRepository(db_session)

        _, total = await repo.search_properties(PropertySearchFilters(search="100%"))
        assert total == 1

    async def test_is_active_filter(self, db_session):
        await PropertyFactory.create_property(db_session, is_active=True)
        await PropertyFactory.create_property(db_session, is_active=False)
        repo = PropertyRepository(db_session)

        _, total = await repo.search_properties(PropertySearchFilters())
        assert total == 2
        _, total = await repo.search_properties(PropertySearchFilters(is_active=False))
        assert total == 1

    async def test_featured_properties_only_active(self, db_session):
        active = await PropertyFactory.create_property(db_session)
        await PropertyFactory.create_property(db_session, is_active=False)

        featured = await PropertyRepository(db_session).get_featured_properties(3)
        assert [p.id for p in featured] == [active.id]

    async def test_delete_property_cascades_and_detaches_inquiries(self, db_session):
        property_obj = await PropertyFactory.create_property(db_session)
        media = await MediaFactory.create_media(db_session, property_obj.id)
        facility = await FacilityFactory.create_facility(db_session, property_obj.id, distance_value=300)
        inquiry = await InquiryFactory.create_inquiry(db_session, property_id=property_obj.id)

        assert await PropertyRepository(db_session).delete_property(property_obj.id) is True

        assert await MediaRepository(db_session).get_by_id(media.id) is None
        assert await FacilityRepository(db_session).get_by_id(facility.id) is None
        kept = await InquiryRepository(db_session).get_by_id(inquiry.id, refresh=True)
        assert kept is not None
        assert kept.property_id is None

    async def test_delete_missing_property(self, db_session):
        assert await PropertyRepository(db_session).delete_property(999) is False

    async def test_status_counts(self, db_session):
        await PropertyFactory.create_property(db_session, status=PropertyStatus.SALE)
        await PropertyFactory.create_property(db_session, status=PropertyStatus.SALE)
        await PropertyFactory.create_property(db_session, status=PropertyStatus.RENT)

        counts = await PropertyRepository(db_session).get_status_counts()
        assert counts == {"sale": 2, "rent": 1}


class TestMediaRepository:
    """Test MediaRepository featured-media handling."""

    async def test_creating_featured_media_clears_previous(self, db_session):
        property_obj = await PropertyFactory.create_property(db_session)
        old = await MediaFactory.create_media(db_session, property_obj.id, is_featured=True)
        new = await MediaFactory.create_media(db_session, property_obj.id, is_featured=True, order_index=1)
        repo = MediaRepository(db_session)

        items = await repo.get_by_property_id(property_obj.id)
        assert [item.id for item in items if item.is_featured] == [new.id]
        assert await repo.count_featured(property_obj.id) == 1
        assert old.id in [item.id for item in items]

    async def test_set_featured_is_exclusive(self, db_session):
        property_obj = await PropertyFactory.create_property(db_session)
        first = await MediaFactory.create_media(db_session, property_obj.id, is_featured=True)
        second = await MediaFactory.create_media(db_session, property_obj.id, order_index=1)
        repo = MediaRepository(db_session)

        featured = await repo.set_featured(property_obj.id, second.id)
        assert featured.id == second.id
        assert featured.is_featured is True
        assert await repo.count_featured(property_obj.id) == 1

        items = await repo.get_by_property_id(property_obj.id)
        assert items[0].id == second.id
        assert [item for item in items if item.id == first.id][0].is_featured is False

    async def test_set_featured_other_property(self, db_session):
        owner = await PropertyFactory.create_property(db_session)
        other = await PropertyFactory.create_property(db_session)
        media = await MediaFactory.create_media(db_session, owner.id)

        assert await MediaRepository(db_session).set_featured(other.id, media.id) is None

    async def test_count_by_property(self, db_session):
        property_obj = await PropertyFactory.create_property(db_session)
        await MediaFactory.create_media(db_session, property_obj.id)
        await MediaFactory.create_media(db_session, property_obj.id, order_index=1)

        assert await MediaRepository(db_session).count_by_property_id(property_obj.id) == 2


class TestInquiryRepository:
    """Test InquiryRepository queries."""

    async def test_list_filters_and_order(self, db_session):
        property_obj = await PropertyFactory.create_property(db_session)
        general = await InquiryFactory.create_inquiry(db_session)
        about = await InquiryFactory.create_inquiry(db_session, property_id=property_obj.id)
        resolved = await InquiryFactory.create_inquiry(
            db_session, property_id=property_obj.id, status=InquiryStatus.RESOLVED
        )
        repo = InquiryRepository(db_session)

        everything = await repo.list_inquiries()
        assert [i.id for i in everything] == [resolved.id, about.id, general.id]

        for_property = await repo.list_inquiries(property_id=property_obj.id)
        assert {i.id for i in for_property} == {about.id, resolved.id}

        new_only = await repo.list_inquiries(status=InquiryStatus.NEW)
        assert {i.id for i in new_only} == {general.id, about.id}

        assert len(await repo.list_inquiries(limit=1)) == 1

    async def test_status_counts_include_every_status(self, db_session):
        await InquiryFactory.create_inquiry(db_session)
        await InquiryFactory.create_inquiry(db_session, status=InquiryStatus.CONTACTED)

        counts = await InquiryRepository(db_session).get_status_counts()
        assert counts == {"new": 1, "contacted": 1, "resolved": 0}
