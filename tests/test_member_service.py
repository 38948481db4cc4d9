# =============================================================================
# tests/test_member_service.py - Member Store and Form Operation Tests
# =============================================================================

import sqlite3

import pytest

import config
from core.exceptions import NotFound, StoreError, ValidationError
from models.member import Member, MembershipType
from services.member_service import (
    MemberStore,
    PaymentFilter,
    add_member,
    delete_member,
    edit_member,
    filter_members,
)
from services.payment_service import FixedClock, PaymentCycleTracker
from tests.doubles import FakeMarker, FakeMemberStore, make_member


# =============================================================================
# Store Tests
# =============================================================================

class TestMemberStore:

    def test_empty_store_lists_nothing(self, db):
        assert MemberStore().list() == []

    def test_save_and_get(self, db):
        store = MemberStore()
        m = make_member("Waseem", paid=True, membership_type=MembershipType.ULTRA_PREMIUM)
        store.save(m)

        loaded = store.get(m.id)
        assert loaded == m
        assert loaded.membership_type is MembershipType.ULTRA_PREMIUM

    def test_save_replaces_existing_record(self, db):
        store = MemberStore()
        m = make_member("Waseem")
        store.save(m)
        m.name = "Waseem Abbas"
        store.save(m)

        assert store.count() == 1
        assert store.get(m.id).name == "Waseem Abbas"

    def test_list_is_sorted_by_name(self, db):
        store = MemberStore()
        for name in ["zara", "Ali", "bilal"]:
            store.save(make_member(name))

        assert [m.name for m in store.list()] == ["Ali", "bilal", "zara"]

    def test_delete(self, db):
        store = MemberStore()
        m = make_member()
        store.save(m)
        store.delete(m)

        assert store.get(m.id) is None

    def test_get_missing_returns_none(self, db):
        assert MemberStore().get("nope") is None

    def test_unknown_tier_falls_back_to_basic(self, db):
        with sqlite3.connect(config.DB_FILE) as conn:
            conn.execute(
                "INSERT INTO members (id, name, age, phone, membership_type, is_paid) "
                "VALUES ('x', 'Old', '30', '123', 'basics', 0)")

        assert MemberStore().get("x").membership_type is MembershipType.BASIC

    def test_missing_tables_raise_store_error(self, data_dir):
        # Database file exists but init_db() never ran
        with pytest.raises(StoreError):
            MemberStore().list()


# =============================================================================
# Add / Edit / Delete Tests
# =============================================================================

class TestMemberForms:

    def test_add_member_starts_unpaid(self, db):
        store = MemberStore()
        m = add_member(store, " Waseem ", "22", "0300", MembershipType.PREMIUM)

        assert m.is_paid is False
        assert m.name == "Waseem"
        assert store.get(m.id) == m

    @pytest.mark.parametrize("name,phone", [("", "0300"), ("Waseem", ""), ("  ", "0300")])
    def test_add_member_requires_name_and_phone(self, db, name, phone):
        with pytest.raises(ValidationError):
            add_member(MemberStore(), name, "22", phone)

    def test_add_member_copies_photo(self, db, sample_image):
        m = add_member(MemberStore(), "Waseem", "22", "0300", photo_source=str(sample_image))

        assert m.photo_path.endswith(".png")
        assert (config.PHOTOS_FOLDER / m.photo_path).read_bytes() == sample_image.read_bytes()

    def test_edit_keeps_payment_flag(self, db):
        store = MemberStore()
        m = make_member(paid=True)
        store.save(m)

        updated = edit_member(store, m, "New Name", "30", "111", MembershipType.MEDIUM)

        assert updated.is_paid is True
        assert store.get(m.id).name == "New Name"
        assert store.get(m.id).membership_type is MembershipType.MEDIUM

    def test_edit_with_new_photo_removes_old_one(self, db, sample_image):
        store = MemberStore()
        m = add_member(store, "Waseem", "22", "0300", photo_source=str(sample_image))
        old = config.PHOTOS_FOLDER / m.photo_path

        updated = edit_member(store, m, "Waseem", "22", "0300", MembershipType.BASIC,
                              photo_source=str(sample_image))

        assert updated.photo_path != m.photo_path
        assert not old.exists()
        assert (config.PHOTOS_FOLDER / updated.photo_path).exists()

    def test_edit_with_stale_copy_does_not_undo_reset(self, db):
        store = MemberStore()
        m = make_member("Ali", paid=True)
        store.save(m)
        PaymentCycleTracker(store, FakeMarker(3), FixedClock(4)).reset_if_month_changed()

        # m still says paid, the stored record does not
        updated = edit_member(store, m, "Ali Khan", "22", "0300", MembershipType.BASIC)

        assert updated.is_paid is False
        assert updated.name == "Ali Khan"
        assert store.get(m.id).is_paid is False
        assert store.get(m.id).name == "Ali Khan"

    def test_edit_deleted_member_raises_not_found(self, db, sample_image):
        store = MemberStore()
        m = make_member()

        with pytest.raises(NotFound):
            edit_member(store, m, "Waseem", "22", "0300", MembershipType.BASIC,
                        photo_source=str(sample_image))

        assert store.list() == []
        assert list(config.PHOTOS_FOLDER.iterdir()) == []

    def test_failed_add_removes_copied_photo(self, data_dir, sample_image):
        store = FakeMemberStore()
        store.fail_after = 0

        with pytest.raises(StoreError):
            add_member(store, "Waseem", "22", "0300", photo_source=str(sample_image))

        assert list(config.PHOTOS_FOLDER.iterdir()) == []

    def test_failed_edit_keeps_old_photo_only(self, data_dir, sample_image):
        store = FakeMemberStore()
        m = add_member(store, "Waseem", "22", "0300", photo_source=str(sample_image))
        store.fail_after = store.writes

        with pytest.raises(StoreError):
            edit_member(store, m, "Waseem", "22", "0300", MembershipType.BASIC,
                        photo_source=str(sample_image))

        assert [p.name for p in config.PHOTOS_FOLDER.iterdir()] == [m.photo_path]
        assert store.get(m.id).photo_path == m.photo_path

    def test_delete_member_removes_photo(self, db, sample_image):
        store = MemberStore()
        m = add_member(store, "Waseem", "22", "0300", photo_source=str(sample_image))

        delete_member(store, m)

        assert store.list() == []
        assert not (config.PHOTOS_FOLDER / m.photo_path).exists()


# =============================================================================
# Filter Tests
# =============================================================================

class TestFilterMembers:

    @pytest.fixture
    def members(self):
        return [
            make_member("Ali Khan", paid=True, age="25", membership_type=MembershipType.PREMIUM),
            make_member("Sara", paid=False, age="31", membership_type=MembershipType.BASIC),
            make_member("Bilal", paid=False, age="25", membership_type=MembershipType.ULTRA_PREMIUM),
        ]

    def test_no_query_returns_all(self, members):
        assert filter_members(members) == members

    def test_name_match_is_case_insensitive(self, members):
        assert [m.name for m in filter_members(members, "ali")] == ["Ali Khan"]

    def test_matches_tier(self, members):
        assert [m.name for m in filter_members(members, "premium")] == ["Ali Khan", "Bilal"]

    def test_matches_age(self, members):
        assert [m.name for m in filter_members(members, "25")] == ["Ali Khan", "Bilal"]

    def test_paid_filter(self, members):
        assert [m.name for m in filter_members(members, payment_filter=PaymentFilter.PAID)] == ["Ali Khan"]

    def test_unpaid_filter_with_query(self, members):
        result = filter_members(members, "25", PaymentFilter.UNPAID)
        assert [m.name for m in result] == ["Bilal"]


class TestMemberModel:

    def test_new_member_is_unpaid_with_unique_id(self):
        a = Member.new("A", "1", "2")
        b = Member.new("B", "1", "2")
        assert a.is_paid is False
        assert a.id != b.id

    def test_payment_label(self):
        assert make_member(paid=True).payment_label == "Paid"
        assert make_member(paid=False).payment_label == "Unpaid"

    def test_tier_parse(self):
        assert MembershipType.parse("UltraPremium") is MembershipType.ULTRA_PREMIUM
        assert MembershipType.parse(None) is MembershipType.BASIC
