# =============================================================================
# tests/test_admin_service.py - Gym Owner Profile Tests
# =============================================================================

import sqlite3

import pytest

import config
from core.exceptions import StoreError, ValidationError
from services.admin_service import AdminStore, add_admin, edit_admin, gym_stats
from services.member_service import MemberStore, add_member
from services.trainer_service import TrainerStore, add_trainer


class TestAdminStore:

    def test_empty(self, db):
        assert AdminStore().list() == []

    def test_add_admin(self, db):
        store = AdminStore()
        a = add_admin(store, "Flex", "gym", "khanpur", "secret")

        assert store.list() == [a]
        assert a.gym_address == "khanpur"

    @pytest.mark.parametrize("fields", [
        ("", "gym", "addr", "pw"),
        ("Flex", "", "addr", "pw"),
        ("Flex", "gym", "", "pw"),
        ("Flex", "gym", "addr", ""),
    ])
    def test_all_fields_required(self, db, fields):
        with pytest.raises(ValidationError):
            add_admin(AdminStore(), *fields)

    def test_password_is_not_stored(self, db):
        add_admin(AdminStore(), "Flex", "gym", "khanpur", "super-secret-pw")

        with sqlite3.connect(config.DB_FILE) as conn:
            dump = "\n".join(conn.iterdump())
        assert "super-secret-pw" not in dump

    def test_edit_admin(self, db):
        store = AdminStore()
        a = add_admin(store, "Flex", "gym", "khanpur", "pw")

        edit_admin(store, a, "Flex", "Iron Gym", "Lahore")

        loaded = store.get(a.id)
        assert (loaded.gym_name, loaded.gym_address) == ("Iron Gym", "Lahore")

    def test_admin_cannot_be_deleted(self):
        assert not hasattr(AdminStore, "delete")

    def test_failed_register_removes_copied_photo(self, data_dir, sample_image, monkeypatch):
        def broken_save(self, admin):
            raise StoreError("write failed")
        monkeypatch.setattr(AdminStore, "save", broken_save)

        with pytest.raises(StoreError):
            add_admin(AdminStore(), "Flex", "gym", "khanpur", "pw", photo_source=str(sample_image))

        assert list(config.PHOTOS_FOLDER.iterdir()) == []


class TestGymStats:

    def test_counts(self, db):
        members, trainers = MemberStore(), TrainerStore()
        add_member(members, "A", "20", "1")
        add_member(members, "B", "21", "2")
        add_trainer(trainers, "T", "3")

        assert gym_stats(members, trainers) == {"members": 2, "trainers": 1}
