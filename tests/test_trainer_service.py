# =============================================================================
# tests/test_trainer_service.py - Trainer Store Tests
# =============================================================================

import pytest

import config
from core.exceptions import StoreError, ValidationError
from models.trainer import Speciality, Trainer
from services.trainer_service import (
    TrainerStore,
    add_trainer,
    delete_trainer,
    edit_trainer,
    filter_trainers,
)


class BrokenTrainerStore(TrainerStore):
    def save(self, trainer):
        raise StoreError("write failed")


class TestTrainerStore:

    def test_add_and_list(self, db):
        store = TrainerStore()
        t = add_trainer(store, "Preview Trainer", "030383", Speciality.CARDIO)

        assert store.list() == [t]
        assert store.get(t.id).speciality is Speciality.CARDIO

    @pytest.mark.parametrize("name,phone", [("", "030383"), ("Coach", "")])
    def test_name_and_phone_required(self, db, name, phone):
        with pytest.raises(ValidationError):
            add_trainer(TrainerStore(), name, phone)

    def test_edit(self, db):
        store = TrainerStore()
        t = add_trainer(store, "Coach", "111")

        edit_trainer(store, t, "Coach Ali", "222", Speciality.CARDIO)

        loaded = store.get(t.id)
        assert (loaded.name, loaded.phone, loaded.speciality) == ("Coach Ali", "222", Speciality.CARDIO)

    def test_delete_removes_record_and_photo(self, db, sample_image):
        store = TrainerStore()
        t = add_trainer(store, "Coach", "111", photo_source=str(sample_image))
        photo = config.PHOTOS_FOLDER / t.photo_path
        assert photo.exists()

        delete_trainer(store, t)

        assert store.count() == 0
        assert not photo.exists()

    def test_unknown_speciality_falls_back_to_strength(self):
        assert Speciality.parse("Yoga") is Speciality.STRENGTH

    def test_failed_add_removes_copied_photo(self, data_dir, sample_image):
        with pytest.raises(StoreError):
            add_trainer(BrokenTrainerStore(), "Coach", "111", photo_source=str(sample_image))

        assert list(config.PHOTOS_FOLDER.iterdir()) == []

    def test_failed_edit_keeps_old_photo_only(self, db, sample_image):
        t = add_trainer(TrainerStore(), "Coach", "111", photo_source=str(sample_image))

        with pytest.raises(StoreError):
            edit_trainer(BrokenTrainerStore(), t, "Coach", "111", Speciality.CARDIO,
                         photo_source=str(sample_image))

        assert [p.name for p in config.PHOTOS_FOLDER.iterdir()] == [t.photo_path]


# =============================================================================
# Search Tests
# =============================================================================

class TestFilterTrainers:

    @pytest.fixture
    def trainers(self):
        return [
            Trainer.new("Coach Ali", "0300-111", Speciality.STRENGTH),
            Trainer.new("Sara", "0321-222", Speciality.CARDIO),
        ]

    def test_empty_query_keeps_everyone(self, trainers):
        assert filter_trainers(trainers, "  ") == trainers

    def test_name_match_is_case_insensitive(self, trainers):
        assert [t.name for t in filter_trainers(trainers, "ALI")] == ["Coach Ali"]

    def test_matches_speciality(self, trainers):
        assert [t.name for t in filter_trainers(trainers, "cardio")] == ["Sara"]

    def test_matches_phone_number(self, trainers):
        assert [t.name for t in filter_trainers(trainers, "0321")] == ["Sara"]

    def test_no_match(self, trainers):
        assert filter_trainers(trainers, "yoga") == []
