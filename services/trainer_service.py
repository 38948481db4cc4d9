import logging
import sqlite3
from dataclasses import replace
from typing import Iterable, List, Optional

from core.database import get_conn
from core.exceptions import StoreError, ValidationError
from core.utils import contains_ci
from models.trainer import Speciality, Trainer
from services.file_manager import delete_image, save_image

logger = logging.getLogger(__name__)


def _row_to_trainer(row: sqlite3.Row) -> Trainer:
    return Trainer(
        id=row["id"],
        name=row["name"],
        phone=row["phone"],
        speciality=Speciality.parse(row["speciality"]),
        photo_path=row["photo_path"],
    )


class TrainerStore:
    """SQLite backed collection of trainers."""

    def list(self) -> List[Trainer]:
        try:
            with get_conn() as conn:
                rows = conn.execute("SELECT * FROM trainers ORDER BY name COLLATE NOCASE").fetchall()
        except sqlite3.Error as e:
            logger.error("Database error fetching trainers: %s", e)
            raise StoreError(f"Could not load trainers: {e}") from e
        return [_row_to_trainer(r) for r in rows]

    def get(self, trainer_id: str) -> Optional[Trainer]:
        try:
            with get_conn() as conn:
                row = conn.execute("SELECT * FROM trainers WHERE id=?", (trainer_id,)).fetchone()
        except sqlite3.Error as e:
            logger.error("Database error fetching trainer %s: %s", trainer_id, e)
            raise StoreError(f"Could not load trainer {trainer_id}: {e}") from e
        return _row_to_trainer(row) if row else None

    def save(self, trainer: Trainer) -> None:
        try:
            with get_conn() as conn:
                conn.execute(
                    """
                    INSERT INTO trainers (id, name, phone, speciality, photo_path)
                    VALUES (?, ?, ?, ?, ?)
                    ON CONFLICT(id) DO UPDATE SET
                        name=excluded.name, phone=excluded.phone,
                        speciality=excluded.speciality, photo_path=excluded.photo_path
                    """,
                    (trainer.id, trainer.name, trainer.phone,
                     trainer.speciality.value, trainer.photo_path),
                )
        except sqlite3.Error as e:
            logger.error("Database error saving trainer %s: %s", trainer.id, e)
            raise StoreError(f"Could not save trainer {trainer.name}: {e}") from e

    def delete(self, trainer: Trainer) -> None:
        try:
            with get_conn() as conn:
                conn.execute("DELETE FROM trainers WHERE id=?", (trainer.id,))
        except sqlite3.Error as e:
            logger.error("Database error deleting trainer %s: %s", trainer.id, e)
            raise StoreError(f"Could not delete trainer {trainer.name}: {e}") from e

    def count(self) -> int:
        return len(self.list())


def add_trainer(store: TrainerStore, name: str, phone: str,
                speciality: Speciality = Speciality.STRENGTH,
                photo_source: Optional[str] = None) -> Trainer:
    """Registers a new trainer. Name and phone number are required."""
    if not name.strip() or not phone.strip():
        raise ValidationError("Name and phone number are required.")

    photo = save_image(photo_source) if photo_source else None
    trainer = Trainer.new(name.strip(), phone.strip(), speciality, photo)
    try:
        store.save(trainer)
    except StoreError:
        delete_image(photo)
        raise
    logger.info("Added trainer %s (%s)", trainer.name, trainer.id)
    return trainer


def edit_trainer(store: TrainerStore, trainer: Trainer, name: str, phone: str,
                 speciality: Speciality, photo_source: Optional[str] = None) -> Trainer:
    if not name.strip() or not phone.strip():
        raise ValidationError("Name and phone number are required.")

    photo = save_image(photo_source) if photo_source else trainer.photo_path
    updated = replace(trainer, name=name.strip(), phone=phone.strip(),
                      speciality=speciality, photo_path=photo)
    try:
        store.save(updated)
    except StoreError:
        if photo != trainer.photo_path:
            delete_image(photo)
        raise

    if photo != trainer.photo_path:
        delete_image(trainer.photo_path)
    return updated


def delete_trainer(store: TrainerStore, trainer: Trainer) -> None:
    store.delete(trainer)
    delete_image(trainer.photo_path)
    logger.info("Deleted trainer %s (%s)", trainer.name, trainer.id)


def filter_trainers(trainers: Iterable[Trainer], query: str = "") -> List[Trainer]:
    """Case-insensitive match of the query against name, speciality or phone number."""
    q = query.strip()
    if not q:
        return list(trainers)
    return [t for t in trainers
            if contains_ci(t.name, q) or contains_ci(t.speciality.value, q) or contains_ci(t.phone, q)]
