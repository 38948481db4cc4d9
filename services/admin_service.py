import logging
import sqlite3
from dataclasses import replace
from typing import Dict, List, Optional

from core.database import get_conn
from core.exceptions import StoreError, ValidationError
from models.admin import Admin
from services.file_manager import delete_image, save_image

logger = logging.getLogger(__name__)


def _row_to_admin(row: sqlite3.Row) -> Admin:
    return Admin(
        id=row["id"],
        name=row["name"],
        gym_name=row["gym_name"],
        gym_address=row["gym_address"],
        photo_path=row["photo_path"],
    )


class AdminStore:
    """
    SQLite backed gym owner records.
    There is intentionally no delete: the owner profile can only be edited.
    """

    def list(self) -> List[Admin]:
        try:
            with get_conn() as conn:
                rows = conn.execute("SELECT * FROM admins ORDER BY rowid").fetchall()
        except sqlite3.Error as e:
            logger.error("Database error fetching admins: %s", e)
            raise StoreError(f"Could not load gym owner: {e}") from e
        return [_row_to_admin(r) for r in rows]

    def get(self, admin_id: str) -> Optional[Admin]:
        try:
            with get_conn() as conn:
                row = conn.execute("SELECT * FROM admins WHERE id=?", (admin_id,)).fetchone()
        except sqlite3.Error as e:
            logger.error("Database error fetching admin %s: %s", admin_id, e)
            raise StoreError(f"Could not load gym owner {admin_id}: {e}") from e
        return _row_to_admin(row) if row else None

    def save(self, admin: Admin) -> None:
        try:
            with get_conn() as conn:
                conn.execute(
                    """
                    INSERT INTO admins (id, name, gym_name, gym_address, photo_path)
                    VALUES (?, ?, ?, ?, ?)
                    ON CONFLICT(id) DO UPDATE SET
                        name=excluded.name, gym_name=excluded.gym_name,
                        gym_address=excluded.gym_address, photo_path=excluded.photo_path
                    """,
                    (admin.id, admin.name, admin.gym_name, admin.gym_address, admin.photo_path),
                )
        except sqlite3.Error as e:
            logger.error("Database error saving admin %s: %s", admin.id, e)
            raise StoreError(f"Could not save gym owner {admin.name}: {e}") from e


def _require(name: str, gym_name: str, gym_address: str) -> None:
    if not name.strip() or not gym_name.strip() or not gym_address.strip():
        raise ValidationError("Name, gym name and gym address are required.")


def add_admin(store: AdminStore, name: str, gym_name: str, gym_address: str,
              password: str, photo_source: Optional[str] = None) -> Admin:
    """
    Registers the gym owner profile.

    The owner form asks for a password as confirmation, but the password is
    never stored on the profile: credentials belong to the auth service.

    Raises:
        ValidationError: If any text field (including the password) is empty.
    """
    _require(name, gym_name, gym_address)
    if not password:
        raise ValidationError("Password is required.")

    photo = save_image(photo_source) if photo_source else None
    admin = Admin.new(name.strip(), gym_name.strip(), gym_address.strip(), photo)
    try:
        store.save(admin)
    except StoreError:
        delete_image(photo)
        raise
    logger.info("Registered gym %s owned by %s", admin.gym_name, admin.name)
    return admin


def edit_admin(store: AdminStore, admin: Admin, name: str, gym_name: str, gym_address: str,
               photo_source: Optional[str] = None) -> Admin:
    _require(name, gym_name, gym_address)

    photo = save_image(photo_source) if photo_source else admin.photo_path
    updated = replace(admin, name=name.strip(), gym_name=gym_name.strip(),
                      gym_address=gym_address.strip(), photo_path=photo)
    try:
        store.save(updated)
    except StoreError:
        if photo != admin.photo_path:
            delete_image(photo)
        raise

    if photo != admin.photo_path:
        delete_image(admin.photo_path)
    return updated


def gym_stats(member_store, trainer_store) -> Dict[str, int]:
    """Headline numbers shown on the Gym Owner page."""
    return {
        "members": member_store.count(),
        "trainers": trainer_store.count(),
    }
