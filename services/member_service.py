import logging
import sqlite3
from dataclasses import replace
from enum import Enum
from typing import Iterable, List, Optional

from core.database import get_conn
from core.exceptions import GymError, NotFound, StoreError, ValidationError
from core.utils import contains_ci
from models.member import Member, MembershipType
from services.file_manager import delete_image, save_image

logger = logging.getLogger(__name__)


class PaymentFilter(str, Enum):
    ALL = "All"
    PAID = "Paid"
    UNPAID = "Unpaid"


def _row_to_member(row: sqlite3.Row) -> Member:
    return Member(
        id=row["id"],
        name=row["name"],
        age=row["age"] or "",
        phone=row["phone"],
        membership_type=MembershipType.parse(row["membership_type"]),
        is_paid=bool(row["is_paid"]),
        photo_path=row["photo_path"],
    )


class MemberStore:
    """
    SQLite backed collection of members.
    Every database failure surfaces as a StoreError.
    """

    def list(self) -> List[Member]:
        """Returns all members ordered by name."""
        try:
            with get_conn() as conn:
                rows = conn.execute("SELECT * FROM members ORDER BY name COLLATE NOCASE").fetchall()
        except sqlite3.Error as e:
            logger.error("Database error fetching members: %s", e)
            raise StoreError(f"Could not load members: {e}") from e
        return [_row_to_member(r) for r in rows]

    def get(self, member_id: str) -> Optional[Member]:
        try:
            with get_conn() as conn:
                row = conn.execute("SELECT * FROM members WHERE id=?", (member_id,)).fetchone()
        except sqlite3.Error as e:
            logger.error("Database error fetching member %s: %s", member_id, e)
            raise StoreError(f"Could not load member {member_id}: {e}") from e
        return _row_to_member(row) if row else None

    def save(self, member: Member) -> None:
        """Inserts the member, or replaces the stored record with the same id."""
        try:
            with get_conn() as conn:
                conn.execute(
                    """
                    INSERT INTO members (id, name, age, phone, membership_type, is_paid, photo_path)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    ON CONFLICT(id) DO UPDATE SET
                        name=excluded.name, age=excluded.age, phone=excluded.phone,
                        membership_type=excluded.membership_type, is_paid=excluded.is_paid,
                        photo_path=excluded.photo_path
                    """,
                    (member.id, member.name, member.age, member.phone,
                     member.membership_type.value, int(member.is_paid), member.photo_path),
                )
        except sqlite3.Error as e:
            logger.error("Database error saving member %s: %s", member.id, e)
            raise StoreError(f"Could not save member {member.name}: {e}") from e

    def update_profile(self, member: Member) -> bool:
        """
        Writes the profile fields of an existing member. The stored payment
        flag is never written here, it belongs to the payment cycle.

        Returns:
            bool: False if no member has this id.
        """
        try:
            with get_conn() as conn:
                cur = conn.execute(
                    """
                    UPDATE members SET name=?, age=?, phone=?, membership_type=?, photo_path=?
                    WHERE id=?
                    """,
                    (member.name, member.age, member.phone,
                     member.membership_type.value, member.photo_path, member.id),
                )
                return cur.rowcount > 0
        except sqlite3.Error as e:
            logger.error("Database error updating member %s: %s", member.id, e)
            raise StoreError(f"Could not save member {member.name}: {e}") from e

    def delete(self, member: Member) -> None:
        try:
            with get_conn() as conn:
                conn.execute("DELETE FROM members WHERE id=?", (member.id,))
        except sqlite3.Error as e:
            logger.error("Database error deleting member %s: %s", member.id, e)
            raise StoreError(f"Could not delete member {member.name}: {e}") from e

    def count(self) -> int:
        return len(self.list())


# --- FORM OPERATIONS ---

def _require(name: str, phone: str) -> None:
    if not name.strip() or not phone.strip():
        raise ValidationError("Name and phone number are required.")


def add_member(store: MemberStore, name: str, age: str, phone: str,
               membership_type: MembershipType = MembershipType.BASIC,
               photo_source: Optional[str] = None) -> Member:
    """
    Registers a new (unpaid) member.

    Args:
        store: Where the member is persisted.
        name, age, phone: Form fields. Name and phone are required.
        membership_type: The chosen tier.
        photo_source (str, optional): Image file to copy into the photos folder.

    Returns:
        Member: The saved member.
    """
    _require(name, phone)

    photo = save_image(photo_source) if photo_source else None
    member = Member.new(name.strip(), age.strip(), phone.strip(), membership_type, photo)
    try:
        store.save(member)
    except StoreError:
        delete_image(photo)
        raise
    logger.info("Added member %s (%s)", member.name, member.id)
    return member


def edit_member(store: MemberStore, member: Member, name: str, age: str, phone: str,
                membership_type: MembershipType,
                photo_source: Optional[str] = None) -> Member:
    """
    Saves edited profile fields. A new photo replaces (and deletes) the previous one.

    The payment flag is whatever is stored, not what `member` carries: the
    passed object may predate a monthly reset.

    Raises:
        NotFound: If the member was deleted in the meantime.
    """
    _require(name, phone)

    photo = member.photo_path
    if photo_source:
        photo = save_image(photo_source)

    updated = replace(member, name=name.strip(), age=age.strip(), phone=phone.strip(),
                      membership_type=membership_type, photo_path=photo)
    try:
        if not store.update_profile(updated):
            raise NotFound("Member", member.id)
    except GymError:
        if photo != member.photo_path:
            delete_image(photo)
        raise

    if photo != member.photo_path:
        delete_image(member.photo_path)

    stored = store.get(member.id)
    return stored if stored else updated


def delete_member(store: MemberStore, member: Member) -> None:
    """Deletes the member and their photo."""
    store.delete(member)
    delete_image(member.photo_path)
    logger.info("Deleted member %s (%s)", member.name, member.id)


def filter_members(members: Iterable[Member], query: str = "",
                   payment_filter: PaymentFilter = PaymentFilter.ALL) -> List[Member]:
    """
    Narrows a member list for display.
    The query matches name, membership tier or age (case-insensitive),
    then the payment filter keeps everyone, only paid or only unpaid members.
    """
    q = query.strip()
    result = []
    for m in members:
        if q and not (contains_ci(m.name, q)
                      or contains_ci(m.membership_type.value, q)
                      or contains_ci(m.age, q)):
            continue
        if payment_filter is PaymentFilter.PAID and not m.is_paid:
            continue
        if payment_filter is PaymentFilter.UNPAID and m.is_paid:
            continue
        result.append(m)
    return result
