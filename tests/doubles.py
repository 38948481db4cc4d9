# =============================================================================
# tests/doubles.py - In-memory collaborators for the payment cycle tests
# =============================================================================

from dataclasses import replace
from typing import Dict, List, Optional

from core.exceptions import StoreError
from models.member import Member, MembershipType


class FakeMemberStore:
    """
    Dict-backed member store.

    Attributes:
        writes: Number of successful save() and update_profile() calls.
        fail_after: If set, writes raise StoreError once this many succeeded.
        fail_on_list: If True, list() raises StoreError.
    """

    def __init__(self, members: Optional[List[Member]] = None):
        self.records: Dict[str, Member] = {m.id: replace(m) for m in (members or [])}
        self.writes = 0
        self.fail_after: Optional[int] = None
        self.fail_on_list = False

    def list(self) -> List[Member]:
        if self.fail_on_list:
            raise StoreError("disk unavailable")
        return [replace(m) for m in self.records.values()]

    def get(self, member_id: str) -> Optional[Member]:
        m = self.records.get(member_id)
        return replace(m) if m else None

    def save(self, member: Member) -> None:
        if self.fail_after is not None and self.writes >= self.fail_after:
            raise StoreError("write failed")
        self.records[member.id] = replace(member)
        self.writes += 1

    def update_profile(self, member: Member) -> bool:
        if self.fail_after is not None and self.writes >= self.fail_after:
            raise StoreError("write failed")
        current = self.records.get(member.id)
        if current is None:
            return False
        self.records[member.id] = replace(member, is_paid=current.is_paid)
        self.writes += 1
        return True

    def delete(self, member: Member) -> None:
        self.records.pop(member.id, None)

    def count(self) -> int:
        return len(self.records)


class FakeMarker:
    def __init__(self, month: int = 0):
        self.month = month
        self.writes = 0

    def get_last_reset_month(self) -> int:
        return self.month

    def set_last_reset_month(self, month: int) -> None:
        self.month = month
        self.writes += 1


def make_member(name: str = "Waseem", paid: bool = False, age: str = "22",
                phone: str = "0300-1234567",
                membership_type: MembershipType = MembershipType.BASIC) -> Member:
    return replace(Member.new(name, age, phone, membership_type), is_paid=paid)
