import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MembershipType(str, Enum):
    """The membership plan a member is enrolled on."""
    BASIC = "Basic"
    MEDIUM = "Medium"
    PREMIUM = "Premium"
    ULTRA_PREMIUM = "UltraPremium"

    @classmethod
    def parse(cls, value: Optional[str]) -> "MembershipType":
        """Maps a stored string back to a tier, falling back to Basic."""
        try:
            return cls(value)
        except ValueError:
            return cls.BASIC


@dataclass
class Member:
    """
    Represents a single gym member's profile and payment status for the current month.
    """
    id: str
    name: str
    age: str    # Free text, as typed by the admin
    phone: str
    membership_type: MembershipType = MembershipType.BASIC
    is_paid: bool = False  # Paid for the current calendar month
    photo_path: Optional[str] = None  # File name inside the photos folder

    @classmethod
    def new(cls, name: str, age: str, phone: str,
            membership_type: MembershipType = MembershipType.BASIC,
            photo_path: Optional[str] = None) -> "Member":
        """Creates a brand new member. New members always start unpaid."""
        return cls(
            id=uuid.uuid4().hex,
            name=name,
            age=age,
            phone=phone,
            membership_type=membership_type,
            is_paid=False,
            photo_path=photo_path,
        )

    @property
    def payment_label(self) -> str:
        return "Paid" if self.is_paid else "Unpaid"
