"""
Monthly payment cycle for members.

Every member carries a "paid this month" flag. Once per calendar month the
flags are bulk-reset to unpaid; in between, the admin flips single members
with a toggle. The tracker gets its member store, reset marker and clock
through the constructor so month boundaries can be driven from tests.
"""
import logging
import threading
from dataclasses import replace
from typing import List, Optional, Protocol

from core.database import get_setting, set_setting
from core.exceptions import NotFound
from core.utils import current_month, month_name
from models.member import Member

logger = logging.getLogger(__name__)

LAST_RESET_KEY = "last_reset_month"


class MemberRepository(Protocol):
    def list(self) -> List[Member]: ...
    def get(self, member_id: str) -> Optional[Member]: ...
    def save(self, member: Member) -> None: ...


class ResetMarker(Protocol):
    def get_last_reset_month(self) -> int: ...
    def set_last_reset_month(self, month: int) -> None: ...


class Clock(Protocol):
    def current_month(self) -> int: ...


class SystemClock:
    """Reads the month from the local calendar."""

    def current_month(self) -> int:
        return current_month()


class FixedClock:
    """A clock frozen on one month. Handy for previews and tests."""

    def __init__(self, month: int):
        if not 1 <= month <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {month}")
        self.month = month

    def current_month(self) -> int:
        return self.month


class SettingsMarker:
    """Keeps the last reset month in the app_settings table. 0 means never reset."""

    def __init__(self, key: str = LAST_RESET_KEY):
        self.key = key

    def get_last_reset_month(self) -> int:
        value = get_setting(self.key, "0")
        try:
            return int(value)
        except (TypeError, ValueError):
            logger.warning("Ignoring malformed %s value %r", self.key, value)
            return 0

    def set_last_reset_month(self, month: int) -> None:
        set_setting(self.key, str(month))


class PaymentCycleTracker:
    """
    Keeps each member's payment flag in step with the current calendar month.
    Reset and toggle hold the same lock, so a toggle never interleaves with a bulk reset.
    """

    def __init__(self, store: MemberRepository, marker: ResetMarker, clock: Optional[Clock] = None):
        self.store = store
        self.marker = marker
        self.clock = clock or SystemClock()
        self._lock = threading.Lock()

    def reset_if_month_changed(self) -> bool:
        """
        Marks every member unpaid the first time it runs in a new month.

        Only the month number is compared (no year), so a marker of 1 still
        matches January of any later year.

        Returns:
            bool: True if a reset was performed, False if the month had not changed.

        Raises:
            StoreError: If loading or saving members fails. The marker is left
                untouched, so the reset runs again on the next call.
        """
        with self._lock:
            month = self.clock.current_month()
            last = self.marker.get_last_reset_month()
            if month == last:
                return False

            members = self.store.list()
            reset_count = 0
            for member in members:
                if member.is_paid:
                    self.store.save(replace(member, is_paid=False))
                    reset_count += 1

            # Only advance once every save has gone through
            self.marker.set_last_reset_month(month)

        logger.info("Payment cycle reset for %s (last reset month %d): %d of %d members marked unpaid",
                    month_name(month), last, reset_count, len(members))
        return True

    def toggle_paid(self, member_id: str) -> Member:
        """
        Flips one member between paid and unpaid.

        Returns:
            Member: The record as stored after the change.

        Raises:
            NotFound: If no member has this id.
            StoreError: If the save fails. The stored flag keeps its old value.
        """
        with self._lock:
            member = self.store.get(member_id)
            if member is None:
                raise NotFound("Member", member_id)

            self.store.save(replace(member, is_paid=not member.is_paid))

            stored = self.store.get(member_id)
            if stored is None:
                raise NotFound("Member", member_id)

        logger.info("Member %s marked %s", stored.name, stored.payment_label.lower())
        return stored
