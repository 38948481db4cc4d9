import datetime
import re

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def month_name(m: int) -> str:
    """
    Returns the full name of a month.
    Example: 1 -> 'January', 2 -> 'February'.
    """
    # 1900 is an arbitrary valid year used just to format the month name
    return datetime.date(1900, m, 1).strftime("%B")


def current_month() -> int:
    """Month number (1-12) of today's date in the local time zone."""
    return datetime.date.today().month


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email.strip()))


def contains_ci(haystack: str, needle: str) -> bool:
    """Case-insensitive substring check. Empty needles always match."""
    return needle.casefold() in (haystack or "").casefold()
