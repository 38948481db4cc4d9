"""
Exception types shared by the services layer.
Services raise these; the dialogs catch them and show a message box.
"""


class GymError(Exception):
    """Base class for every error raised by the application services."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StoreError(GymError):
    """Raised when the database (or photo folder) cannot be read or written."""


class NotFound(GymError):
    """Raised when a record id does not resolve to a stored record."""

    def __init__(self, kind: str, record_id: str):
        super().__init__(f"{kind} not found: {record_id}")
        self.kind = kind
        self.record_id = record_id


class ValidationError(GymError):
    """Raised when form input is missing or malformed."""


class AuthError(GymError):
    """Raised when sign in or sign up fails."""
