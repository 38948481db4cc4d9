import logging
import sqlite3
import uuid
from dataclasses import dataclass
from typing import Optional

import bcrypt

import config
from core.database import delete_setting, get_conn, get_setting, set_setting
from core.exceptions import AuthError, StoreError
from core.utils import is_valid_email

logger = logging.getLogger(__name__)

SESSION_KEY = "current_user"


@dataclass(frozen=True)
class AuthUser:
    """The signed in account."""
    uid: str
    email: str


def _normalize(email: str) -> str:
    return email.strip().lower()


def _start_session(user: AuthUser) -> AuthUser:
    set_setting(SESSION_KEY, user.uid)
    return user


def sign_up(email: str, password: str) -> AuthUser:
    """
    Creates a new account with a securely hashed password and signs it in.

    Args:
        email (str): Account email, stored lower-cased.
        password (str): Plain text password (will be hashed).

    Raises:
        AuthError: If the email is malformed, the password too short,
            or the email is already registered.
    """
    email = _normalize(email)
    if not is_valid_email(email):
        raise AuthError("The Email Or Password is Invalid.")
    if len(password) < config.PASSWORD_MIN_LENGTH:
        raise AuthError(f"Password must be at least {config.PASSWORD_MIN_LENGTH} characters.")

    hashed = bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt())
    user = AuthUser(uid=uuid.uuid4().hex, email=email)

    try:
        with get_conn() as conn:
            conn.execute("INSERT INTO users (id, email, password_hash) VALUES (?, ?, ?)",
                         (user.uid, user.email, hashed))
    except sqlite3.IntegrityError:
        raise AuthError("An account with this email already exists.")
    except sqlite3.Error as e:
        logger.error("Database error creating user: %s", e)
        raise StoreError(f"Could not create account: {e}") from e

    logger.info("Account created for %s", email)
    return _start_session(user)


def sign_in(email: str, password: str) -> AuthUser:
    """
    Verifies login credentials and remembers the session.

    Raises:
        AuthError: If the email is unknown or the password does not match.
    """
    email = _normalize(email)
    try:
        with get_conn() as conn:
            row = conn.execute("SELECT id, email, password_hash FROM users WHERE email=?",
                               (email,)).fetchone()
    except sqlite3.Error as e:
        logger.error("Database error verifying user: %s", e)
        raise StoreError(f"Could not verify account: {e}") from e

    # Compare the input password to the stored hash
    if not row or not bcrypt.checkpw(password.encode('utf-8'), row["password_hash"]):
        raise AuthError("Invalid email or password.")

    return _start_session(AuthUser(uid=row["id"], email=row["email"]))


def get_authenticated_user() -> Optional[AuthUser]:
    """Returns the account from the remembered session, or None if signed out."""
    uid = get_setting(SESSION_KEY)
    if not uid:
        return None

    try:
        with get_conn() as conn:
            row = conn.execute("SELECT id, email FROM users WHERE id=?", (uid,)).fetchone()
    except sqlite3.Error as e:
        logger.error("Database error loading session user: %s", e)
        raise StoreError(f"Could not load session: {e}") from e

    if not row:
        # Session points at an account that no longer exists
        delete_setting(SESSION_KEY)
        return None
    return AuthUser(uid=row["id"], email=row["email"])


def sign_out() -> None:
    delete_setting(SESSION_KEY)
