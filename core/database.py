import logging
import sqlite3
from contextlib import contextmanager
from typing import Iterator, Optional

import config
from core.exceptions import StoreError

logger = logging.getLogger(__name__)


@contextmanager
def get_conn() -> Iterator[sqlite3.Connection]:
    """
    Opens a connection to the application database.
    Commits when the block finishes, rolls back if it raises, and always closes.

    Raises:
        StoreError: If the database path has not been configured.
    """
    if not config.DB_FILE:
        raise StoreError("Database path not found in config.")

    conn = sqlite3.connect(config.DB_FILE)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db() -> None:
    """
    Initializes the SQLite database.
    Creates tables for users, admins, members, trainers and settings if they do not exist.
    """
    try:
        with get_conn() as conn:
            c = conn.cursor()

            # 1. Users Table (sign in credentials)
            c.execute("""
                CREATE TABLE IF NOT EXISTS users (
                    id TEXT PRIMARY KEY,
                    email TEXT UNIQUE NOT NULL,
                    password_hash BLOB NOT NULL
                )
            """)

            # 2. Admins Table (gym owner profile)
            c.execute("""
                CREATE TABLE IF NOT EXISTS admins (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    gym_name TEXT NOT NULL,
                    gym_address TEXT NOT NULL,
                    photo_path TEXT
                )
            """)

            # 3. Members Table
            c.execute("""
                CREATE TABLE IF NOT EXISTS members (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    age TEXT NOT NULL DEFAULT '',
                    phone TEXT NOT NULL,
                    membership_type TEXT NOT NULL,
                    is_paid INTEGER NOT NULL DEFAULT 0,
                    photo_path TEXT
                )
            """)

            # 4. Trainers Table
            c.execute("""
                CREATE TABLE IF NOT EXISTS trainers (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    phone TEXT NOT NULL,
                    speciality TEXT NOT NULL,
                    photo_path TEXT
                )
            """)

            # 5. Settings Table (payment reset marker, signed in user)
            c.execute("""
                CREATE TABLE IF NOT EXISTS app_settings (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)
    except sqlite3.Error as e:
        logger.error("Database error during init: %s", e)
        raise StoreError(f"Could not initialize database: {e}") from e


def get_setting(key: str, default: Optional[str] = None) -> Optional[str]:
    """
    Reads a single value from the settings table.
    Returns `default` when the key has never been written.
    """
    try:
        with get_conn() as conn:
            row = conn.execute("SELECT value FROM app_settings WHERE key=?", (key,)).fetchone()
    except sqlite3.Error as e:
        logger.error("Database error reading setting %s: %s", key, e)
        raise StoreError(f"Could not read setting '{key}': {e}") from e

    if row:
        return str(row["value"])
    return default


def set_setting(key: str, value: str) -> None:
    """Writes (or overwrites) a single value in the settings table."""
    try:
        with get_conn() as conn:
            conn.execute(
                """
                INSERT INTO app_settings (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value=excluded.value
                """,
                (key, value),
            )
    except sqlite3.Error as e:
        logger.error("Database error writing setting %s: %s", key, e)
        raise StoreError(f"Could not write setting '{key}': {e}") from e


def delete_setting(key: str) -> None:
    """Removes a key from the settings table. Missing keys are ignored."""
    try:
        with get_conn() as conn:
            conn.execute("DELETE FROM app_settings WHERE key=?", (key,))
    except sqlite3.Error as e:
        logger.error("Database error deleting setting %s: %s", key, e)
        raise StoreError(f"Could not delete setting '{key}': {e}") from e
