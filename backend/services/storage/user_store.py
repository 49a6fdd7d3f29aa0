"""
User accounts and login sessions.
"""
import logging
import sqlite3
from datetime import datetime, timedelta, timezone
from typing import Optional

from core.config import SESSION_TTL_DAYS
from core.database import Database
from core.errors import DuplicateEmailError
from core.security import new_session_token
from models.generation_models import User

logger = logging.getLogger(__name__)

SQLITE_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class UserStore:
    """Reads and writes the users table."""

    def __init__(self, db: Database):
        self.db = db

    def create(self, email: str, password_hash: str) -> User:
        try:
            user_id = self.db.execute_write(
                "INSERT INTO users (email, password_hash) VALUES (?, ?)",
                (email, password_hash)
            )
        except sqlite3.IntegrityError:
            raise DuplicateEmailError(email)
        return User(id=user_id, email=email, password_hash=password_hash)

    def find_by_email(self, email: str) -> Optional[User]:
        row = self.db.execute_one(
            "SELECT id, email, password_hash, created_at FROM users WHERE email = ?",
            (email,)
        )
        return User(**dict(row)) if row else None

    def find_by_id(self, user_id: int) -> Optional[User]:
        row = self.db.execute_one(
            "SELECT id, email, password_hash, created_at FROM users WHERE id = ?",
            (user_id,)
        )
        return User(**dict(row)) if row else None


class SessionStore:
    """Opaque session tokens mapped to user IDs, with a fixed lifetime."""

    def __init__(self, db: Database, ttl_days: int = SESSION_TTL_DAYS):
        self.db = db
        self.ttl = timedelta(days=ttl_days)

    @property
    def max_age_seconds(self) -> int:
        return int(self.ttl.total_seconds())

    def create(self, user_id: int) -> str:
        token = new_session_token()
        expires_at = (datetime.now(timezone.utc) + self.ttl).strftime(SQLITE_TIME_FORMAT)
        self.db.execute_write(
            "INSERT INTO sessions (token, user_id, expires_at) VALUES (?, ?, ?)",
            (token, user_id, expires_at)
        )
        return token

    def resolve(self, token: Optional[str]) -> Optional[int]:
        """Return the user ID for a live token, or None."""
        if not token:
            return None
        self.purge_expired()
        row = self.db.execute_one(
            "SELECT user_id FROM sessions WHERE token = ?",
            (token,)
        )
        return row["user_id"] if row else None

    def delete(self, token: Optional[str]) -> None:
        if not token:
            return
        self.db.execute_update("DELETE FROM sessions WHERE token = ?", (token,))

    def purge_expired(self) -> int:
        removed = self.db.execute_update(
            "DELETE FROM sessions WHERE expires_at <= datetime('now')"
        )
        if removed:
            logger.debug(f"Purged {removed} expired sessions")
        return removed
