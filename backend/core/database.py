"""
SQLite database connection and initialization.
"""
import sqlite3
from pathlib import Path
from typing import Optional, List
from contextlib import contextmanager

from .config import DB_PATH, SCHEMA_FILE


class Database:
    """Database manager for SQLite operations."""

    def __init__(self, db_path: Path = DB_PATH, schema_file: Path = SCHEMA_FILE):
        self.db_path = Path(db_path)
        self.schema_file = Path(schema_file)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.ensure_tables()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    @contextmanager
    def get_connection(self):
        """Context manager for database connections."""
        conn = self._connect()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def ensure_tables(self):
        """Create all tables if they don't exist."""
        if self.schema_file.exists():
            schema = self.schema_file.read_text(encoding="utf-8")
            with self.get_connection() as conn:
                conn.executescript(schema)

    def table_exists(self, name: str) -> bool:
        row = self.execute_one(
            "SELECT name FROM sqlite_master WHERE type='table' AND name=?",
            (name,)
        )
        return row is not None

    def execute(self, query: str, params: Optional[tuple] = None) -> List[sqlite3.Row]:
        """Execute a SELECT query and return results."""
        with self.get_connection() as conn:
            cursor = conn.execute(query, params or ())
            return cursor.fetchall()

    def execute_one(self, query: str, params: Optional[tuple] = None) -> Optional[sqlite3.Row]:
        """Execute a SELECT query and return first result."""
        results = self.execute(query, params)
        return results[0] if results else None

    def execute_write(self, query: str, params: Optional[tuple] = None) -> int:
        """Execute an INSERT and return the last row ID."""
        with self.get_connection() as conn:
            cursor = conn.execute(query, params or ())
            return cursor.lastrowid

    def execute_update(self, query: str, params: Optional[tuple] = None) -> int:
        """Execute an UPDATE/DELETE query and return the affected row count."""
        with self.get_connection() as conn:
            cursor = conn.execute(query, params or ())
            return cursor.rowcount


_db: Optional[Database] = None


def get_database() -> Database:
    """Return the process-wide database, creating it on first use."""
    global _db
    if _db is None:
        _db = Database()
    return _db
