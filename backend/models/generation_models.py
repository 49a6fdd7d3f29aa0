"""
Data models for users and stored chapter generations.
"""
from dataclasses import dataclass
from typing import Optional, Any


@dataclass
class User:
    id: int
    email: str
    password_hash: str = ""
    created_at: Optional[str] = None


@dataclass
class Generation:
    """A saved chapter generation, owned by one user."""
    id: int
    user_id: int
    url: str
    title: str = ""
    status: str = "completed"
    chapters_json: Optional[str] = None  # serialized JSON array of chapters
    transcript: Optional[str] = None
    model: Optional[str] = None
    error: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


GENERATION_COLUMNS = (
    "id", "user_id", "url", "title", "status", "chapters_json",
    "transcript", "model", "error", "created_at", "updated_at",
)


def generation_from_row(row: Any) -> Generation:
    """Build a Generation from a sqlite3.Row."""
    keys = row.keys()
    return Generation(**{col: row[col] for col in GENERATION_COLUMNS if col in keys})
