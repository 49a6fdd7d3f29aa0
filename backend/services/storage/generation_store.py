"""
Saved chapter generations, one per (user, url).
"""
import json
import logging
import sqlite3
from typing import Any, List, Optional

from core.database import Database
from core.errors import DuplicateGenerationError
from models.generation_models import Generation, generation_from_row

logger = logging.getLogger(__name__)


class GenerationStore:
    """Reads and writes the generations table. Every query is scoped to a user."""

    def __init__(self, db: Database):
        self.db = db

    def create(
        self,
        user_id: int,
        url: str,
        title: str,
        chapters: Any,
        model: Optional[str] = None,
    ) -> int:
        """
        Save a completed generation.

        Raises:
            DuplicateGenerationError: the user already saved this URL
        """
        try:
            return self.db.execute_write(
                """
                INSERT INTO generations (user_id, url, title, status, chapters_json, model)
                VALUES (?, ?, ?, 'completed', ?, ?)
                """,
                (user_id, url, title, json.dumps(chapters), model)
            )
        except sqlite3.IntegrityError as e:
            if "UNIQUE" in str(e):
                raise DuplicateGenerationError(user_id, url)
            raise

    def get(self, generation_id: int, user_id: int) -> Optional[Generation]:
        row = self.db.execute_one(
            "SELECT * FROM generations WHERE id = ? AND user_id = ?",
            (generation_id, user_id)
        )
        return generation_from_row(row) if row else None

    def exists(self, generation_id: int, user_id: int) -> bool:
        row = self.db.execute_one(
            "SELECT COUNT(*) AS count FROM generations WHERE id = ? AND user_id = ?",
            (generation_id, user_id)
        )
        return bool(row and row["count"] > 0)

    def list_for_user(self, user_id: int) -> List[dict]:
        rows = self.db.execute(
            """
            SELECT id, url, title, status, created_at, updated_at
            FROM generations WHERE user_id = ?
            ORDER BY created_at DESC, id DESC
            """,
            (user_id,)
        )
        return [dict(row) for row in rows]

    def update(
        self,
        generation_id: int,
        user_id: int,
        chapters_json: Optional[str] = None,
        title: Optional[str] = None,
    ) -> bool:
        """Update chapters and/or title. Returns True when a row changed."""
        assignments = ["updated_at = CURRENT_TIMESTAMP"]
        params: List[Any] = []
        if chapters_json is not None:
            assignments.append("chapters_json = ?")
            params.append(chapters_json)
        if title is not None:
            assignments.append("title = ?")
            params.append(title)
        params.extend([generation_id, user_id])

        rows = self.db.execute_update(
            f"UPDATE generations SET {', '.join(assignments)} WHERE id = ? AND user_id = ?",
            tuple(params)
        )
        return rows > 0

    def delete(self, generation_id: int, user_id: int) -> bool:
        rows = self.db.execute_update(
            "DELETE FROM generations WHERE id = ? AND user_id = ?",
            (generation_id, user_id)
        )
        if rows:
            logger.info(f"Deleted generation {generation_id} for user {user_id}")
        return rows > 0
