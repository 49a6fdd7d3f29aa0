"""
FastAPI dependencies: stores, outbound clients and the caller identity.
"""
from functools import lru_cache

from fastapi import Depends, HTTPException, Request

from core.config import AUTH_COOKIE_NAME
from core.database import Database, get_database
from core.gemini_client import GeminiClient
from services.generation.chapter_generator import ChapterGenerator
from services.ingestion.transcript_client import TranscriptClient
from services.storage.generation_store import GenerationStore
from services.storage.user_store import SessionStore, UserStore


def get_db() -> Database:
    return get_database()


def get_user_store(db: Database = Depends(get_db)) -> UserStore:
    return UserStore(db)


def get_session_store(db: Database = Depends(get_db)) -> SessionStore:
    return SessionStore(db)


def get_generation_store(db: Database = Depends(get_db)) -> GenerationStore:
    return GenerationStore(db)


@lru_cache(maxsize=1)
def get_transcript_client() -> TranscriptClient:
    return TranscriptClient()


@lru_cache(maxsize=1)
def get_chapter_generator() -> ChapterGenerator:
    # Raises ConfigurationError while GEMINI_API_KEY is unset
    return ChapterGenerator(GeminiClient())


def session_token(request: Request) -> str:
    return request.cookies.get(AUTH_COOKIE_NAME, "")


def require_user(
    token: str = Depends(session_token),
    sessions: SessionStore = Depends(get_session_store),
) -> int:
    """Resolve the session cookie to a user ID or reject with 401."""
    if not token or not token.strip():
        raise HTTPException(status_code=401, detail="Login required")
    user_id = sessions.resolve(token)
    if user_id is None:
        raise HTTPException(status_code=401, detail="Invalid session")
    return user_id
