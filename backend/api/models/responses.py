"""
Pydantic response models for API endpoints.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Optional


class ChapterModel(BaseModel):
    start: str
    title: str


class SegmentModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    start_sec: float = Field(..., alias="startSec")
    start: str
    text: str


class AccountResponse(BaseModel):
    """Response model for signup, login and /me."""
    ok: bool
    id: Optional[int] = None
    email: Optional[str] = None
    error: Optional[str] = None


class RawFetchResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    user_id: int = Field(..., alias="userId")
    video_id: str = Field(..., alias="videoId")
    raw: str


class FetchResponse(BaseModel):
    """Response model for a normalized transcript fetch."""
    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    url: str
    has_transcript: bool = Field(..., alias="hasTranscript")
    segments: List[SegmentModel] = []


class PreviewResponse(BaseModel):
    """Response model for chapter preview (not saved)."""
    ok: bool = True
    url: str
    title: str = ""
    chapters: List[ChapterModel] = []
    chapters_text: str = ""
    note: str = ""


class SaveResponse(BaseModel):
    ok: bool
    id: Optional[int] = None
    status: Optional[str] = None
    error: Optional[str] = None


class UpdateResponse(BaseModel):
    ok: bool
    updated: bool


class DeleteResponse(BaseModel):
    deleted: bool
    id: int


class GenerationSummary(BaseModel):
    id: int
    url: str
    title: Optional[str] = None
    status: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class GenerationResponse(GenerationSummary):
    """A saved generation with its chapters decoded and rendered as text."""
    chapters_json: Any = None
    chapters_text: str = ""
    transcript: Optional[str] = None
    model: Optional[str] = None
    error: Optional[str] = None
