"""
Pydantic request models for API endpoints.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional


class CredentialsRequest(BaseModel):
    """Request model for signup and login."""
    email: Optional[str] = Field(default=None, description="Account email")
    password: Optional[str] = Field(default=None, description="Plain-text password")


class VideoUrlRequest(BaseModel):
    """Request model for fetch, raw fetch and preview."""
    url: Optional[str] = Field(default=None, description="YouTube URL or bare video ID")


class SaveGenerationRequest(BaseModel):
    """Request model for saving a generation."""
    model_config = ConfigDict(populate_by_name=True)

    url: Optional[str] = Field(default=None, description="YouTube URL")
    chapters_json: Any = Field(default=None, alias="chaptersJson", description="Chapters to store")


class UpdateGenerationRequest(BaseModel):
    """Request model for editing a saved generation."""
    model_config = ConfigDict(populate_by_name=True)

    chapters_json: Any = Field(default=None, alias="chaptersJson", description="Replacement chapters")
    chapters_text: Optional[str] = Field(default=None, alias="chaptersText", description="Chapters as flat text")
    title: Optional[str] = Field(default=None, description="New title")
