"""
Transcript and chapter routes.

- POST /fetch/raw: provider JSON as-is
- POST /fetch: normalized transcript, nothing saved
- POST /preview: transcript -> Gemini -> chapters, nothing saved
- POST /: save a finished generation
- GET /mine, GET/PUT/DELETE /{id}: the caller's own generations
"""
import json
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import (
    get_chapter_generator,
    get_generation_store,
    get_transcript_client,
    require_user,
)
from api.models.requests import (
    SaveGenerationRequest,
    UpdateGenerationRequest,
    VideoUrlRequest,
)
from api.models.responses import (
    DeleteResponse,
    FetchResponse,
    GenerationResponse,
    GenerationSummary,
    PreviewResponse,
    RawFetchResponse,
    SaveResponse,
    UpdateResponse,
)
from core.errors import DuplicateGenerationError, InvalidRequestError
from services.generation.chapter_generator import ChapterGenerator
from services.ingestion.transcript_client import TranscriptClient, extract_video_id
from services.processing import chapter_codec
from services.storage.generation_store import GenerationStore

logger = logging.getLogger(__name__)

router = APIRouter()

NO_TRANSCRIPT_NOTE = "No transcript available for this video."
NO_CHAPTERS_NOTE = "Model returned no chapters (try again, or use a longer video)."
GENERATED_NOTE = "Generated from transcript."


def _require_url(url: Optional[str]) -> str:
    if url is None or not url.strip():
        raise InvalidRequestError("url is required")
    return url


@router.post("/fetch/raw", response_model=RawFetchResponse)
def fetch_raw(
    request: VideoUrlRequest,
    user_id: int = Depends(require_user),
    transcripts: TranscriptClient = Depends(get_transcript_client),
):
    """Return the provider's raw JSON, to inspect titles and tracks."""
    video_id = extract_video_id(_require_url(request.url))
    raw = transcripts.fetch_raw(video_id)
    return {"ok": True, "userId": user_id, "videoId": video_id, "raw": raw}


@router.post("/fetch", response_model=FetchResponse)
def fetch_transcript(
    request: VideoUrlRequest,
    user_id: int = Depends(require_user),
    transcripts: TranscriptClient = Depends(get_transcript_client),
):
    url = _require_url(request.url)
    segments = transcripts.fetch_transcript(extract_video_id(url))
    return {
        "ok": True,
        "url": url,
        "hasTranscript": bool(segments),
        "segments": [seg.to_dict() for seg in segments],
    }


@router.post("/preview", response_model=PreviewResponse)
def preview(
    request: VideoUrlRequest,
    user_id: int = Depends(require_user),
    transcripts: TranscriptClient = Depends(get_transcript_client),
    generator: ChapterGenerator = Depends(get_chapter_generator),
):
    """Generate chapters for a video without saving them."""
    url = _require_url(request.url)
    video_id = extract_video_id(url)
    title = transcripts.fetch_title(video_id)

    segments = transcripts.fetch_transcript(video_id)
    if not segments:
        return PreviewResponse(url=url, title=title, note=NO_TRANSCRIPT_NOTE)

    chapters = generator.generate_from_segments(segments)
    logger.info(f"Generated {len(chapters)} chapters for {video_id} from {len(segments)} segments")

    return PreviewResponse(
        url=url,
        title=title,
        chapters=[c.to_dict() for c in chapters],
        chapters_text=chapter_codec.to_text(chapters),
        note=GENERATED_NOTE if chapters else NO_CHAPTERS_NOTE,
    )


@router.post("", response_model=SaveResponse, response_model_exclude_none=True)
def save_generation(
    request: SaveGenerationRequest,
    user_id: int = Depends(require_user),
    store: GenerationStore = Depends(get_generation_store),
    transcripts: TranscriptClient = Depends(get_transcript_client),
):
    """Save a finished generation for the logged-in user."""
    url = _require_url(request.url)
    if request.chapters_json is None:
        raise InvalidRequestError("chaptersJson is required")

    title = transcripts.fetch_title(extract_video_id(url))

    try:
        generation_id = store.create(user_id, url, title, request.chapters_json)
    except DuplicateGenerationError:
        return SaveResponse(ok=False, error="Generation for this video already exists.")

    return SaveResponse(ok=True, id=generation_id, status="completed")


@router.get("/mine", response_model=List[GenerationSummary])
def list_mine(
    user_id: int = Depends(require_user),
    store: GenerationStore = Depends(get_generation_store),
):
    return store.list_for_user(user_id)


@router.put("/{generation_id}", response_model=UpdateResponse)
def update_generation(
    generation_id: int,
    request: UpdateGenerationRequest,
    user_id: int = Depends(require_user),
    store: GenerationStore = Depends(get_generation_store),
):
    """
    Update chapters and/or title.

    chaptersJson wins over chaptersText; text is parsed one chapter per line.
    """
    has_json = request.chapters_json is not None and not (
        isinstance(request.chapters_json, str) and not request.chapters_json.strip()
    )
    has_text = bool(request.chapters_text and request.chapters_text.strip())

    if not has_json and not has_text and request.title is None:
        raise InvalidRequestError("Provide chaptersJson or chaptersText or title to update.")

    if not store.exists(generation_id, user_id):
        raise HTTPException(status_code=404, detail="Not found")

    chapters_json = None
    if has_json:
        chapters_json = json.dumps(request.chapters_json)
    elif has_text:
        chapters_json = chapter_codec.to_json(chapter_codec.from_text(request.chapters_text))

    updated = store.update(generation_id, user_id, chapters_json=chapters_json, title=request.title)
    return UpdateResponse(ok=updated, updated=updated)


@router.get("/{generation_id}", response_model=GenerationResponse)
def get_generation(
    generation_id: int,
    user_id: int = Depends(require_user),
    store: GenerationStore = Depends(get_generation_store),
):
    """Read one generation, with chapters decoded and rendered as text."""
    generation = store.get(generation_id, user_id)
    if generation is None:
        raise HTTPException(status_code=404, detail="Not found")

    chapters = None
    chapters_text = ""
    raw = generation.chapters_json
    if isinstance(raw, str) and raw.strip():
        try:
            chapters = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Stored chapters for generation {generation_id} are not valid JSON: {e}")
        else:
            chapters_text = chapter_codec.to_text(chapter_codec.from_json(chapters))

    return GenerationResponse(
        id=generation.id,
        url=generation.url,
        title=generation.title,
        status=generation.status,
        created_at=generation.created_at,
        updated_at=generation.updated_at,
        chapters_json=chapters,
        chapters_text=chapters_text,
        transcript=generation.transcript,
        model=generation.model,
        error=generation.error,
    )


@router.delete("/{generation_id}", response_model=DeleteResponse)
def delete_generation(
    generation_id: int,
    user_id: int = Depends(require_user),
    store: GenerationStore = Depends(get_generation_store),
):
    deleted = store.delete(generation_id, user_id)
    return DeleteResponse(deleted=deleted, id=generation_id)
