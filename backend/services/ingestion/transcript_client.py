"""
Transcript fetcher for the youtube-transcript.io API.
"""
import json
import logging
import re
from typing import Any, List, Optional

import httpx

from core.config import (
    TRANSCRIPT_TIMEOUT_SEC,
    YTT_API_KEY,
    YTT_API_URL,
    YTT_USER_AGENT,
)
from core.errors import ConfigurationError, UpstreamServiceError
from models.transcript_models import Segment
from services.processing.segment_normalizer import SegmentNormalizer, segment_normalizer

logger = logging.getLogger(__name__)

_ID_TERMINATORS = re.compile(r"[?&#/]")


def extract_video_id(url: str) -> str:
    """
    Extract the video ID from a YouTube URL.

    Handles youtu.be/<id>, youtube.com/watch?v=<id> and youtube.com/embed/<id>.
    Any other input is returned trimmed, as a bare ID.
    """
    url = url.strip()
    for marker in ("youtu.be/", "youtube.com/embed/"):
        if marker in url:
            tail = url[url.index(marker) + len(marker):]
            return _ID_TERMINATORS.split(tail)[0]
    if "youtube.com" in url and "v=" in url:
        tail = url[url.index("v=") + 2:]
        return _ID_TERMINATORS.split(tail)[0]
    return url


def extract_title(raw: Any) -> str:
    """
    Pull the video title from a raw provider payload.

    Looks at microformat.playerMicroformatRenderer.title.simpleText first and
    the top-level `title` second, on the first item of a list payload.
    """
    try:
        tree = json.loads(raw) if isinstance(raw, (str, bytes)) else raw
    except ValueError:
        return ""

    root = tree[0] if isinstance(tree, list) and tree else tree
    if not isinstance(root, dict):
        return ""

    node: Any = root
    for key in ("microformat", "playerMicroformatRenderer", "title", "simpleText"):
        node = node.get(key) if isinstance(node, dict) else None
    if isinstance(node, str) and node.strip():
        return node

    direct = root.get("title")
    if isinstance(direct, str) and direct.strip():
        return direct
    return ""


class TranscriptClient:
    """Fetches transcripts and metadata from youtube-transcript.io."""

    def __init__(
        self,
        api_key: Optional[str] = YTT_API_KEY,
        api_url: str = YTT_API_URL,
        timeout: float = TRANSCRIPT_TIMEOUT_SEC,
        user_agent: str = YTT_USER_AGENT,
        normalizer: Optional[SegmentNormalizer] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        self.api_key = (api_key or "").strip()
        self.api_url = api_url
        self.user_agent = user_agent
        self.normalizer = normalizer or segment_normalizer
        self.client = http_client or httpx.Client(timeout=timeout)

    def _ensure_key(self) -> None:
        if not self.api_key:
            raise ConfigurationError(
                "youtube-transcript.io API key is missing. Set env 'YTT_API_KEY'."
            )

    def _post(self, video_id: str) -> httpx.Response:
        self._ensure_key()
        try:
            return self.client.post(
                self.api_url,
                json={"ids": [video_id], "platform": "youtube"},
                headers={
                    "Authorization": f"Basic {self.api_key}",
                    "User-Agent": self.user_agent,
                },
            )
        except httpx.HTTPError as e:
            logger.error(f"Transcript HTTP error for {video_id}: {e}")
            raise UpstreamServiceError("Transcript API", str(e))

    def fetch_raw(self, video_id: str) -> str:
        """Return the provider's response body as-is, whatever the status."""
        return self._post(video_id).text or ""

    def fetch_transcript(self, video_id: str) -> List[Segment]:
        """
        Fetch and normalize the transcript for a video.

        Returns:
            Segments in transcript order; empty when the provider has none or
            answers with a non-200 status.
        """
        response = self._post(video_id)

        if response.status_code != 200:
            logger.warning(
                f"Transcript API returned {response.status_code} for {video_id}: {response.text[:500]}"
            )
            return []

        body = response.text
        if not body or not body.strip():
            return []

        return self.normalizer.normalize(body)

    def fetch_title(self, video_id: str) -> str:
        """Best-effort video title; empty string on any failure."""
        try:
            return extract_title(self.fetch_raw(video_id))
        except Exception as e:
            logger.warning(f"Could not fetch title for {video_id}: {e}")
            return ""
