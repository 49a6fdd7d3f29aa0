"""
Gemini generateContent API client wrapper.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

from core.config import (
    GEMINI_API_KEY,
    GEMINI_BASE_URL,
    GEMINI_MODEL,
    GEMINI_TEMPERATURE,
    GEMINI_TIMEOUT_SEC,
)
from core.errors import ConfigurationError, UpstreamServiceError

logger = logging.getLogger(__name__)


class GeminiClient:
    """Client for the Gemini text generation endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = GEMINI_API_KEY,
        model: Optional[str] = GEMINI_MODEL,
        base_url: str = GEMINI_BASE_URL,
        timeout: float = GEMINI_TIMEOUT_SEC,
        http_client: Optional[httpx.Client] = None,
    ):
        if not api_key or not api_key.strip():
            raise ConfigurationError(
                "Gemini API key missing. Set env 'GEMINI_API_KEY'."
            )
        self.api_key = api_key.strip()
        self.model = model.strip() if model and model.strip() else "gemini-1.5-flash"
        self.base_url = base_url.rstrip("/")
        self.client = http_client or httpx.Client(timeout=timeout)

    def generate_content(
        self,
        messages: List[str],
        temperature: float = GEMINI_TEMPERATURE,
        response_mime_type: Optional[str] = None,
    ) -> str:
        """
        Send user messages and return the text of the first candidate part.

        Returns an empty string when the response carries no candidate text.
        Raises UpstreamServiceError on transport failures and non-200 replies.
        """
        url = f"{self.base_url}/models/{self.model}:generateContent"
        generation_config: Dict[str, Any] = {"temperature": temperature}
        if response_mime_type:
            generation_config["response_mime_type"] = response_mime_type

        payload = {
            "contents": [
                {"role": "user", "parts": [{"text": message}]}
                for message in messages
            ],
            "generationConfig": generation_config,
        }

        try:
            response = self.client.post(url, params={"key": self.api_key}, json=payload)
        except httpx.HTTPError as e:
            raise UpstreamServiceError("Gemini API", str(e))

        if response.status_code != 200:
            raise UpstreamServiceError(
                "Gemini API", f"{response.status_code} {response.text}", response.status_code
            )

        try:
            body = response.json()
        except ValueError as e:
            raise UpstreamServiceError("Gemini API", f"invalid response body: {e}")
        return self._first_candidate_text(body)

    @staticmethod
    def _first_candidate_text(body: Any) -> str:
        if not isinstance(body, dict):
            return ""
        candidates = body.get("candidates")
        if not isinstance(candidates, list) or not candidates:
            return ""
        content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
            return ""
        text = parts[0].get("text")
        return text if isinstance(text, str) else ""
