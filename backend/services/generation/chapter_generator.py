"""
Chapter generation from transcripts via Gemini.
"""
import json
import logging
from typing import Iterable, List, Optional

from core.gemini_client import GeminiClient
from core.prompt_manager import PromptManager, prompt_manager as default_prompt_manager
from models.transcript_models import Chapter, Segment
from services.processing import chapter_codec
from services.processing.utils import segments_to_flat_text

logger = logging.getLogger(__name__)


class ChapterGenerator:
    """Asks the model for chapter markers and parses its JSON reply."""

    def __init__(
        self,
        client: GeminiClient,
        prompts: Optional[PromptManager] = None,
        temperature: Optional[float] = None,
    ):
        self.client = client
        self.prompts = prompts or default_prompt_manager
        self.temperature = temperature

    def generate_from_segments(self, segments: Iterable[Segment]) -> List[Chapter]:
        return self.generate_from_flat_text(segments_to_flat_text(segments))

    def generate_from_flat_text(self, transcript_lines: Optional[str]) -> List[Chapter]:
        """
        Generate chapters from "[mm:ss] text" transcript lines.

        Returns an empty list when the model gives no usable JSON array.
        Transport and HTTP failures propagate as UpstreamServiceError.
        """
        system = self.prompts.get_prompt("chapter_system")
        user = self.prompts.get_prompt("chapter_user").format(transcript=transcript_lines or "")

        kwargs = {"response_mime_type": "application/json"}
        if self.temperature is not None:
            kwargs["temperature"] = self.temperature
        raw = self.client.generate_content([system, user], **kwargs)

        return self.parse_model_output(raw)

    @staticmethod
    def parse_model_output(raw: Optional[str]) -> List[Chapter]:
        """Parse the model's text as a strict JSON array of {start, title}."""
        if not raw or not raw.strip():
            return []

        try:
            parsed = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Could not parse model JSON: {e}")
            return []

        if not isinstance(parsed, list):
            logger.warning(f"Model returned {type(parsed).__name__}, expected a JSON array")
            return []

        return chapter_codec.from_json(parsed)
