"""
Centralized prompt file management with fallback templates.
"""
import logging
from pathlib import Path
from typing import Dict, Optional

from core.config import PROMPTS_DIR

logger = logging.getLogger(__name__)


class PromptManager:
    """Manages prompt file loading with consistent fallback behavior."""

    def __init__(self, prompts_dir: Optional[Path] = None):
        self.prompts_dir = prompts_dir or PROMPTS_DIR
        self.loaded_prompts: Dict[str, str] = {}

        # Fallback templates
        self.fallback_templates = {
            "chapter_system": self._get_chapter_system_fallback(),
            "chapter_user": self._get_chapter_user_fallback(),
        }

    def get_prompt(self, prompt_name: str) -> str:
        """
        Load prompt by name with fallback.

        Args:
            prompt_name: Name of prompt file (without .txt extension)

        Returns:
            Prompt template string
        """
        if prompt_name in self.loaded_prompts:
            return self.loaded_prompts[prompt_name]

        prompt_file = self.prompts_dir / f"{prompt_name}.txt"

        if prompt_file.exists():
            try:
                template = prompt_file.read_text(encoding="utf-8")

                if not template.strip():
                    raise ValueError(f"Prompt file is empty: {prompt_file}")

                self.loaded_prompts[prompt_name] = template
                return template

            except (OSError, ValueError) as e:
                logger.warning(f"Failed to load prompt file {prompt_file}: {e}")

        if prompt_name in self.fallback_templates:
            logger.info(f"Using fallback template for: {prompt_name}")
            template = self.fallback_templates[prompt_name]
            self.loaded_prompts[prompt_name] = template
            return template

        raise FileNotFoundError(
            f"Prompt file not found and no fallback available: {prompt_name}.txt. "
            f"Expected at: {prompt_file}"
        )

    def _get_chapter_system_fallback(self) -> str:
        """Fallback template for the chapter system instructions."""
        return """You create YouTube-style chapter markers from transcripts.
Output STRICT JSON array only. No prose, no markdown.
Each item: {"start":"MM:SS or HH:MM:SS","title":"Short, descriptive"}.
Use the earliest sensible start time for each chapter.
5-8 chapters for 10-30 min; 3-5 if very short.
Avoid duplicates and noise.
"""

    def _get_chapter_user_fallback(self) -> str:
        """Fallback template for the transcript message."""
        return """TRANSCRIPT (each line may start with [mm:ss] or [hh:mm:ss]):

{transcript}

Return ONLY the JSON array, nothing else.
"""


# Global prompt manager instance
prompt_manager = PromptManager()
