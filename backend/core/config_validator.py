"""
Configuration validation for Chaptgen backend.
Validates prompt files, API keys, database and settings on startup.
"""
import logging
from typing import List, Dict, Any

logger = logging.getLogger(__name__)

REQUIRED_TABLES = ["users", "sessions", "generations"]
PROMPT_FILES = ["chapter_system.txt", "chapter_user.txt"]


class ConfigValidator:
    """Validates system configuration before serving requests."""

    def __init__(self):
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def validate_all(self) -> Dict[str, Any]:
        """
        Run all validation checks.

        Returns:
            {
                "valid": bool,
                "errors": List[str],
                "warnings": List[str]
            }
        """
        self.errors = []
        self.warnings = []

        self._validate_api_keys()
        self._validate_prompt_files()
        self._validate_database()
        self._validate_config_values()

        return {
            "valid": len(self.errors) == 0,
            "errors": self.errors,
            "warnings": self.warnings
        }

    def _validate_api_keys(self):
        """Missing keys only disable the routes that need them."""
        from core.config import GEMINI_API_KEY, YTT_API_KEY

        if not YTT_API_KEY.strip():
            self.warnings.append(
                "YTT_API_KEY is not set. Transcript fetching will fail until it is."
            )
        if not GEMINI_API_KEY.strip():
            self.warnings.append(
                "GEMINI_API_KEY is not set. Chapter previews will fail until it is."
            )

    def _validate_prompt_files(self):
        """Prompt files are optional; built-in templates are used when absent."""
        from core.config import PROMPTS_DIR

        for prompt_file in PROMPT_FILES:
            path = PROMPTS_DIR / prompt_file
            if not path.exists():
                self.warnings.append(
                    f"Prompt file missing: {prompt_file}. Using built-in template."
                )
            elif path.stat().st_size == 0:
                self.warnings.append(f"Prompt file is empty: {prompt_file}")

    def _validate_database(self):
        """Check that the schema exists and the database has every table."""
        from core.config import SCHEMA_FILE

        if not SCHEMA_FILE.exists():
            self.errors.append(f"Database schema not found at {SCHEMA_FILE}.")
            return

        try:
            from core.database import get_database

            db = get_database()
            for table in REQUIRED_TABLES:
                if not db.table_exists(table):
                    self.errors.append(
                        f"Required database table missing: {table}. "
                        "Run schema initialization."
                    )
        except Exception as e:
            self.errors.append(f"Database connection error: {e}")

    def _validate_config_values(self):
        """Validate configuration value ranges and types."""
        from core.config import (
            GEMINI_TEMPERATURE,
            GEMINI_TIMEOUT_SEC,
            SESSION_TTL_DAYS,
            TRANSCRIPT_TIMEOUT_SEC,
        )

        if SESSION_TTL_DAYS <= 0:
            self.errors.append(f"SESSION_TTL_DAYS ({SESSION_TTL_DAYS}) must be positive")

        for name, value in (
            ("GEMINI_TIMEOUT_SEC", GEMINI_TIMEOUT_SEC),
            ("TRANSCRIPT_TIMEOUT_SEC", TRANSCRIPT_TIMEOUT_SEC),
        ):
            if value <= 0:
                self.errors.append(f"{name} ({value}) must be positive")

        if not (0.0 <= GEMINI_TEMPERATURE <= 2.0):
            self.warnings.append(
                f"GEMINI_TEMPERATURE ({GEMINI_TEMPERATURE}) outside normal range [0.0, 2.0]"
            )


# Global validator instance
config_validator = ConfigValidator()
