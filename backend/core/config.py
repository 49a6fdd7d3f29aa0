"""
Configuration management for Chaptgen backend.
Loads configuration from environment variables and .env file.
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
# Look for .env file in the backend directory or project root
BACKEND_DIR = Path(__file__).parent.parent
PROJECT_ROOT = BACKEND_DIR.parent
ENV_FILE = PROJECT_ROOT / ".env"

if ENV_FILE.exists():
    load_dotenv(ENV_FILE)
else:
    backend_env = BACKEND_DIR / ".env"
    if backend_env.exists():
        load_dotenv(backend_env)

# Base paths
BASE_DIR = PROJECT_ROOT
DATA_DIR = Path(os.getenv("DATA_DIR", str(BASE_DIR / "data")))
DB_PATH = Path(os.getenv("DB_PATH", str(DATA_DIR / "chaptgen.db")))
SCHEMA_FILE = BACKEND_DIR / "db" / "schema.sql"
PROMPTS_DIR = BACKEND_DIR / "prompts"

# Transcript provider (youtube-transcript.io)
YTT_API_KEY = os.getenv("YTT_API_KEY", "")
YTT_API_URL = os.getenv("YTT_API_URL", "https://www.youtube-transcript.io/api/transcripts")
YTT_USER_AGENT = os.getenv("YTT_USER_AGENT", "chaptgen/1.0 (+local-dev)")
TRANSCRIPT_TIMEOUT_SEC = float(os.getenv("TRANSCRIPT_TIMEOUT_SEC", "30"))

# Gemini configuration
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
GEMINI_BASE_URL = os.getenv("GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")
GEMINI_TEMPERATURE = float(os.getenv("GEMINI_TEMPERATURE", "0.4"))
GEMINI_TIMEOUT_SEC = float(os.getenv("GEMINI_TIMEOUT_SEC", "45"))

# Auth / session cookie
AUTH_COOKIE_NAME = os.getenv("AUTH_COOKIE_NAME", "chaptgen_token")
AUTH_COOKIE_DOMAIN = os.getenv("AUTH_COOKIE_DOMAIN", "") or None
AUTH_COOKIE_SECURE = os.getenv("AUTH_COOKIE_SECURE", "false").lower() == "true"
SESSION_TTL_DAYS = int(os.getenv("SESSION_TTL_DAYS", "14"))
MIN_PASSWORD_LENGTH = 6

# API configuration
# CORS origins can be comma-separated list in env var
CORS_ORIGINS_STR = os.getenv("CORS_ORIGINS", "http://localhost:3000")
CORS_ORIGINS = [origin.strip() for origin in CORS_ORIGINS_STR.split(",") if origin.strip()]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
