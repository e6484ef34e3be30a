"""Configuration loaded from environment variables."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env: try package dir then project root
_base = Path(__file__).resolve().parent
for _env_path in (_base / ".env", _base.parent / ".env"):
    if load_dotenv(_env_path):
        break
load_dotenv()  # also allow process env

# Completion endpoint (any OpenAI-compatible chat completions API) – never hardcode keys
COMPLETION_API_KEY: str = (
    os.getenv("COMPLETION_API_KEY")
    or os.getenv("GROQ_API_KEY")
    or os.getenv("OPENAI_API_KEY")
    or ""
).strip()
COMPLETION_BASE_URL: str = os.getenv("COMPLETION_BASE_URL", "https://api.groq.com/openai/v1")
MODEL_NAME: str = os.getenv("MODEL_NAME", "llama3-70b-8192")
COMPLETION_TIMEOUT_SECONDS: float = float(os.getenv("COMPLETION_TIMEOUT_SECONDS", "60"))

# Persistence
DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./recruit_signal.db")
DB_ECHO: bool = (os.getenv("DB_ECHO") or "false").lower() == "true"
STORAGE_ROOT: str = os.getenv("STORAGE_ROOT", "./storage/user-resumes")

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# Content extraction
EXCERPT_MAX_CHARS: int = 4000
EXCERPT_MIN_CHARS: int = 10

# Sampling per call site (low: outputs are machine-parsed or sent to candidates)
PARSE_TEMPERATURE: float = 0.05
PARSE_MAX_TOKENS: int = 3000
SEARCH_TEMPERATURE: float = 0.1
SCREENING_TEMPERATURE: float = 0.3
OUTREACH_TEMPERATURE: float = 0.4

# Search ranking
SEARCH_MAX_RESULTS: int = 10
SEARCH_MIN_RELEVANCE: float = 0.3
SEARCH_HISTORY_LIMIT: int = 50

# Accepted uploads: content type -> label (extensible: add an entry per format)
ALLOWED_CONTENT_TYPES: dict = {
    "application/pdf": "PDF",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "DOCX",
    "application/msword": "DOC",
    "text/plain": "Plain text",
}
