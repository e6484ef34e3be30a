"""Turn uploaded resume bytes (PDF, DOCX, DOC, TXT) into a bounded, cleaned excerpt. In-memory only."""

import re
from io import BytesIO
from typing import Optional

import pdfplumber
from docx import Document

from recruit_signal_ai.config import EXCERPT_MAX_CHARS, EXCERPT_MIN_CHARS
from recruit_signal_ai.errors import ExtractionError
from recruit_signal_ai.utils.logger import get_logger

logger = get_logger(__name__)

# PDF container noise left behind when bytes are decoded directly
_CONTAINER_ARTIFACTS = (
    re.compile(r"\d+\s+\d+\s+obj\b"),
    re.compile(r"\bendobj\b"),
    re.compile(r"\bendstream\b"),
    re.compile(r"<<[^>]*>>"),
    re.compile(r"/[A-Z][A-Za-z0-9]*"),
    re.compile(r"\d+\s+0\s+R\b"),
)
_DISALLOWED_CHARS = re.compile(r"[^\w\s@._-]")
_WHITESPACE = re.compile(r"\s+")


def _is_pdf(content_type: str) -> bool:
    return "pdf" in content_type


def _is_docx(content_type: str) -> bool:
    return "wordprocessingml" in content_type or "docx" in content_type


def _extract_pdf(data: bytes) -> Optional[str]:
    """Extract text from PDF using pdfplumber."""
    try:
        with pdfplumber.open(BytesIO(data)) as pdf:
            parts = [page.extract_text() or "" for page in pdf.pages]
    except Exception as e:
        logger.warning("pdfplumber could not read document: %s", e)
        return None
    text = "\n".join(p for p in parts if p.strip())
    return text or None


def _extract_docx(data: bytes) -> Optional[str]:
    """Extract paragraph text from DOCX using python-docx."""
    try:
        doc = Document(BytesIO(data))
    except Exception as e:
        logger.warning("python-docx could not read document: %s", e)
        return None
    text = "\n".join(p.text for p in doc.paragraphs if p.text.strip())
    return text or None


def _decode_raw(data: bytes) -> str:
    return data.decode("utf-8", errors="ignore")


def clean_excerpt(text: str, max_chars: int = EXCERPT_MAX_CHARS, strip_artifacts: bool = True) -> str:
    """
    Optionally strip PDF container artifacts, replace characters outside the allow-list
    (word chars, whitespace, @ . _ -) with spaces, collapse whitespace, truncate.
    """
    if not text:
        return ""
    t = text
    if strip_artifacts:
        for pattern in _CONTAINER_ARTIFACTS:
            t = pattern.sub(" ", t)
    t = _DISALLOWED_CHARS.sub(" ", t)
    t = _WHITESPACE.sub(" ", t).strip()
    return t[:max_chars]


def extract_excerpt(data: bytes, content_type: Optional[str]) -> str:
    """
    Produce the excerpt sent to the completion endpoint.

    Uses a structured reader for the declared content type when there is one and
    falls back to decoding the raw bytes when it yields no text. Container
    artifacts are stripped only from raw-decoded bytes, so reader output such as
    "CI/CD" survives.
    Raises ExtractionError when the document is empty or the cleaned excerpt is
    shorter than EXCERPT_MIN_CHARS.
    """
    if not data or len(data) < EXCERPT_MIN_CHARS:
        raise ExtractionError("File is empty or too small")

    ctype = (content_type or "").lower()
    text: Optional[str] = None
    if _is_pdf(ctype):
        text = _extract_pdf(data)
    elif _is_docx(ctype):
        text = _extract_docx(data)
    elif ctype.startswith("text/"):
        text = _decode_raw(data)

    raw = not text or not text.strip()
    if raw:
        logger.info("No structured text (type=%s); decoding raw bytes", ctype or "unknown")
        text = _decode_raw(data)

    excerpt = clean_excerpt(text or "", strip_artifacts=raw)
    if len(excerpt) < EXCERPT_MIN_CHARS:
        raise ExtractionError(
            f"Could not extract readable text from document ({len(excerpt)} characters)"
        )
    logger.info("Extracted excerpt: %s characters (type=%s)", len(excerpt), ctype or "unknown")
    return excerpt
