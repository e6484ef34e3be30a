"""Coerce noisy completion text into fixed shapes. Never raises: malformed output degrades to defaults."""

import json
import re
from typing import Any, Dict, List, Optional

from recruit_signal_ai.schemas.candidate_profile import (
    RECORD_LIST_FIELDS,
    SCALAR_FIELDS,
    CandidateProfile,
    ProfileParse,
)
from recruit_signal_ai.schemas.generation import ScreeningQuestion
from recruit_signal_ai.utils.logger import get_logger

logger = get_logger(__name__)

_CODE_FENCE = re.compile(r"```[A-Za-z]*")
_TRAILING_COMMA = re.compile(r",\s*([}\]])")
_PLACEHOLDERS = {"null", "none", "n/a"}

DEFAULT_SCREENING_QUESTIONS: List[ScreeningQuestion] = [
    ScreeningQuestion(
        category="technical",
        question="Walk me through a recent project you are proud of and the technical decisions you made.",
        purpose="Assess depth of hands-on experience and technical judgment",
    ),
    ScreeningQuestion(
        category="technical",
        question="Which tools and technologies do you use most day to day, and how did you learn them?",
        purpose="Assess core skill proficiency and learning approach",
    ),
    ScreeningQuestion(
        category="technical",
        question="Describe a difficult problem you debugged. How did you find the root cause?",
        purpose="Assess problem-solving ability",
    ),
    ScreeningQuestion(
        category="behavioral",
        question="Tell me about a time you disagreed with a teammate. How did you resolve it?",
        purpose="Assess collaboration and communication",
    ),
    ScreeningQuestion(
        category="behavioral",
        question="What are you looking for in your next role, and why now?",
        purpose="Assess motivation and cultural fit",
    ),
]


def strip_code_fences(text: str) -> str:
    """Remove markdown code-fence markers (``` and ```json) anywhere in the text."""
    return _CODE_FENCE.sub("", text or "").strip()


def _slice_between(text: str, opener: str, closer: str) -> Optional[str]:
    start = text.find(opener)
    end = text.rfind(closer)
    if start == -1 or end == -1 or end < start:
        return None
    return text[start : end + 1]


def _loads_lenient(span: str) -> Any:
    """
    json.loads, retried once with trailing commas removed. None if both fail.
    ValueError covers JSONDecodeError and oversized integer literals; RecursionError
    covers pathologically deep nesting.
    """
    try:
        return json.loads(span)
    except (ValueError, RecursionError):
        pass
    try:
        return json.loads(_TRAILING_COMMA.sub(r"\1", span))
    except (ValueError, RecursionError):
        return None


def _coerce_str(value: Any) -> str:
    if isinstance(value, bool) or value is None:
        return ""
    if isinstance(value, (int, float)):
        value = str(value)
    if not isinstance(value, str):
        return ""
    value = value.strip()
    return "" if value.lower() in _PLACEHOLDERS else value


def _is_present(item: Any) -> bool:
    if item is None:
        return False
    if isinstance(item, (str, list, dict)):
        return len(item) > 0
    return True


def _coerce_record_list(value: Any) -> List[Any]:
    if not isinstance(value, list):
        return []
    out = []
    for item in value:
        if isinstance(item, str):
            item = item.strip()
        if _is_present(item):
            out.append(item)
    return out


def _coerce_skills(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    seen = set()
    out: List[str] = []
    for item in value:
        skill = _coerce_str(item)
        if skill and skill not in seen:
            seen.add(skill)
            out.append(skill)
    return out


def coerce_profile(data: Dict[str, Any]) -> CandidateProfile:
    """Map an arbitrary dict onto CandidateProfile, defaulting every missing or wrong-typed field."""
    if not isinstance(data, dict):
        return CandidateProfile()
    fields: Dict[str, Any] = {name: _coerce_str(data.get(name)) for name in SCALAR_FIELDS}
    for name in RECORD_LIST_FIELDS:
        fields[name] = _coerce_record_list(data.get(name))
    fields["skills"] = _coerce_skills(data.get("skills"))
    return CandidateProfile(**fields)


def normalize_profile(text: str) -> ProfileParse:
    """
    Parse path: strip fences, keep the span from the first '{' to the last '}',
    parse it and coerce to CandidateProfile. Anything unparseable yields the
    canonical all-defaults profile tagged as defaulted.
    """
    cleaned = strip_code_fences(text)
    span = _slice_between(cleaned, "{", "}")
    if span is None:
        logger.warning("No JSON object found in parse response; using default profile")
        return ProfileParse(status="defaulted", reason="no JSON object in response")
    data = _loads_lenient(span)
    if not isinstance(data, dict):
        logger.warning("Parse response JSON invalid or not an object; using default profile")
        return ProfileParse(status="defaulted", reason="response JSON invalid or not an object")
    return ProfileParse(status="parsed", profile=coerce_profile(data))


def normalize_list(text: str) -> List[Any]:
    """List path: same fence stripping, outermost '[' .. ']' span; anything but a JSON array yields []."""
    cleaned = strip_code_fences(text)
    span = _slice_between(cleaned, "[", "]")
    if span is None:
        logger.warning("No JSON array found in list response")
        return []
    data = _loads_lenient(span)
    if not isinstance(data, list):
        logger.warning("List response JSON invalid or not an array")
        return []
    return data


def normalize_screening_questions(text: str) -> List[ScreeningQuestion]:
    """Screening questions from a list response; falls back to the generic set, never empty."""
    questions: List[ScreeningQuestion] = []
    for item in normalize_list(text):
        if not isinstance(item, dict):
            continue
        question = _coerce_str(item.get("question"))
        if not question:
            continue
        category = _coerce_str(item.get("category")).lower()
        if category not in ("technical", "behavioral"):
            category = "technical"
        questions.append(
            ScreeningQuestion(category=category, question=question, purpose=_coerce_str(item.get("purpose")))
        )
    if not questions:
        logger.warning("No usable screening questions in response; using generic set")
        return [q.model_copy() for q in DEFAULT_SCREENING_QUESTIONS]
    return questions
