"""Agent exports."""

from .extractor_agent import delete_resume, list_resumes, parse_resume, upload_and_parse, upload_resume
from .outreach_agent import (
    draft_outreach,
    draft_screening_questions,
    generate_outreach,
    generate_screening_questions,
)
from .search_agent import list_search_history, search_candidates

__all__ = [
    "upload_resume",
    "parse_resume",
    "upload_and_parse",
    "list_resumes",
    "delete_resume",
    "search_candidates",
    "list_search_history",
    "draft_outreach",
    "draft_screening_questions",
    "generate_outreach",
    "generate_screening_questions",
]
