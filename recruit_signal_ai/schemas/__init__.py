"""Schema exports."""

from .candidate_profile import CandidateProfile, ProfileParse
from .context import RequestContext
from .generation import JobContext, ScreeningQuestion
from .search_result import SearchQueryRecord, SearchResult
from .upload_record import UploadRecord, UploadStatus

__all__ = [
    "CandidateProfile",
    "ProfileParse",
    "RequestContext",
    "JobContext",
    "ScreeningQuestion",
    "SearchQueryRecord",
    "SearchResult",
    "UploadRecord",
    "UploadStatus",
]
