"""Search query log entries and ranked search results."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from recruit_signal_ai.schemas.candidate_profile import CandidateProfile


class SearchQueryRecord(BaseModel):
    """Append-only log entry written once per search invocation."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    query: str
    results_count: int = 0
    created_at: datetime


class SearchResult(BaseModel):
    """One ranked candidate for a query. Not persisted."""

    resume_id: str = Field(..., description="UploadRecord id the profile came from")
    relevance_score: float = Field(..., ge=0.0, le=1.0)
    justification: str = Field(default="", description="Why the candidate matches the query")
    candidate_data: CandidateProfile = Field(default_factory=CandidateProfile)
