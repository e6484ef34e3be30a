"""Upload record tracking one resume through the parse lifecycle."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from recruit_signal_ai.schemas.candidate_profile import CandidateProfile


class UploadStatus(str, Enum):
    UPLOADED = "uploaded"
    PARSING = "parsing"
    PARSED_SUCCESS = "parsed_success"
    PARSING_ERROR = "parsing_error"

    @property
    def is_terminal(self) -> bool:
        return self in (UploadStatus.PARSED_SUCCESS, UploadStatus.PARSING_ERROR)


class UploadRecord(BaseModel):
    """Read model of a stored resume row."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    file_name: str
    storage_path: str
    content_type: Optional[str] = None
    upload_status: UploadStatus = UploadStatus.UPLOADED
    parsed_data: Optional[CandidateProfile] = None
    skills_extracted: Optional[List[str]] = None
    error_message: Optional[str] = Field(default=None, description="Failure message when parsing_error")
    created_at: datetime
    updated_at: datetime
