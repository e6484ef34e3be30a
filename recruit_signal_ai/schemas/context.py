"""Explicit per-request context passed into every pipeline call."""

from pydantic import BaseModel, Field, field_validator


class RequestContext(BaseModel):
    """Identity of the recruiter the operation runs for; scopes every store query."""

    user_id: str = Field(..., min_length=1)

    @field_validator("user_id")
    @classmethod
    def user_id_is_a_single_path_segment(cls, v: str) -> str:
        # user_id is the top-level storage namespace
        if "/" in v or "\\" in v or ".." in v:
            raise ValueError("user_id must not contain '/', '\\' or '..'")
        return v
