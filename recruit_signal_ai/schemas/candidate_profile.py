"""Structured candidate profile produced by parsing an uploaded resume."""

from typing import Any, List, Literal

from pydantic import BaseModel, Field

SCALAR_FIELDS = (
    "full_name",
    "email",
    "phone_number",
    "linkedin_url",
    "location",
    "professional_summary",
)
RECORD_LIST_FIELDS = ("work_experience", "education", "projects")
PROFILE_FIELDS = SCALAR_FIELDS + ("work_experience", "education", "skills", "projects")


class CandidateProfile(BaseModel):
    """Normalized resume data; every field is always present with its default type."""

    full_name: str = Field(default="", description="Candidate full name")
    email: str = Field(default="", description="Contact email")
    phone_number: str = Field(default="", description="Contact phone number as written")
    linkedin_url: str = Field(default="", description="LinkedIn profile URL")
    location: str = Field(default="", description="City / region / country")
    professional_summary: str = Field(default="", description="Short professional summary")
    work_experience: List[Any] = Field(default_factory=list, description="Positions held (free-form records)")
    education: List[Any] = Field(default_factory=list, description="Degrees and institutions (free-form records)")
    skills: List[str] = Field(default_factory=list, description="Skills as written in the resume")
    projects: List[Any] = Field(default_factory=list, description="Projects (free-form records)")

    def current_role(self) -> str:
        """Title of the first listed position, if the model supplied one."""
        for exp in self.work_experience:
            if isinstance(exp, dict):
                title = exp.get("job_title") or exp.get("title")
                if isinstance(title, str) and title.strip():
                    return title.strip()
        return ""


class ProfileParse(BaseModel):
    """Outcome of normalizing one parse response: a trusted parse or a fallback."""

    status: Literal["parsed", "defaulted"]
    profile: CandidateProfile = Field(default_factory=CandidateProfile)
    reason: str = Field(default="", description="Why the profile was defaulted")

    @property
    def is_defaulted(self) -> bool:
        return self.status == "defaulted"
