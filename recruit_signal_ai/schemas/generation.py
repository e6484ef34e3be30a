"""Inputs and outputs of the outreach and screening generators."""

from typing import Literal, Optional

from pydantic import BaseModel, Field


class JobContext(BaseModel):
    """Optional role the recruiter is hiring for, woven into outreach text."""

    job_title: Optional[str] = Field(default=None, description="Open role title")
    company: Optional[str] = Field(default=None, description="Hiring company")


class ScreeningQuestion(BaseModel):
    category: Literal["technical", "behavioral"] = "technical"
    question: str
    purpose: str = ""
