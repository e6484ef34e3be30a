"""Outreach Agent: recruiter-facing text generated from one parsed candidate profile."""

from typing import List, Optional

from recruit_signal_ai.config import OUTREACH_TEMPERATURE, SCREENING_TEMPERATURE
from recruit_signal_ai.errors import InvalidStateError, ResponseShapeError
from recruit_signal_ai.pipeline import Pipeline
from recruit_signal_ai.prompts import (
    OUTREACH_SYSTEM_PROMPT,
    SCREENING_SYSTEM_PROMPT,
    build_outreach_prompt,
    build_screening_prompt,
    messages_for,
)
from recruit_signal_ai.schemas.candidate_profile import CandidateProfile
from recruit_signal_ai.schemas.context import RequestContext
from recruit_signal_ai.schemas.generation import JobContext, ScreeningQuestion
from recruit_signal_ai.schemas.upload_record import UploadStatus
from recruit_signal_ai.services.completion_client import CompletionClient
from recruit_signal_ai.services.response_normalizer import (
    normalize_screening_questions,
    strip_code_fences,
)
from recruit_signal_ai.utils.logger import get_logger

logger = get_logger(__name__)


async def draft_outreach(
    completion: CompletionClient,
    profile: CandidateProfile,
    job_context: Optional[JobContext] = None,
) -> str:
    text = await completion.complete(
        messages_for(OUTREACH_SYSTEM_PROMPT, build_outreach_prompt(profile, job_context)),
        temperature=OUTREACH_TEMPERATURE,
    )
    message = strip_code_fences(text)
    if not message:
        raise ResponseShapeError("Completion returned empty outreach text")
    return message


async def draft_screening_questions(
    completion: CompletionClient,
    profile: CandidateProfile,
) -> List[ScreeningQuestion]:
    """Never empty: unusable output falls back to the generic question set."""
    text = await completion.complete(
        messages_for(SCREENING_SYSTEM_PROMPT, build_screening_prompt(profile)),
        temperature=SCREENING_TEMPERATURE,
    )
    return normalize_screening_questions(text)


def _parsed_profile(pipeline: Pipeline, ctx: RequestContext, record_id: str) -> CandidateProfile:
    record = pipeline.resumes.get(ctx.user_id, record_id)
    if record.upload_status != UploadStatus.PARSED_SUCCESS or record.parsed_data is None:
        raise InvalidStateError(f"Resume {record_id} has no parsed profile ({record.upload_status.value})")
    return record.parsed_data


async def generate_outreach(
    pipeline: Pipeline,
    ctx: RequestContext,
    record_id: str,
    job_context: Optional[JobContext] = None,
) -> str:
    profile = _parsed_profile(pipeline, ctx, record_id)
    message = await draft_outreach(pipeline.completion, profile, job_context)
    logger.info("Outreach drafted for resume %s (%s characters)", record_id, len(message))
    return message


async def generate_screening_questions(
    pipeline: Pipeline,
    ctx: RequestContext,
    record_id: str,
) -> List[ScreeningQuestion]:
    profile = _parsed_profile(pipeline, ctx, record_id)
    questions = await draft_screening_questions(pipeline.completion, profile)
    logger.info("Generated %s screening questions for resume %s", len(questions), record_id)
    return questions
