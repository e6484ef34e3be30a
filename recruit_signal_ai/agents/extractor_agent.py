"""Extractor Agent: store uploaded resumes, then excerpt -> LLM parse -> normalize -> persist."""

from typing import List, Optional

from recruit_signal_ai.config import (
    ALLOWED_CONTENT_TYPES,
    PARSE_MAX_TOKENS,
    PARSE_TEMPERATURE,
)
from recruit_signal_ai.cv_pipeline.text_extractor import extract_excerpt
from recruit_signal_ai.errors import RecruitSignalError, StorageError, UnsupportedFileTypeError
from recruit_signal_ai.pipeline import Pipeline
from recruit_signal_ai.prompts import PARSE_SYSTEM_PROMPT, build_parse_prompt, messages_for
from recruit_signal_ai.schemas.candidate_profile import ProfileParse
from recruit_signal_ai.schemas.context import RequestContext
from recruit_signal_ai.schemas.upload_record import UploadRecord
from recruit_signal_ai.services.object_storage import build_storage_path
from recruit_signal_ai.services.response_normalizer import normalize_profile
from recruit_signal_ai.utils.logger import get_logger

logger = get_logger(__name__)


def _normalize_content_type(content_type: Optional[str]) -> str:
    return (content_type or "").split(";")[0].strip().lower()


def upload_resume(
    pipeline: Pipeline,
    ctx: RequestContext,
    file_name: str,
    data: bytes,
    content_type: Optional[str],
) -> UploadRecord:
    """Store the file under the user's namespace and create its record (status=uploaded)."""
    ctype = _normalize_content_type(content_type)
    if ctype not in ALLOWED_CONTENT_TYPES:
        raise UnsupportedFileTypeError(
            f"Unsupported file type {content_type!r}; accepted: {', '.join(ALLOWED_CONTENT_TYPES.values())}"
        )
    path = build_storage_path(ctx.user_id, file_name)
    pipeline.storage.upload(path, data, ctype)
    try:
        record = pipeline.resumes.create(ctx.user_id, file_name, path, ctype)
    except StorageError:
        logger.exception("Could not create record for %s; removing stored object", path)
        pipeline.storage.remove(path)
        raise
    logger.info("Uploaded resume %s (%s) for user %s", record.id, file_name, ctx.user_id)
    return record


async def parse_resume(pipeline: Pipeline, ctx: RequestContext, record_id: str) -> ProfileParse:
    """
    Run the parse pipeline for one uploaded record.

    Any failure after the record is claimed marks it parsing_error and is
    re-raised, so a claimed record always ends in a terminal status. A malformed
    model response is not a failure: the record is saved with the default
    profile and the returned ProfileParse says so.
    """
    store = pipeline.profile_store
    record = store.mark_parsing(ctx, record_id)
    logger.info("Parsing resume %s (%s, %s)", record.id, record.file_name, record.content_type)

    try:
        data = pipeline.storage.download(record.storage_path)
        excerpt = extract_excerpt(data, record.content_type)
        text = await pipeline.completion.complete(
            messages_for(PARSE_SYSTEM_PROMPT, build_parse_prompt(excerpt)),
            temperature=PARSE_TEMPERATURE,
            max_tokens=PARSE_MAX_TOKENS,
        )
        outcome = normalize_profile(text)
        if outcome.is_defaulted:
            logger.warning("Resume %s saved with default profile: %s", record_id, outcome.reason)
        store.save_profile(ctx, record_id, outcome.profile)
    except RecruitSignalError as e:
        logger.warning("Parsing failed for %s (%s): %s", record_id, e.kind.value, e)
        store.record_failure(ctx, record_id, str(e))
        raise
    except Exception as e:
        logger.exception("Unexpected error while parsing %s", record_id)
        store.record_failure(ctx, record_id, f"Unexpected error: {e}")
        raise
    return outcome


async def upload_and_parse(
    pipeline: Pipeline,
    ctx: RequestContext,
    file_name: str,
    data: bytes,
    content_type: Optional[str],
) -> ProfileParse:
    record = upload_resume(pipeline, ctx, file_name, data, content_type)
    return await parse_resume(pipeline, ctx, record.id)


def list_resumes(pipeline: Pipeline, ctx: RequestContext) -> List[UploadRecord]:
    return pipeline.resumes.list_for_user(ctx.user_id)


def delete_resume(pipeline: Pipeline, ctx: RequestContext, record_id: str) -> UploadRecord:
    """Remove the stored file, then the record. A storage failure leaves the record in place."""
    record = pipeline.resumes.get(ctx.user_id, record_id)
    pipeline.storage.remove(record.storage_path)
    deleted = pipeline.resumes.delete(ctx.user_id, record_id)
    logger.info("Deleted resume %s for user %s", record_id, ctx.user_id)
    return deleted
