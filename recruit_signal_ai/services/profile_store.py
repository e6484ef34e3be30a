"""Profile Store: the single state-transition boundary of an upload record."""

from recruit_signal_ai.db.crud import ResumeRepository
from recruit_signal_ai.errors import StorageError
from recruit_signal_ai.schemas.candidate_profile import CandidateProfile
from recruit_signal_ai.schemas.context import RequestContext
from recruit_signal_ai.schemas.upload_record import UploadRecord, UploadStatus
from recruit_signal_ai.utils.logger import get_logger

logger = get_logger(__name__)


class ProfileStore:
    """
    uploaded -> parsing -> parsed_success | parsing_error.
    Terminal records never go back to parsing; a re-upload creates a new record.
    """

    def __init__(self, resumes: ResumeRepository) -> None:
        self.resumes = resumes

    def mark_parsing(self, ctx: RequestContext, record_id: str) -> UploadRecord:
        """Claim an uploaded record for parsing. InvalidStateError for any other status."""
        return self.resumes.transition(ctx.user_id, record_id, UploadStatus.UPLOADED, UploadStatus.PARSING)

    def save_profile(self, ctx: RequestContext, record_id: str, profile: CandidateProfile) -> UploadRecord:
        """
        Set profile, skills and parsed_success in one transaction. On a storage
        failure, record parsing_error instead and re-raise the StorageError.
        """
        try:
            record = self.resumes.update_fields(
                ctx.user_id,
                record_id,
                parsed_data=profile.model_dump(),
                skills_extracted=list(profile.skills),
                upload_status=UploadStatus.PARSED_SUCCESS.value,
                error_message=None,
            )
        except StorageError as e:
            logger.error("Failed to save parsed data for %s: %s", record_id, e)
            self.record_failure(ctx, record_id, f"Failed to save parsed data: {e}")
            raise
        logger.info("Resume %s parsed: skills=%s", record_id, len(profile.skills))
        return record

    def mark_error(self, ctx: RequestContext, record_id: str, message: str) -> UploadRecord:
        record = self.resumes.update_fields(
            ctx.user_id,
            record_id,
            upload_status=UploadStatus.PARSING_ERROR.value,
            error_message=message[:1000],
        )
        logger.warning("Resume %s marked parsing_error: %s", record_id, message)
        return record

    def record_failure(self, ctx: RequestContext, record_id: str, message: str) -> None:
        """mark_error for use inside an except block: a second storage failure is logged, not raised."""
        try:
            self.mark_error(ctx, record_id, message)
        except StorageError as e:
            logger.error("Could not record parsing_error for %s: %s", record_id, e)
