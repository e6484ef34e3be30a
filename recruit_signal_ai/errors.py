"""Error taxonomy for the resume pipeline.

Every error carries an ``ErrorKind`` so callers can branch on the kind of
failure instead of inspecting messages. Malformed model output is never an
error: the normalizer degrades to defaults and logs a warning instead.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    EXTRACTION = "extraction"
    UPSTREAM = "upstream"
    RESPONSE_SHAPE = "response_shape"
    STORAGE = "storage"
    NOT_FOUND = "not_found"
    INVALID_STATE = "invalid_state"
    UNSUPPORTED_FILE = "unsupported_file"


class RecruitSignalError(Exception):
    """Base class for all pipeline errors."""

    kind: ErrorKind = ErrorKind.UPSTREAM


class ExtractionError(RecruitSignalError):
    """Uploaded document is empty or yields too little readable text."""

    kind = ErrorKind.EXTRACTION


class UpstreamError(RecruitSignalError):
    """Completion endpoint returned a non-2xx response or could not be reached."""

    kind = ErrorKind.UPSTREAM

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    def __str__(self) -> str:
        base = super().__str__()
        if self.status_code is not None:
            return f"{base} (status={self.status_code})"
        return base


class ResponseShapeError(UpstreamError):
    """Completion response lacks choices[0].message.content."""

    kind = ErrorKind.RESPONSE_SHAPE


class StorageError(RecruitSignalError):
    """Object storage or relational store operation failed."""

    kind = ErrorKind.STORAGE


class RecordNotFoundError(RecruitSignalError):
    kind = ErrorKind.NOT_FOUND


class InvalidStateError(RecruitSignalError):
    """Upload record is not in a status that allows the requested transition."""

    kind = ErrorKind.INVALID_STATE


class UnsupportedFileTypeError(RecruitSignalError):
    kind = ErrorKind.UNSUPPORTED_FILE
