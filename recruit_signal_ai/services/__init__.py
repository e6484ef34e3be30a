"""Service exports."""

from .completion_client import CompletionClient
from .object_storage import LocalObjectStorage, ObjectStorage, build_storage_path
from .profile_store import ProfileStore
from .response_normalizer import (
    coerce_profile,
    normalize_list,
    normalize_profile,
    normalize_screening_questions,
    strip_code_fences,
)

__all__ = [
    "CompletionClient",
    "ObjectStorage",
    "LocalObjectStorage",
    "build_storage_path",
    "ProfileStore",
    "coerce_profile",
    "normalize_profile",
    "normalize_list",
    "normalize_screening_questions",
    "strip_code_fences",
]
