"""Object storage for raw resume files. Paths are namespaced by owning user id."""

import uuid
from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath

from recruit_signal_ai.config import STORAGE_ROOT
from recruit_signal_ai.errors import StorageError
from recruit_signal_ai.utils.logger import get_logger

logger = get_logger(__name__)


def build_storage_path(user_id: str, file_name: str) -> str:
    """<user_id>/<uuid>_<file name>; the file name is reduced to its last path component."""
    if not user_id or "/" in user_id or "\\" in user_id or ".." in user_id:
        raise StorageError(f"Invalid user id for storage path: {user_id!r}")
    safe_name = PurePosixPath((file_name or "").replace("\\", "/")).name or "upload.bin"
    return f"{user_id}/{uuid.uuid4().hex}_{safe_name}"


class ObjectStorage(ABC):
    """Abstract object store; every failure surfaces as StorageError."""

    @abstractmethod
    def upload(self, path: str, data: bytes, content_type: str) -> None:
        ...

    @abstractmethod
    def download(self, path: str) -> bytes:
        ...

    @abstractmethod
    def remove(self, path: str) -> None:
        ...


class LocalObjectStorage(ObjectStorage):
    """Filesystem-backed store rooted at STORAGE_ROOT."""

    def __init__(self, root: str = STORAGE_ROOT) -> None:
        self.root = Path(root).resolve()

    def _resolve(self, path: str) -> Path:
        target = (self.root / path).resolve()
        if target == self.root or self.root not in target.parents:
            raise StorageError(f"Invalid storage path: {path}")
        return target

    def upload(self, path: str, data: bytes, content_type: str) -> None:
        target = self._resolve(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            raise StorageError(f"Upload failed for {path}: {e}") from e
        logger.info("Stored %s (%s bytes, %s)", path, len(data), content_type)

    def download(self, path: str) -> bytes:
        target = self._resolve(path)
        try:
            return target.read_bytes()
        except OSError as e:
            raise StorageError(f"File download failed for {path}: {e}") from e

    def remove(self, path: str) -> None:
        target = self._resolve(path)
        try:
            target.unlink()
        except FileNotFoundError:
            logger.warning("Object already absent: %s", path)
        except OSError as e:
            raise StorageError(f"Remove failed for {path}: {e}") from e
