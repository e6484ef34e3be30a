"""Collaborators shared by the agents: relational store, object storage, completion client."""

from dataclasses import dataclass
from typing import Optional

from recruit_signal_ai.config import DATABASE_URL, STORAGE_ROOT
from recruit_signal_ai.db.crud import ResumeRepository, SearchQueryRepository
from recruit_signal_ai.db.session import Database
from recruit_signal_ai.services.completion_client import CompletionClient
from recruit_signal_ai.services.object_storage import LocalObjectStorage, ObjectStorage
from recruit_signal_ai.services.profile_store import ProfileStore


@dataclass
class Pipeline:
    resumes: ResumeRepository
    searches: SearchQueryRepository
    storage: ObjectStorage
    completion: CompletionClient

    @property
    def profile_store(self) -> ProfileStore:
        return ProfileStore(self.resumes)

    @classmethod
    def from_config(
        cls,
        database_url: str = DATABASE_URL,
        storage_root: str = STORAGE_ROOT,
        completion: Optional[CompletionClient] = None,
    ) -> "Pipeline":
        """Build from environment config; creates tables if needed."""
        db = Database(database_url)
        db.ensure_tables()
        return cls(
            resumes=ResumeRepository(db),
            searches=SearchQueryRepository(db),
            storage=LocalObjectStorage(storage_root),
            completion=completion or CompletionClient(),
        )
