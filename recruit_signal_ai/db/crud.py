"""
User-scoped CRUD for resumes and search queries.

Every query filters on the owning user_id; a record owned by someone else is
reported as not found. Rows are returned as pydantic read models so ORM
objects never leave a session.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, List, Optional

from sqlalchemy import desc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from recruit_signal_ai.errors import InvalidStateError, RecordNotFoundError, StorageError
from recruit_signal_ai.schemas.search_result import SearchQueryRecord
from recruit_signal_ai.schemas.upload_record import UploadRecord, UploadStatus

from .models import ResumeRow, SearchQueryRow
from .session import Database


class _Repository:
    def __init__(self, db: Database) -> None:
        self.db = db

    @contextmanager
    def _scope(self) -> Iterator[Session]:
        try:
            with self.db.session_scope() as session:
                yield session
        except SQLAlchemyError as e:
            raise StorageError(f"Database operation failed: {e}") from e


class ResumeRepository(_Repository):

    @staticmethod
    def _get_row(session: Session, user_id: str, record_id: str) -> ResumeRow:
        q = select(ResumeRow).where(ResumeRow.id == record_id, ResumeRow.user_id == user_id).limit(1)
        row = session.execute(q).scalars().first()
        if row is None:
            raise RecordNotFoundError(f"Resume {record_id} not found")
        return row

    def create(
        self,
        user_id: str,
        file_name: str,
        storage_path: str,
        content_type: Optional[str],
    ) -> UploadRecord:
        with self._scope() as s:
            row = ResumeRow(
                user_id=user_id,
                file_name=file_name,
                storage_path=storage_path,
                content_type=content_type,
                upload_status=UploadStatus.UPLOADED.value,
            )
            s.add(row)
            s.flush()
            return UploadRecord.model_validate(row)

    def get(self, user_id: str, record_id: str) -> UploadRecord:
        with self._scope() as s:
            return UploadRecord.model_validate(self._get_row(s, user_id, record_id))

    def list_for_user(self, user_id: str) -> List[UploadRecord]:
        q = select(ResumeRow).where(ResumeRow.user_id == user_id).order_by(desc(ResumeRow.created_at))
        with self._scope() as s:
            return [UploadRecord.model_validate(r) for r in s.execute(q).scalars().all()]

    def list_parsed(self, user_id: str) -> List[UploadRecord]:
        """Records eligible for search: parsed_success with profile data present."""
        q = (
            select(ResumeRow)
            .where(
                ResumeRow.user_id == user_id,
                ResumeRow.upload_status == UploadStatus.PARSED_SUCCESS.value,
                ResumeRow.parsed_data.is_not(None),
            )
            .order_by(ResumeRow.created_at)
        )
        with self._scope() as s:
            return [UploadRecord.model_validate(r) for r in s.execute(q).scalars().all()]

    def transition(
        self,
        user_id: str,
        record_id: str,
        expected: UploadStatus,
        target: UploadStatus,
    ) -> UploadRecord:
        """Move a record from `expected` to `target`; any other current status is refused."""
        with self._scope() as s:
            row = self._get_row(s, user_id, record_id)
            if row.upload_status != expected.value:
                raise InvalidStateError(
                    f"Resume {record_id} is {row.upload_status}; expected {expected.value}"
                )
            row.upload_status = target.value
            s.flush()
            return UploadRecord.model_validate(row)

    def update_fields(self, user_id: str, record_id: str, **fields: Any) -> UploadRecord:
        """Partial update of the given columns in one transaction."""
        with self._scope() as s:
            row = self._get_row(s, user_id, record_id)
            for name, value in fields.items():
                setattr(row, name, value)
            s.flush()
            return UploadRecord.model_validate(row)

    def delete(self, user_id: str, record_id: str) -> UploadRecord:
        with self._scope() as s:
            row = self._get_row(s, user_id, record_id)
            record = UploadRecord.model_validate(row)
            s.delete(row)
            return record


class SearchQueryRepository(_Repository):

    def append(self, user_id: str, query: str, results_count: int) -> SearchQueryRecord:
        with self._scope() as s:
            row = SearchQueryRow(user_id=user_id, query=query, results_count=results_count)
            s.add(row)
            s.flush()
            return SearchQueryRecord.model_validate(row)

    def list_recent(self, user_id: str, limit: int = 50) -> List[SearchQueryRecord]:
        q = (
            select(SearchQueryRow)
            .where(SearchQueryRow.user_id == user_id)
            .order_by(desc(SearchQueryRow.created_at))
            .limit(max(1, min(limit, 500)))
        )
        with self._scope() as s:
            return [SearchQueryRecord.model_validate(r) for r in s.execute(q).scalars().all()]
