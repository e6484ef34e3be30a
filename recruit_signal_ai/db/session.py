"""SQLAlchemy engine/session bootstrap.

A ``Database`` owns one engine and session factory. It is built explicitly
and handed to the pipeline instead of living in module globals.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from recruit_signal_ai.config import DATABASE_URL, DB_ECHO


class Base(DeclarativeBase):
    pass


def _is_memory_sqlite(url: str) -> bool:
    return url.startswith("sqlite") and (url.rstrip("/").endswith(":memory:") or url.rstrip("/") in ("sqlite:", "sqlite://"))


class Database:
    def __init__(self, url: str = DATABASE_URL, echo: bool = DB_ECHO) -> None:
        kwargs = {"echo": echo, "future": True}
        if url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            if _is_memory_sqlite(url):
                # one shared connection, otherwise every checkout sees an empty database
                kwargs["poolclass"] = StaticPool
        else:
            kwargs["pool_pre_ping"] = True
        self.url = url
        self.engine = create_engine(url, **kwargs)
        self._sessions = sessionmaker(
            bind=self.engine,
            class_=Session,
            autoflush=False,
            autocommit=False,
            expire_on_commit=False,
        )

    def ensure_tables(self) -> None:
        """Create tables if needed. Import models lazily to avoid circulars."""
        from . import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        One transaction: commit on success, rollback and re-raise on any error.
            with db.session_scope() as s:
                s.add(obj)
        """
        session = self._sessions()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def dispose(self) -> None:
        self.engine.dispose()


__all__ = ["Base", "Database"]
