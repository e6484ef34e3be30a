"""Relational store: engine/session bootstrap, ORM rows, user-scoped repositories."""

from .crud import ResumeRepository, SearchQueryRepository
from .session import Base, Database

__all__ = ["Base", "Database", "ResumeRepository", "SearchQueryRepository"]
