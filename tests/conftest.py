"""Shared fixtures: in-memory database, temp-dir object storage, stub completion client."""

import json
from typing import Callable

import pytest

from recruit_signal_ai.db.crud import ResumeRepository, SearchQueryRepository
from recruit_signal_ai.db.session import Database
from recruit_signal_ai.pipeline import Pipeline
from recruit_signal_ai.schemas.context import RequestContext
from recruit_signal_ai.services.object_storage import LocalObjectStorage

from tests.helpers import StubCompletion


@pytest.fixture
def db():
    database = Database("sqlite://")
    database.ensure_tables()
    yield database
    database.dispose()


@pytest.fixture
def storage(tmp_path):
    return LocalObjectStorage(str(tmp_path / "objects"))


@pytest.fixture
def completion():
    return StubCompletion()


@pytest.fixture
def pipeline(db, storage, completion):
    return Pipeline(
        resumes=ResumeRepository(db),
        searches=SearchQueryRepository(db),
        storage=storage,
        completion=completion,
    )


@pytest.fixture
def ctx():
    return RequestContext(user_id="recruiter-1")


@pytest.fixture
def other_ctx():
    return RequestContext(user_id="recruiter-2")


@pytest.fixture
def make_reply() -> Callable[..., str]:
    """Build a prose-wrapped JSON reply the way models tend to answer."""

    def _make(payload, prefix: str = "Here is the data: ", suffix: str = " Hope that helps!") -> str:
        return f"{prefix}{json.dumps(payload)}{suffix}"

    return _make
