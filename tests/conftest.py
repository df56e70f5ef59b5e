# tests/conftest.py
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker as _sessionmaker
from sqlalchemy.pool import StaticPool

# -----------------------------------------------------------------------------
# IMPORTANT: ensure all ORM tables are registered in metadata before create_all
# -----------------------------------------------------------------------------
import app.models.user  # noqa: F401
import app.models.task  # noqa: F401
import app.models.assignment  # noqa: F401
import app.models.client_message  # noqa: F401

from app.core.db import build_engine, get_db
from app.main import app as fastapi_app
from app.models.base import Base
from app.services.task_assignment_service import TaskAssignmentService
from tests.fakes import FakeNotifier


@pytest.fixture()
def engine():
    """
    Fresh in-memory sqlite database per test.

    StaticPool keeps the single connection alive so every session (and the
    TestClient worker threads) see the same database.
    """
    eng = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(eng)
    try:
        yield eng
    finally:
        eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return _sessionmaker(
        bind=engine,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        future=True,
    )


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def notifier():
    return FakeNotifier()


@pytest.fixture()
def service(db, notifier):
    return TaskAssignmentService(db, notifier)


@pytest.fixture()
def client(session_factory):
    def _get_test_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    fastapi_app.dependency_overrides[get_db] = _get_test_db
    try:
        yield TestClient(fastapi_app)
    finally:
        fastapi_app.dependency_overrides.pop(get_db, None)
