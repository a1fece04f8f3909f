"""
Shared fixtures: a file-backed SQLite database per test

A file (not :memory:) so that threaded tests get real, separate connections.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

import models  # noqa: F401
from database import Base, get_db, make_engine
from main import app
from core.identity import resolve_participant
from core.session_engine import SessionEngine


@pytest.fixture
def engine(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'poker.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def alice_id(db):
    return resolve_participant(db, 1, "Alice")


@pytest.fixture
def open_session(db, alice_id):
    return SessionEngine.create_session(db, 100, 11, "Fix login bug", "", alice_id)
