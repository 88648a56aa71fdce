from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pytest


_TEST_ROOT = Path(tempfile.mkdtemp(prefix="friendzone_test_"))
_DB_PATH = _TEST_ROOT / "friendzone_test.db"

os.environ["DATABASE_URL"] = f"sqlite:///{_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["LOG_LEVEL"] = "WARNING"

PASSWORD = "correct-horse"


@pytest.fixture(scope="session")
def schema() -> None:
    from friendzone.init_db import init_db

    init_db()


@pytest.fixture(autouse=True)
def clean_tables(schema):
    yield
    from friendzone.database import Base, engine

    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture()
def service_db():
    """Unpoliced session, used to arrange fixtures and inspect results."""
    from friendzone.database import SessionLocal

    with SessionLocal() as session:
        yield session


@pytest.fixture()
def db_factory():
    """Open sessions policed as a given caller; ``None`` is anonymous."""
    from friendzone.core.policies import bind_caller
    from friendzone.database import SessionLocal

    sessions = []

    def _open(caller_id):
        session = bind_caller(SessionLocal(), caller_id)
        sessions.append(session)
        return session

    yield _open

    for session in sessions:
        session.close()


@pytest.fixture()
def make_profile(service_db):
    """Create an account with its profile directly in the store; returns the id."""
    from friendzone.crud import crud_user
    from friendzone.models import Profile

    def _make(username: str) -> str:
        user = crud_user.create_user(service_db, email=f"{username}@example.com", password=PASSWORD)
        service_db.add(Profile(id=user.id, username=username, full_name=username.title()))
        service_db.commit()
        return user.id

    return _make


@pytest.fixture()
def api_client(schema):
    from fastapi.testclient import TestClient

    from friendzone.main import app

    return TestClient(app)


@pytest.fixture()
def register(api_client):
    """Register through the API; returns the new profile plus auth headers."""

    def _register(username: str) -> dict:
        resp = api_client.post(
            "/api/v1/auth/register",
            json={
                "email": f"{username}@example.com",
                "password": PASSWORD,
                "username": username,
                "full_name": username.title(),
            },
        )
        assert resp.status_code == 201, resp.text
        body = resp.json()
        return {
            "id": body["profile"]["id"],
            "username": username,
            "headers": {"Authorization": f"Bearer {body['access_token']}"},
        }

    return _register
