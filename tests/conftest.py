"""Shared pytest fixtures."""

import os

# must be set before the app (and its engine) is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from bloghub.core.config import Settings, get_settings
from bloghub.db.session import build_engine, get_db, init_db
from main import app

TEST_SECRET = "test-secret"


@pytest.fixture
def settings():
    return Settings(database_url="sqlite://", jwt_secret=TEST_SECRET)


@pytest.fixture
def engine():
    """Fresh in-memory database per test, shared across threads."""
    engine = build_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def client(session_factory, settings):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def use_settings():
    """Swap the settings the app sees for the rest of the test."""
    def _use(**overrides):
        values = {"database_url": "sqlite://", "jwt_secret": TEST_SECRET, **overrides}
        new_settings = Settings(**values)
        app.dependency_overrides[get_settings] = lambda: new_settings
        return new_settings
    return _use


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def signup(client):
    """Factory fixture: register a user and return ``(user, token)``."""
    def _signup(name="A", email="a@example.com", password="secret1"):
        response = client.post(
            "/auth/signup",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return body["user"], body["token"]
    return _signup


@pytest.fixture
def make_post(client):
    """Factory fixture: create a post as the given token's owner."""
    def _make(token, title="Hi", content="Hello world", **extra):
        response = client.post(
            "/posts",
            json={"title": title, "content": content, **extra},
            headers=auth_header(token),
        )
        assert response.status_code == 201, response.text
        return response.json()
    return _make
