import os

# Settings are read at import time, so the environment must be ready first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_KEY"] = "test-signing-key-that-is-long-enough-for-hs256"
os.environ["JWT_ISSUER"] = "movieapi-tests"
os.environ["JWT_AUDIENCE"] = "movieapi-test-clients"
os.environ["AUTO_CREATE_TABLES"] = "false"

import pytest
from fastapi.testclient import TestClient

from movieapi import models  # noqa: F401  registers tables
from movieapi.core.auth import create_access_token, get_password_hash
from movieapi.db import Base, SessionLocal, engine, get_db
from movieapi.main import app
from movieapi.repositories.user_repository import UserRepository

TEST_PASSWORD = "correct-horse"


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    """Factory creating users straight through the repository."""
    repository = UserRepository(db_session)

    def _make_user(username="alice", email=None, password=TEST_PASSWORD, user_id=None):
        data = {
            "username": username,
            "email": email or f"{username}@example.com",
            "hashed_password": get_password_hash(password),
        }
        if user_id is not None:
            data["id"] = user_id
        return repository.create(data)

    return _make_user


@pytest.fixture
def registered_user(make_user):
    return make_user()


@pytest.fixture
def bearer_for():
    """Build an Authorization header carrying a valid access token for a user."""
    def _bearer_for(user) -> dict:
        token, _ = create_access_token(user.id, user.username, user.email)
        return {"Authorization": f"Bearer {token}"}

    return _bearer_for


@pytest.fixture
def auth_headers(registered_user, bearer_for):
    return bearer_for(registered_user)


@pytest.fixture
def password():
    """Plain-text password of users built by make_user."""
    return TEST_PASSWORD
