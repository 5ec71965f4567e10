from collections.abc import Iterator
from pathlib import Path

import pytest
from dotenv import load_dotenv
from fastapi.testclient import TestClient
from support_desk.api.auth import get_auth_service
from support_desk.core.config import Settings
from support_desk.core.security import hash_password
from support_desk.main import app
from support_desk.services.auth_service import AuthService
from tests.helpers.auth import TEST_JWT_SECRET
from tests.helpers.fakes import FakeUserRepository

load_dotenv(Path(__file__).resolve().parents[1] / ".env")


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def user_store() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture
def fake_auth(user_store: FakeUserRepository) -> Iterator[AuthService]:
    service = AuthService(
        user_repository=user_store,
        settings=Settings(jwt_secret=TEST_JWT_SECRET),
    )
    app.dependency_overrides[get_auth_service] = lambda: service
    yield service
    app.dependency_overrides.clear()


@pytest.fixture
def user_token(fake_auth: AuthService, user_store: FakeUserRepository) -> str:
    user_store.create(
        email="user@example.com",
        name="Regular User",
        password_hash=hash_password("user-pass"),
        role="user",
    )
    return fake_auth.login("user@example.com", "user-pass").token


@pytest.fixture
def admin_token(fake_auth: AuthService, user_store: FakeUserRepository) -> str:
    user_store.create(
        email="admin@example.com",
        name="Admin User",
        password_hash=hash_password("admin-pass"),
        role="admin",
    )
    return fake_auth.login("admin@example.com", "admin-pass").token
