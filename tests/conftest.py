"""Pytest configuration and shared fixtures."""

import pytest

from api import create_app
from models.file_storage import FileStorage
from models.repositories import ChirpRepository, TokenRepository, UserRepository
from services.auth_service import AuthService
from utils.security import hash_password

TEST_SECRET = "unit-test-secret-0123456789abcdef0123456789"


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "database.json"


@pytest.fixture
def storage(db_path):
    """A fresh store per test; each owns its own lock."""
    store = FileStorage(db_path)
    store.reload()
    return store


@pytest.fixture
def chirps(storage):
    return ChirpRepository(storage)


@pytest.fixture
def users(storage):
    return UserRepository(storage)


@pytest.fixture
def tokens(storage):
    return TokenRepository(storage)


@pytest.fixture
def auth(users, tokens):
    return AuthService(users, tokens, secret=TEST_SECRET)


@pytest.fixture(scope="session")
def password_hash():
    """One argon2 hash shared by tests that only need a stored hash."""
    return hash_password("password123")


@pytest.fixture
def app(tmp_path):
    app = create_app("testing", DB_PATH=str(tmp_path / "api.json"))
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def registered_user(client):
    """Create a user through the API and log in; returns the login response body."""
    resp = client.post("/api/users", json={"email": "walt@breakingbad.com", "password": "123456"})
    assert resp.status_code == 201
    resp = client.post("/api/login", json={"email": "walt@breakingbad.com", "password": "123456"})
    assert resp.status_code == 200
    return resp.get_json()


@pytest.fixture
def auth_headers(registered_user):
    return {"Authorization": f"Bearer {registered_user['token']}"}
