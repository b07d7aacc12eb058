"""Shared fixtures: an isolated app per test backed by a throwaway SQLite file."""

import pytest
from fastapi.testclient import TestClient

from zeromarket.core.config import Settings
from zeromarket.core.security import create_jwt
from zeromarket.domain.repos import PackageRepo
from zeromarket.main import create_app

PUBLIC_BASE = "https://cdn.example.com"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DB_URL=f"sqlite:///{tmp_path}/registry.db",
        STORAGE_BACKEND="local",
        BLOB_ROOT=str(tmp_path / "blobs"),
        PUBLIC_BLOB_BASE_URL=PUBLIC_BASE,
        JWT_SECRET="test-secret",
        LOG_LEVEL="WARNING",
        LOG_FILE="",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    # entering the context runs startup, which creates the tables
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(app, client):
    return app.state.db


@pytest.fixture
def repo(db):
    return PackageRepo(db)


@pytest.fixture
def auth_headers(settings):
    def make(username: str = "acme", github_id: str = "42") -> dict:
        token = create_jwt(settings, username=username, github_id=github_id)
        return {"Authorization": f"Bearer {token}"}
    return make
