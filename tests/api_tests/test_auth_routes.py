"""Tests for session issuance and verification."""

from unittest.mock import patch

from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from zeromarket import deps
from zeromarket.core.security import create_jwt, decode_jwt
from zeromarket.domain.db_models import UserModel
from zeromarket.integrations.github import GitHubProfile, IdentityError

PROFILE = GitHubProfile(
    github_id="42", username="acme", name="Acme", avatar="https://avatars/42", email="dev@acme.io",
)


class TestCreateSession:
    def test_issues_token_and_upserts_account(self, client, db, settings):
        with patch("zeromarket.api.auth.github.fetch_profile", return_value=PROFILE) as fetch:
            response = client.post("/api/auth/session", json={"github_token": "gho_abc"})

        assert response.status_code == 200
        body = response.json()
        assert body["username"] == "acme"
        claims = decode_jwt(settings, body["token"])
        assert claims["sub"] == "acme"
        assert claims["github_id"] == "42"
        fetch.assert_called_once_with("gho_abc", settings.GITHUB_API_URL)

        with db.session() as s:
            user = s.execute(select(UserModel)).scalar_one()
            assert user.id == "u_42"
            assert user.email == "dev@acme.io"

    def test_identity_failure_is_401(self, client):
        with patch("zeromarket.api.auth.github.fetch_profile", side_effect=IdentityError("bad token")):
            response = client.post("/api/auth/session", json={"github_token": "nope"})
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    def test_account_write_failure_does_not_block_sign_in(self, app, client):
        class BrokenAccounts:
            def upsert(self, *args):
                raise OperationalError("INSERT", {}, Exception("read-only"))

        app.dependency_overrides[deps.get_account_repo] = BrokenAccounts
        with patch("zeromarket.api.auth.github.fetch_profile", return_value=PROFILE):
            response = client.post("/api/auth/session", json={"github_token": "gho_abc"})
        assert response.status_code == 200


class TestWhoami:
    def test_echoes_claims(self, client, auth_headers):
        response = client.get("/api/auth/whoami", headers=auth_headers())
        assert response.status_code == 200
        assert response.json()["sub"] == "acme"

    def test_rejects_token_from_other_secret(self, client, settings):
        forged = create_jwt(settings.model_copy(update={"JWT_SECRET": "other"}), "acme", "42")
        response = client.get("/api/auth/whoami", headers={"Authorization": f"Bearer {forged}"})
        assert response.status_code == 401

    def test_rejects_missing_header(self, client):
        assert client.get("/api/auth/whoami").status_code == 401
