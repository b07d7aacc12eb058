"""Tests for the GitHub identity integration."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from zeromarket.integrations.github import (
    GitHubProfile,
    IdentityError,
    fetch_profile,
    profile_from_payload,
)


class TestProfileFromPayload:
    def test_full_profile(self):
        profile = profile_from_payload({
            "id": 42, "login": "acme", "name": "Acme",
            "avatar_url": "https://avatars/42", "email": "dev@acme.io",
        })
        assert profile == GitHubProfile("42", "acme", "Acme", "https://avatars/42", "dev@acme.io")

    def test_username_falls_back_to_email(self):
        profile = profile_from_payload({"id": 7, "email": "someone@example.com"})
        assert profile.username == "someone"
        assert profile.name == "someone"

    def test_username_falls_back_to_id(self):
        assert profile_from_payload({"id": 7}).username == "7"

    def test_missing_id(self):
        with pytest.raises(IdentityError):
            profile_from_payload({"login": "acme"})


class TestFetchProfile:
    def test_sends_bearer_token(self):
        response = MagicMock()
        response.json.return_value = {"id": 1, "login": "octo"}
        with patch("zeromarket.integrations.github.requests.get", return_value=response) as get:
            profile = fetch_profile("gho_abc", "https://api.example.com/")

        assert profile.username == "octo"
        url = get.call_args.args[0]
        assert url == "https://api.example.com/user"
        assert get.call_args.kwargs["headers"]["Authorization"] == "Bearer gho_abc"

    def test_http_error_becomes_identity_error(self):
        response = MagicMock()
        response.raise_for_status.side_effect = requests.HTTPError("401 Unauthorized")
        with patch("zeromarket.integrations.github.requests.get", return_value=response):
            with pytest.raises(IdentityError):
                fetch_profile("bad")
