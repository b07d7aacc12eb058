# zeromarket/integrations/github.py
from __future__ import annotations
import requests
from dataclasses import dataclass
from typing import Any, Dict, Optional


class IdentityError(Exception):
    """GitHub did not vouch for the supplied token."""


@dataclass(frozen=True)
class GitHubProfile:
    github_id: str
    username: str
    name: str
    avatar: Optional[str]
    email: Optional[str]


def profile_from_payload(payload: Dict[str, Any]) -> GitHubProfile:
    """
    Derive account fields from a GitHub /user payload.

    The handle falls back to the email's local part, then to the numeric id,
    so every signed-in account gets a usable namespace.
    """
    github_id = str(payload.get("id") or payload.get("sub") or "")
    email = payload.get("email")
    username = payload.get("login") or (email.split("@")[0] if email else "") or github_id
    if not github_id or not username:
        raise IdentityError("GitHub profile has no usable id")
    return GitHubProfile(
        github_id=github_id,
        username=username,
        name=payload.get("name") or username,
        avatar=payload.get("avatar_url"),
        email=email,
    )


def fetch_profile(token: str, api_url: str = "https://api.github.com") -> GitHubProfile:
    headers = {
        "Accept": "application/vnd.github+json",
        "Authorization": f"Bearer {token}",
    }
    try:
        r = requests.get(f"{api_url.rstrip('/')}/user", headers=headers, timeout=10)
        r.raise_for_status()
        payload = r.json()
    except (requests.RequestException, ValueError) as e:
        raise IdentityError(f"GitHub API error: {e}") from e
    if not isinstance(payload, dict):
        raise IdentityError("Unexpected GitHub profile payload")
    return profile_from_payload(payload)
