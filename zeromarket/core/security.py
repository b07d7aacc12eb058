# zeromarket/core/security.py
from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt  # PyJWT

from .config import Settings

# ---- Session tokens (HS256) ----
def create_jwt(settings: Settings, username: str, github_id: str) -> str:
    now = datetime.now(timezone.utc)
    exp = now + timedelta(hours=int(settings.JWT_EXPIRE_HOURS))
    claims: Dict[str, Any] = {
        "sub": username,
        "github_id": github_id,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm="HS256")


def decode_jwt(settings: Settings, token: str) -> Dict[str, Any]:
    """Verify signature, expiry, issuer and audience; raises jwt.PyJWTError."""
    return jwt.decode(
        token,
        settings.JWT_SECRET,
        algorithms=["HS256"],
        audience=settings.JWT_AUDIENCE,
        issuer=settings.JWT_ISSUER,
    )
