# zeromarket/api/auth.py
from fastapi import APIRouter, Depends
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from ..core.config import Settings
from ..core.errors import Unauthorized
from ..core.security import create_jwt
from ..domain import repos
from ..domain.schemas import SessionRequest, SessionResult
from ..integrations import github
from .. import deps

router = APIRouter()


@router.post("/session", response_model=SessionResult)
def create_session(req: SessionRequest,
                   accounts: repos.AccountRepo = Depends(deps.get_account_repo),
                   settings: Settings = Depends(deps.get_app_settings)):
    """Exchange a GitHub access token for a registry session token."""
    try:
        profile = github.fetch_profile(req.github_token, settings.GITHUB_API_URL)
    except github.IdentityError as e:
        logger.info(f"Sign-in rejected: {e}")
        raise Unauthorized()

    try:
        accounts.upsert(profile.github_id, profile.username, profile.name,
                        profile.avatar, profile.email)
    except SQLAlchemyError as e:
        # Non-fatal: allow sign-in even if the account write fails
        logger.error(f"Failed to upsert account {profile.username}: {e}")

    token = create_jwt(settings, username=profile.username, github_id=profile.github_id)
    return SessionResult(token=token, username=profile.username)


@router.get("/whoami")
def whoami(claims=Depends(deps.require_session)):
    return claims
