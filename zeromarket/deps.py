# zeromarket/deps.py
from __future__ import annotations
from typing import Any, Dict

import jwt
from fastapi import Depends, Header, Request

from .core.config import Settings
from .core.database import Database
from .core.errors import Unauthorized
from .core.security import decode_jwt
from .domain import repos, storage
from .domain.artifacts import ArtifactUrlResolver
from .domain.catalog import FallbackCatalog
from .domain.index import RegistryIndex


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings

def get_database(request: Request) -> Database:
    return request.app.state.db

def get_repo(db: Database = Depends(get_database)) -> repos.PackageRepo:
    return repos.PackageRepo(db)

def get_account_repo(db: Database = Depends(get_database)) -> repos.AccountRepo:
    return repos.AccountRepo(db)

def get_blob_store(request: Request) -> storage.BlobStore:
    return request.app.state.blobs

def get_catalog(request: Request) -> FallbackCatalog:
    return request.app.state.catalog

def get_resolver(settings: Settings = Depends(get_app_settings)) -> ArtifactUrlResolver:
    return ArtifactUrlResolver(settings.PUBLIC_BLOB_BASE_URL)

def get_registry_index(repo: repos.PackageRepo = Depends(get_repo),
                       catalog: FallbackCatalog = Depends(get_catalog),
                       resolver: ArtifactUrlResolver = Depends(get_resolver),
                       settings: Settings = Depends(get_app_settings)) -> RegistryIndex:
    return RegistryIndex(repo, catalog, resolver,
                         fallback_on_store_error=settings.FALLBACK_ON_STORE_ERROR)

def auth_header(authorization: str | None = Header(default=None)) -> str:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise Unauthorized()
    return authorization.split(" ", 1)[1]

def require_session(token: str = Depends(auth_header),
                    settings: Settings = Depends(get_app_settings)) -> Dict[str, Any]:
    try:
        claims = decode_jwt(settings, token)
    except jwt.PyJWTError:
        raise Unauthorized()
    if not claims.get("sub"):
        raise Unauthorized()
    return claims
