# zeromarket/api/v1/registry.py
from fastapi import APIRouter, Depends, Response

from ...core.config import Settings
from ...domain.index import RegistryIndex
from ...domain.schemas import RegistryPackageIndex
from ... import deps

router = APIRouter()

CACHE_CONTROL = "public, s-maxage=300, stale-while-revalidate=60"


@router.get("/{namespace}/{name:path}", response_model=RegistryPackageIndex)
def get_package_index(namespace: str, name: str, response: Response,
                      index: RegistryIndex = Depends(deps.get_registry_index),
                      settings: Settings = Depends(deps.get_app_settings)):
    """
    Registry API consumed by `zeroclaw skill install namespace/name`.

    Resolves the package from the database, falling back to the built-in
    catalog, and returns the tool artifact URLs the CLI downloads.
    """
    body = index.lookup(namespace, name)
    response.headers["Cache-Control"] = CACHE_CONTROL
    response.headers["X-Registry"] = settings.REGISTRY_ID
    return body
