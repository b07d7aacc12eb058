# zeromarket/domain/maintenance.py
from loguru import logger

from ..core.errors import Forbidden, PackageNotFound, StoreUnavailable, ValidationFailed, has_traversal
from .artifacts import normalize_manifest_key
from .models import Found, StoreError
from .repos import PackageRepo
from .storage import BlobStore


def slug_exists(repo: PackageRepo, namespace: str, slug: str) -> bool:
    slug = (slug or "").strip()
    if not slug:
        return False
    if has_traversal(slug):
        raise ValidationFailed("Invalid slug")
    return repo.exists(namespace, slug)


def delete_package(repo: PackageRepo, blobs: BlobStore, username: str,
                   namespace: str, name: str) -> None:
    """Owner-only delete: blobs first (best effort), then the row; tools cascade."""
    if has_traversal(namespace) or has_traversal(name):
        raise ValidationFailed("Invalid namespace or name")
    if namespace != username:
        raise Forbidden("You can only delete your own packages")

    result = repo.find(namespace, name)
    if isinstance(result, StoreError):
        raise StoreUnavailable()
    if not isinstance(result, Found):
        raise PackageNotFound("Package not found")

    for tool in result.package.tools:
        for key in (tool.wasm_url, normalize_manifest_key(tool.manifest_url, tool.name)):
            try:
                blobs.delete(key)
            except Exception as e:
                logger.warning(f"Failed to delete blob {key} for {namespace}/{name}: {e}")

    repo.delete(namespace, name)
    logger.info(f"Deleted package {namespace}/{name}")
