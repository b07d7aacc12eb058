# zeromarket/api/packages.py
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from ..domain import maintenance, repos, schemas, search, storage
from ..domain.artifacts import ArtifactUrlResolver
from ..domain.catalog import FallbackCatalog
from ..domain.publishing import Publisher, UploadedFile, parse_tags
from .. import deps

router = APIRouter()


@router.get("/packages", response_model=schemas.PackagePage)
def list_packages(q: str = Query("", description="substring over name, namespace, description, tags"),
                  repo: repos.PackageRepo = Depends(deps.get_repo),
                  catalog: FallbackCatalog = Depends(deps.get_catalog),
                  resolver: ArtifactUrlResolver = Depends(deps.get_resolver)):
    return search.search_packages(repo, catalog, resolver, q)


@router.post("/upload", response_model=schemas.PublishResult)
def upload_package(slug: str = Form(""),
                   displayName: str = Form(""),
                   version: str = Form(""),
                   tags: str = Form("[]"),
                   changelog: str = Form(""),
                   files: List[UploadFile] = File(default=[]),
                   repo: repos.PackageRepo = Depends(deps.get_repo),
                   blobs: storage.BlobStore = Depends(deps.get_blob_store),
                   user: Dict[str, Any] = Depends(deps.require_session)):
    uploads = [UploadedFile(filename=f.filename or "", data=f.file.read()) for f in files]
    return Publisher(repo, blobs).publish(
        user["sub"], user.get("github_id", ""),
        slug=slug.strip(),
        display_name=displayName.strip(),
        version=version.strip() or "1.0.0",
        tags=parse_tags(tags),
        changelog=changelog.strip(),
        files=uploads,
    )


@router.get("/check-slug", response_model=schemas.SlugCheck)
def check_slug(slug: str = Query(""),
               repo: repos.PackageRepo = Depends(deps.get_repo),
               user: Dict[str, Any] = Depends(deps.require_session)):
    return schemas.SlugCheck(exists=maintenance.slug_exists(repo, user["sub"], slug))


@router.delete("/packages/{namespace}/{name:path}")
def delete_package(namespace: str, name: str,
                   repo: repos.PackageRepo = Depends(deps.get_repo),
                   blobs: storage.BlobStore = Depends(deps.get_blob_store),
                   user: Dict[str, Any] = Depends(deps.require_session)):
    maintenance.delete_package(repo, blobs, user["sub"], namespace, name)
    return {"ok": True}
