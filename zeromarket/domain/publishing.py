# zeromarket/domain/publishing.py
"""
Upload handling for skill packages.

A package upload is a flat set of files: one or more ``.wasm`` tool
binaries, a ``SKILL.md`` readme, and optional JSON manifests. Every file is
written to ``wasm/<namespace>/<slug>/<version>/`` and the package's tool
list is rebuilt from the ``.wasm`` filenames.
"""
import json
import posixpath
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from loguru import logger

from ..core.errors import ValidationFailed, has_traversal
from .artifacts import MANIFEST_FILENAME
from .models import ToolEntry
from .repos import PackageRepo
from .storage import BlobStore

_CONTENT_TYPES = {
    ".wasm": "application/wasm",
    ".json": "application/json",
    ".md": "text/markdown",
}


@dataclass(frozen=True)
class UploadedFile:
    filename: str
    data: bytes

    @property
    def basename(self) -> str:
        return posixpath.basename(self.filename.replace("\\", "/"))


@dataclass(frozen=True)
class ManifestEntry:
    tool_name: str
    name: Optional[str]
    description: Optional[str]


def content_type_for(filename: str) -> str:
    ext = posixpath.splitext(filename)[1].lower()
    return _CONTENT_TYPES.get(ext, "application/octet-stream")


def parse_tags(raw: Optional[str]) -> List[str]:
    """Decode the JSON tag list sent by the form; anything malformed means no tags."""
    try:
        tags = json.loads(raw or "[]")
    except ValueError:
        return []
    if not isinstance(tags, list):
        return []
    return [str(t) for t in tags]


def _is_skill_md(filename: str) -> bool:
    return filename == "SKILL.md" or filename.endswith("/SKILL.md")


def _is_manifest(basename: str) -> bool:
    return basename == MANIFEST_FILENAME or basename.endswith(".manifest.json")


def validate_upload(slug: str, display_name: str, files: Sequence[UploadedFile]) -> None:
    errors: List[str] = []
    if not slug:
        errors.append("Slug is required.")
    if not display_name:
        errors.append("Display name is required.")
    if not files:
        errors.append("Add at least one file.")
    else:
        if not any(f.filename.endswith(".wasm") for f in files):
            errors.append("At least one .wasm file is required.")
        if not any(_is_skill_md(f.filename) for f in files):
            errors.append("SKILL.md is required.")
    if errors:
        raise ValidationFailed(" ".join(errors))


def read_manifest(file: UploadedFile, slug: str) -> Optional[ManifestEntry]:
    """Parse a manifest upload; malformed JSON is skipped, not fatal."""
    try:
        manifest = json.loads(file.data.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        logger.warning(f"Skipping malformed manifest {file.basename}: {e}")
        return None
    if not isinstance(manifest, dict):
        logger.warning(f"Skipping manifest {file.basename}: not a JSON object")
        return None

    name = manifest.get("name")
    if name is not None:
        tool_name = str(name)
    elif file.basename == MANIFEST_FILENAME:
        tool_name = slug
    else:
        tool_name = file.basename[: -len(".manifest.json")]
    description = manifest.get("description")
    return ManifestEntry(
        tool_name=tool_name,
        name=str(name) if name is not None else None,
        description=str(description) if description is not None else None,
    )


def derive_tools(base_key: str, files: Sequence[UploadedFile],
                 manifests: Sequence[ManifestEntry]) -> List[ToolEntry]:
    """One tool per .wasm file, in upload order, described by its matching manifest."""
    tools: List[ToolEntry] = []
    for f in files:
        if not f.basename.endswith(".wasm"):
            continue
        tool_name = f.basename[: -len(".wasm")]
        matched = next(
            (m for m in manifests if m.tool_name == tool_name or m.name == tool_name),
            None,
        )
        tools.append(ToolEntry(
            name=tool_name,
            description=(matched.description if matched and matched.description else ""),
            wasm_url=f"{base_key}/{f.basename}",
            manifest_url=f"{base_key}/{MANIFEST_FILENAME}",
        ))
    return tools


class Publisher:
    def __init__(self, repo: PackageRepo, blobs: BlobStore):
        self.repo = repo
        self.blobs = blobs

    def publish(self, namespace: str, github_id: str, *, slug: str, display_name: str,
                version: str, tags: List[str], changelog: str,
                files: Sequence[UploadedFile]) -> Dict[str, object]:
        validate_upload(slug, display_name, files)
        if has_traversal(slug) or ".." in namespace:
            raise ValidationFailed("Invalid slug or namespace")
        if has_traversal(version) or "\\" in version:
            raise ValidationFailed("Invalid version")

        base_key = f"wasm/{namespace}/{slug}/{version}"
        manifests: List[ManifestEntry] = []
        for f in files:
            self.blobs.put(f"{base_key}/{f.basename}", f.data, content_type_for(f.basename))
            if _is_manifest(f.basename):
                entry = read_manifest(f, slug)
                if entry is not None:
                    manifests.append(entry)

        tools = derive_tools(base_key, files, manifests)
        skill_md = next(f for f in files if _is_skill_md(f.filename))
        readme = skill_md.data.decode("utf-8", errors="replace")

        package_id = self.repo.publish(
            namespace, slug,
            display_name=display_name,
            version=version,
            tags=tags,
            changelog=changelog,
            readme=readme,
            author_id=f"u_{github_id}",
            tools=tools,
        )
        logger.info(f"Published {namespace}/{slug}@{version} ({package_id}) with {len(tools)} tool(s)")
        return {"ok": True, "url": f"/packages/{namespace}/{slug}"}
