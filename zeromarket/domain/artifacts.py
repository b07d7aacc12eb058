# zeromarket/domain/artifacts.py
from dataclasses import dataclass

MANIFEST_FILENAME = "manifest.json"


def normalize_manifest_key(manifest_key: str, tool_name: str) -> str:
    """
    Rewrite legacy ``<dir>/<tool>.manifest.json`` keys to ``<dir>/manifest.json``.

    Older uploads recorded a per-tool manifest filename while the object was
    stored as ``manifest.json``. Keys that do not carry the broken suffix come
    back untouched, so applying this twice is the same as applying it once.
    """
    broken_suffix = f"/{tool_name}.manifest.json"
    if manifest_key.endswith(broken_suffix):
        return manifest_key[: manifest_key.rindex("/")] + "/" + MANIFEST_FILENAME
    return manifest_key


@dataclass(frozen=True)
class ArtifactUrlResolver:
    """Maps object-storage keys onto the public blob base address."""

    base_url: str

    def url_for(self, key: str) -> str:
        return f"{self.base_url.rstrip('/')}/{key.lstrip('/')}"

    def manifest_url_for(self, key: str, tool_name: str) -> str:
        return self.url_for(normalize_manifest_key(key, tool_name))
