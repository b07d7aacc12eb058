# zeromarket/domain/schemas.py
from pydantic import BaseModel
from typing import List


class RegistryTool(BaseModel):
    name: str
    wasm_url: str
    manifest_url: str


class RegistryPackageIndex(BaseModel):
    """Shape consumed by `zeroclaw skill install namespace/name`; do not add fields."""
    name: str
    version: str
    description: str
    tools: List[RegistryTool]


class ToolSummary(BaseModel):
    name: str
    description: str
    wasm_url: str
    manifest_url: str


class PackageSummary(BaseModel):
    namespace: str
    name: str
    version: str
    description: str
    tags: List[str] = []
    author: str
    downloads: int
    verified: bool
    published_at: str
    tools: List[ToolSummary]


class PackagePage(BaseModel):
    total: int
    items: List[PackageSummary]


class SessionRequest(BaseModel):
    github_token: str


class SessionResult(BaseModel):
    token: str
    username: str


class SlugCheck(BaseModel):
    exists: bool


class PublishResult(BaseModel):
    ok: bool
    url: str
