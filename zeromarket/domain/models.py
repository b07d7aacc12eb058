# zeromarket/domain/models.py
from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class ToolEntry:
    name: str
    description: str
    wasm_url: str
    manifest_url: str


@dataclass(frozen=True)
class SkillPackage:
    namespace: str
    name: str
    version: str
    description: str
    tags: List[str] = field(default_factory=list)
    author: str = ""
    downloads: int = 0
    verified: bool = False
    published_at: str = ""
    readme: str = ""
    tools: List[ToolEntry] = field(default_factory=list)


# ---- Repository lookup outcomes ----
@dataclass(frozen=True)
class Found:
    package: SkillPackage


@dataclass(frozen=True)
class NotFound:
    pass


@dataclass(frozen=True)
class StoreError:
    reason: str
