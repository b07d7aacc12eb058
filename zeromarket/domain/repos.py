# zeromarket/domain/repos.py
import time
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Union

from loguru import logger
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from ..core.database import Database
from .db_models import PackageModel, ToolModel, UserModel
from .models import Found, NotFound, SkillPackage, StoreError, ToolEntry

LookupResult = Union[Found, NotFound, StoreError]


class PackageRepo:
    """Reads and writes packages and their tools by (namespace, slug)."""

    def __init__(self, db: Database):
        self.db = db

    def find(self, namespace: str, slug: str) -> LookupResult:
        try:
            with self.db.session() as s:
                pkg = s.execute(
                    select(PackageModel).where(
                        PackageModel.namespace == namespace,
                        PackageModel.slug == slug,
                    )
                ).scalar_one_or_none()
                if pkg is None:
                    return NotFound()
                tools = s.execute(
                    select(ToolModel)
                    .where(ToolModel.package_id == pkg.id)
                    .order_by(ToolModel.position)
                ).scalars().all()
                return Found(pkg.to_domain(tools))
        except SQLAlchemyError as e:
            logger.warning(f"Package lookup for {namespace}/{slug} failed: {e}")
            return StoreError(reason=str(e))

    def exists(self, namespace: str, slug: str) -> bool:
        with self.db.session() as s:
            pkg_id = s.execute(
                select(PackageModel.id).where(
                    PackageModel.namespace == namespace,
                    PackageModel.slug == slug,
                )
            ).scalar_one_or_none()
            return pkg_id is not None

    def list_all(self) -> List[SkillPackage]:
        with self.db.session() as s:
            rows = s.execute(select(PackageModel).order_by(PackageModel.created_at)).scalars().all()
            return [p.to_domain() for p in rows]

    def publish(self, namespace: str, slug: str, *, display_name: str, version: str,
                tags: List[str], changelog: str, readme: str, author_id: str,
                tools: Sequence[ToolEntry]) -> str:
        """Insert or update the package row, then replace its tools. Returns the package id."""
        now = datetime.now(timezone.utc)
        with self.db.session() as s:
            pkg = s.execute(
                select(PackageModel).where(
                    PackageModel.namespace == namespace,
                    PackageModel.slug == slug,
                )
            ).scalar_one_or_none()
            if pkg is not None:
                pkg.display_name = display_name
                pkg.version = version
                pkg.tags = list(tags)
                pkg.changelog = changelog
                pkg.readme = readme
                pkg.updated_at = now
            else:
                # sign-in tolerates a failed account write, so the author row may be missing
                author = s.get(UserModel, author_id)
                pkg = PackageModel(
                    id=f"pkg_{namespace}_{slug}_{int(time.time() * 1000)}",
                    namespace=namespace,
                    slug=slug,
                    display_name=display_name,
                    description=tools[0].description if tools else "",
                    version=version,
                    tags=list(tags),
                    changelog=changelog,
                    readme=readme,
                    downloads=0,
                    verified=False,
                    author_id=author.id if author is not None else None,
                    created_at=now,
                    updated_at=now,
                )
                s.add(pkg)
                s.flush()

            # tools are replaced wholesale on every publish
            s.execute(delete(ToolModel).where(ToolModel.package_id == pkg.id))
            for i, t in enumerate(tools):
                s.add(ToolModel(
                    id=f"tool_{pkg.id}_{i}",
                    name=t.name,
                    description=t.description,
                    wasm_url=t.wasm_url,
                    manifest_url=t.manifest_url,
                    position=i,
                    package_id=pkg.id,
                ))
            return pkg.id

    def delete(self, namespace: str, slug: str) -> bool:
        with self.db.session() as s:
            pkg = s.execute(
                select(PackageModel).where(
                    PackageModel.namespace == namespace,
                    PackageModel.slug == slug,
                )
            ).scalar_one_or_none()
            if pkg is None:
                return False
            s.delete(pkg)
            return True


class AccountRepo:
    def __init__(self, db: Database):
        self.db = db

    def upsert(self, github_id: str, username: str, name: Optional[str],
               avatar: Optional[str], email: Optional[str]) -> str:
        """Create or refresh the account for an identity-provider id."""
        with self.db.session() as s:
            user = s.execute(
                select(UserModel).where(UserModel.github_id == github_id)
            ).scalar_one_or_none()
            if user is None:
                user = UserModel(id=f"u_{github_id}", github_id=github_id)
                s.add(user)
            user.username = username
            user.name = name
            user.avatar = avatar
            user.email = email
            return user.id
