# zeromarket/domain/db_models.py
from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, Boolean, Text, JSON, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def _utcnow():
    return datetime.now(timezone.utc)


class UserModel(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True)
    github_id = Column(String, unique=True, nullable=False)
    username = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=True)
    avatar = Column(String, nullable=True)
    email = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow)

    packages = relationship("PackageModel", back_populates="author")


class PackageModel(Base):
    __tablename__ = "packages"
    __table_args__ = (
        UniqueConstraint("namespace", "slug", name="packages_namespace_slug_idx"),
    )

    id = Column(String, primary_key=True)
    namespace = Column(String, nullable=False)
    slug = Column(String, nullable=False)
    display_name = Column(String, nullable=False)
    description = Column(Text, nullable=True, default="")
    version = Column(String, nullable=False)
    tags = Column(JSON, nullable=False, default=list)
    changelog = Column(Text, nullable=True, default="")
    readme = Column(Text, nullable=True, default="")
    downloads = Column(Integer, nullable=False, default=0)
    verified = Column(Boolean, nullable=False, default=False)
    author_id = Column(String, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow)

    author = relationship("UserModel", back_populates="packages")
    tools = relationship(
        "ToolModel",
        back_populates="package",
        order_by="ToolModel.position",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def to_domain(self, tools=None):
        """Convert database model to domain SkillPackage.

        Tool rows default to the ``tools`` relationship; callers that already
        loaded them pass the list to avoid a second lazy load.
        """
        from .models import SkillPackage
        return SkillPackage(
            namespace=self.namespace,
            name=self.slug,
            version=self.version,
            description=self.description or "",
            tags=list(self.tags or []),
            author=self.namespace,
            downloads=self.downloads or 0,
            verified=bool(self.verified),
            published_at=self.created_at.date().isoformat() if self.created_at else "",
            readme=self.readme or "",
            tools=[t.to_domain() for t in (self.tools if tools is None else tools)],
        )


class ToolModel(Base):
    __tablename__ = "tools"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True, default="")
    wasm_url = Column(String, nullable=False)
    manifest_url = Column(String, nullable=False)
    position = Column(Integer, nullable=False, default=0)
    package_id = Column(String, ForeignKey("packages.id", ondelete="CASCADE"), nullable=True)

    package = relationship("PackageModel", back_populates="tools")

    def to_domain(self):
        from .models import ToolEntry
        return ToolEntry(
            name=self.name,
            description=self.description or "",
            wasm_url=self.wasm_url,
            manifest_url=self.manifest_url,
        )
