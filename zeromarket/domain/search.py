# zeromarket/domain/search.py
from typing import List

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from .artifacts import ArtifactUrlResolver
from .catalog import FallbackCatalog, matches_query
from .models import SkillPackage
from .repos import PackageRepo
from .schemas import PackagePage, PackageSummary, ToolSummary


def _summary(pkg: SkillPackage, resolver: ArtifactUrlResolver | None) -> PackageSummary:
    return PackageSummary(
        namespace=pkg.namespace,
        name=pkg.name,
        version=pkg.version,
        description=pkg.description,
        tags=list(pkg.tags),
        author=pkg.author,
        downloads=pkg.downloads,
        verified=pkg.verified,
        published_at=pkg.published_at,
        tools=[
            ToolSummary(
                name=t.name,
                description=t.description,
                wasm_url=resolver.url_for(t.wasm_url) if resolver else t.wasm_url,
                manifest_url=(
                    resolver.manifest_url_for(t.manifest_url, t.name) if resolver else t.manifest_url
                ),
            )
            for t in pkg.tools
        ],
    )


def search_packages(repo: PackageRepo, catalog: FallbackCatalog,
                    resolver: ArtifactUrlResolver, query: str = "") -> PackagePage:
    """Catalog packages first, then stored ones; a store failure leaves the catalog only."""
    query = (query or "").strip()
    items: List[PackageSummary] = [_summary(p, None) for p in catalog.search(query)]
    try:
        stored = repo.list_all()
    except SQLAlchemyError as e:
        logger.warning(f"Package search could not read the store: {e}")
        stored = []
    items.extend(
        _summary(p, resolver) for p in stored if not query or matches_query(p, query)
    )
    return PackagePage(total=len(items), items=items)
