# zeromarket/domain/index.py
from loguru import logger

from ..core.errors import InvalidReference, PackageNotFound, StoreUnavailable, has_traversal
from .artifacts import ArtifactUrlResolver
from .catalog import FallbackCatalog
from .models import Found, SkillPackage, StoreError
from .repos import PackageRepo
from .schemas import RegistryPackageIndex, RegistryTool


class RegistryIndex:
    """
    Resolves ``namespace/name`` references for the agent CLI.

    The database is consulted first; a miss (and, when allowed, a database
    failure) falls through to the built-in catalog.
    """

    def __init__(self, repo: PackageRepo, catalog: FallbackCatalog,
                 resolver: ArtifactUrlResolver, fallback_on_store_error: bool = True):
        self.repo = repo
        self.catalog = catalog
        self.resolver = resolver
        self.fallback_on_store_error = fallback_on_store_error

    def lookup(self, namespace: str, name: str) -> RegistryPackageIndex:
        if has_traversal(namespace) or has_traversal(name):
            raise InvalidReference("invalid package reference")

        result = self.repo.find(namespace, name)
        if isinstance(result, Found):
            return self._from_store(result.package)
        if isinstance(result, StoreError):
            if not self.fallback_on_store_error:
                raise StoreUnavailable()
            logger.warning(f"Store unavailable for {namespace}/{name}, serving catalog data")

        pkg = self.catalog.get(namespace, name)
        if pkg is None:
            raise PackageNotFound(f"package not found: {namespace}/{name}")
        logger.debug(f"Serving {namespace}/{name} from fallback catalog")
        return self._from_catalog(pkg)

    def _from_store(self, pkg: SkillPackage) -> RegistryPackageIndex:
        return RegistryPackageIndex(
            name=pkg.name,
            version=pkg.version,
            description=pkg.description or "",
            tools=[
                RegistryTool(
                    name=t.name,
                    wasm_url=self.resolver.url_for(t.wasm_url),
                    manifest_url=self.resolver.manifest_url_for(t.manifest_url, t.name),
                )
                for t in pkg.tools
            ],
        )

    @staticmethod
    def _from_catalog(pkg: SkillPackage) -> RegistryPackageIndex:
        # catalog entries already carry absolute URLs
        return RegistryPackageIndex(
            name=pkg.name,
            version=pkg.version,
            description=pkg.description,
            tools=[
                RegistryTool(name=t.name, wasm_url=t.wasm_url, manifest_url=t.manifest_url)
                for t in pkg.tools
            ],
        )
