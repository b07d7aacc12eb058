# zeromarket/main.py
import re

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware

from .api import auth, health, packages
from .api.v1 import registry
from .core.config import Settings, get_settings
from .core.database import Database
from .core.errors import ApiError, StoreUnavailable, api_error_handler
from .core.logging import configure_logging
from .domain.catalog import FallbackCatalog
from .domain.storage import build_blob_store


class NormalizePathMiddleware(BaseHTTPMiddleware):
    """Collapse repeated slashes so //api/health maps to /api/health."""

    async def dispatch(self, request, call_next):
        scope = request.scope
        original_path = scope.get("path", "")
        normalized_path = re.sub(r"/{2,}", "/", original_path)
        if normalized_path != original_path:
            logger.debug(f"Normalizing path from {original_path} to {normalized_path}")
            scope["path"] = normalized_path
        return await call_next(request)


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    err = StoreUnavailable()
    return JSONResponse({"error": err.message}, status_code=err.status_code)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(title=settings.APP_NAME, version="1.0.0")
    app.state.settings = settings
    app.state.db = Database(settings.DB_URL)
    app.state.blobs = build_blob_store(settings)
    app.state.catalog = FallbackCatalog()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(NormalizePathMiddleware)
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)

    @app.on_event("startup")
    def startup_event():
        try:
            app.state.db.init_db()
        except SQLAlchemyError as e:
            # lookups still answer from the catalog while the store is down
            logger.error(f"Database initialisation failed: {e}")
        logger.info(f"{settings.APP_NAME} started (env={settings.ENV}, storage={settings.STORAGE_BACKEND})")

    @app.on_event("shutdown")
    def shutdown_event():
        app.state.db.dispose()

    app.include_router(registry.router, prefix="/api/v1/packages", tags=["registry"])
    app.include_router(packages.router, prefix="/api", tags=["packages"])
    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(health.router, prefix="/api/health", tags=["health"])

    if settings.STORAGE_BACKEND == "local":
        # PUBLIC_BLOB_BASE_URL points here in local development
        app.mount("/blobs", StaticFiles(directory=settings.BLOB_ROOT, check_dir=False), name="blobs")

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
