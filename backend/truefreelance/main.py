"""
FastAPI application entrypoint.

Lifespan:
  • On startup: build the persistence adapter, create the local schema if
    configured, and load every project into the ProjectStore.
  • On shutdown: close the adapter (engine pool / HTTP client).

Routers:
  • /projects — CRUD with derived hourly rate
  • /monthly  — per-month totals and average rate
  • /health   — shallow liveness probe
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError

from truefreelance.adapters.base import PersistenceAdapter
from truefreelance.adapters.factory import build_adapter
from truefreelance.core.config import settings
from truefreelance.core.database import create_schema
from truefreelance.core.errors import StorageError
from truefreelance.routers.monthly import router as monthly_router
from truefreelance.routers.projects import router as projects_router
from truefreelance.services.project_store import ProjectStore

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(adapter: PersistenceAdapter | None = None) -> FastAPI:
    """
    Build the application.

    Args:
        adapter: Persistence adapter to use. Defaults to the one named by
                 STORAGE_BACKEND.
    """

    # ── Lifespan ────────────────────────────────────────────
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Startup / shutdown lifecycle."""
        logger.info("Starting %s [%s]", settings.APP_NAME, settings.ENVIRONMENT)
        store_adapter = adapter if adapter is not None else build_adapter(settings)

        # Startup — make sure the local table exists
        if adapter is None and settings.STORAGE_BACKEND == "local" and settings.DB_AUTO_CREATE:
            try:
                await create_schema()
                logger.info("Local schema ready ✓")
            except SQLAlchemyError:
                logger.exception("Could not create the local schema (non-fatal)")

        # Startup — load the collection (non-fatal: starts empty)
        store = ProjectStore(store_adapter)
        try:
            await store.load_all()
        except StorageError:
            logger.warning(
                "Could not load projects on startup. "
                "The app will start with an empty collection."
            )
        app.state.store = store

        yield  # ← application runs here

        # Shutdown — release connections
        await store_adapter.close()
        logger.info("Persistence adapter closed ✓")

    # ── App ─────────────────────────────────────────────────
    app = FastAPI(
        title=settings.APP_NAME,
        version="0.1.0",
        description="Track freelance projects and the hourly rate they really paid.",
        lifespan=lifespan,
    )

    # Mount routers
    app.include_router(projects_router, prefix="/projects")
    app.include_router(monthly_router, prefix="/monthly")

    # ── Health check ────────────────────────────────────────
    @app.get(
        "/health",
        tags=["System"],
        summary="Liveness probe",
    )
    async def health_check() -> dict[str, str]:
        """Shallow health check — confirms the process is alive."""
        return {"status": "healthy"}

    return app


app = create_app()
