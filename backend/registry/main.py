"""Property Registry API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map RegistryError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database and registry service initialized on startup via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Registry restored from the last snapshot on startup; schema managed by Alembic
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import registry.services.registry_service as service_module
from registry.api.error_handlers import register_error_handlers
from registry.api.routes import health, properties, rights
from registry.config import get_settings
from registry.infrastructure.database import init_db
from registry.infrastructure.observability import setup_logging
from registry.infrastructure.snapshot_repository import SqlSnapshotRepository
from registry.services.registry_service import RegistryService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    repository = SqlSnapshotRepository(manager, settings.registry_snapshot_name)
    service_module.registry_service = await RegistryService.bootstrap(
        repository, settings.registry_genesis_height,
    )
    logger.info("Property Registry API started")
    yield
    logger.info("Property Registry API shutting down")
    await manager.dispose()


app = FastAPI(
    title="Property Registry API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(properties.router)
app.include_router(rights.router)

register_error_handlers(app)
