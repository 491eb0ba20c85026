"""
Storefront API: application entry point.

This is the **only** file that assembles the app.  All business logic
lives in the `services/`, `repositories/`, and `core/` packages.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.api.v1.api import api_router
from storefront.api.v1.endpoints import health
from storefront.core.config import Settings, get_settings
from storefront.core.exceptions import register_exception_handlers
from storefront.db.base import Base
from storefront.db.session import build_engine, build_session_factory

# Ensure all models are imported so metadata.create_all can see them
from storefront.models.customer import Customer  # noqa: F401

logger = logging.getLogger(__name__)


# ── Lifespan ────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = app.state.engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialised")

    logger.info("Storefront API v%s started", app.state.settings.VERSION)
    yield
    await engine.dispose()
    logger.info("Shutdown complete")


# ── App factory ─────────────────────────────────────────────────────
def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )

    application = FastAPI(
        title=settings.PROJECT_NAME,
        description="Marketing site customer authentication API",
        version=settings.VERSION,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    engine = build_engine(settings.DATABASE_URL)
    application.state.settings = settings
    application.state.engine = engine
    application.state.session_factory = build_session_factory(engine)

    # CORS (no configured origins means any origin)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS or ["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
    )

    # Global exception handlers (prevent stack-trace leakage)
    register_exception_handlers(application)

    application.include_router(health.router)
    application.include_router(api_router, prefix=settings.API_PREFIX)

    return application


app = create_app()
