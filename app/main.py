"""Storefront Catalog API — FastAPI application factory."""


import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from app.core.config import settings
from app.core.exceptions import register_exception_handlers
from app.db.base import build_engine, build_session_factory
from app.middleware.request_log import RequestLogMiddleware
from app.schemas.common import HealthResponse

# v1 routers
from app.routers.v1.categories import router as categories_v1_router
from app.routers.v1.products import router as products_v1_router
from app.routers.v1.stores import router as stores_v1_router

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    """Set up structured logging for the application."""
    level = logging.DEBUG if settings.app_env == "development" else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    # Quiet noisy libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


def create_app(engine: AsyncEngine | None = None) -> FastAPI:
    """Build the app. The app owns ``engine`` (built from settings when omitted)."""
    _configure_logging()

    if engine is None:
        engine = build_engine(settings.database_url, echo=settings.app_env == "development")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await app.state.engine.dispose()

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        docs_url="/docs" if settings.app_env == "development" else None,
        redoc_url="/redoc" if settings.app_env == "development" else None,
        lifespan=lifespan,
    )
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # --- Request logging ---
    app.add_middleware(RequestLogMiddleware)

    # --- Global exception handlers ---
    register_exception_handlers(app)

    # --- v1 API routes (/api/v1/*) ---
    app.include_router(products_v1_router, prefix="/api/v1")
    app.include_router(stores_v1_router, prefix="/api/v1")
    app.include_router(categories_v1_router, prefix="/api/v1")

    # --- Health check ---
    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health():
        try:
            async with app.state.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            logger.warning("Health check: database unavailable (%s)", exc.__class__.__name__)
            return HealthResponse(
                status="degraded", app=settings.app_name, env=settings.app_env,
                database="unavailable",
            )
        return HealthResponse(app=settings.app_name, env=settings.app_env)

    return app


app = create_app()
