"""FastAPI application factory and bootstrap helpers."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from grso_pos.api.routes import include_api_routes
from grso_pos.config import settings
from grso_pos.errors import PersistenceError
from grso_pos.services.catalog_store import load_catalog_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Rehydrate the catalog from durable storage on startup."""
    try:
        await load_catalog_store()
    except PersistenceError:
        # Requests retry the load; the service still starts to report health
        logger.exception("Failed loading catalog state on startup")

    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="GRSO POS",
        description="Point-of-sale and inventory management service",
        version="1.0.0",
        lifespan=lifespan,
    )

    _configure_cors(app)
    include_api_routes(app)

    return app


def _configure_cors(app: FastAPI) -> None:
    """Allow broad access in non-production environments."""

    if settings.is_production:
        return

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
