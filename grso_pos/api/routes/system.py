"""System-level routes such as health checks."""

from __future__ import annotations

import logging

from fastapi import APIRouter
from redis.exceptions import RedisError

from grso_pos.config import settings
from grso_pos.services.storage.persistence import get_redis_client

router = APIRouter(tags=["system"])
logger = logging.getLogger(__name__)


@router.get("/")
async def read_root() -> dict[str, str]:
    """Hello World endpoint used by smoke tests."""

    return {"message": "GRSO POS"}


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint with storage connectivity check."""

    if settings.uses_memory_storage:
        storage_status = "memory"
    else:
        try:
            await get_redis_client().ping()
            storage_status = "connected"
        except RedisError:
            logger.warning("Redis ping failed during health check")
            storage_status = "disconnected"

    return {
        "status": "healthy",
        "storage": storage_status,
        "environment": settings.ENVIRONMENT,
    }
