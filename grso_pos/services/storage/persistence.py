"""Persistence port for the catalog state and its implementations."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any

import redis.asyncio as redis
from pydantic import ValidationError
from redis.exceptions import RedisError

from grso_pos.config import settings
from grso_pos.errors import PersistenceError
from grso_pos.models.catalog import CatalogState

logger = logging.getLogger(__name__)

_redis_client: redis.Redis | None = None


def get_redis_client() -> redis.Redis:
    """Return a singleton Redis client for the current process."""

    global _redis_client
    if _redis_client is None:
        _redis_client = redis.from_url(
            settings.REDIS_URL,
            encoding="utf-8",
            decode_responses=True,
        )
    return _redis_client


class StatePersistence(ABC):
    """Durable slot holding the whole catalog state."""

    def __init__(self, schema_version: int | None = None) -> None:
        if schema_version is None:
            schema_version = settings.STORAGE_SCHEMA_VERSION
        self.schema_version = schema_version

    @abstractmethod
    async def load(self) -> CatalogState | None:
        """Return the stored state, or None when nothing was saved yet."""

    @abstractmethod
    async def save(self, state: CatalogState) -> None:
        """Overwrite the slot with ``state``."""

    def _encode(self, state: CatalogState) -> str:
        envelope = {
            "state": state.model_dump(mode="json", by_alias=True),
            "version": self.schema_version,
        }
        return json.dumps(envelope, ensure_ascii=False)

    def _decode(self, raw: str | bytes) -> CatalogState:
        try:
            envelope: dict[str, Any] = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise PersistenceError(f"Stored state is not valid JSON: {exc}") from exc
        if not isinstance(envelope, dict):
            raise PersistenceError("Stored state is not a JSON object")

        version = envelope.get("version", 0)
        if not isinstance(version, int) or isinstance(version, bool):
            raise PersistenceError(f"Stored state has an invalid schema version: {version!r}")
        if version > self.schema_version:
            raise PersistenceError(
                f"Stored state uses schema version {version}, "
                f"this build understands up to {self.schema_version}"
            )

        try:
            return CatalogState.model_validate(envelope.get("state") or {})
        except ValidationError as exc:
            raise PersistenceError(f"Stored state is malformed: {exc}") from exc


class RedisStatePersistence(StatePersistence):
    """Keeps the state as a JSON envelope under a single Redis key."""

    def __init__(
        self,
        client: redis.Redis,
        key: str | None = None,
        schema_version: int | None = None,
    ) -> None:
        super().__init__(schema_version)
        self._client = client
        self._key = key or settings.STORAGE_KEY

    async def load(self) -> CatalogState | None:
        try:
            raw = await self._client.get(self._key)
        except RedisError as exc:
            raise PersistenceError(f"Failed reading {self._key}: {exc}") from exc
        if not raw:
            return None
        return self._decode(raw)

    async def save(self, state: CatalogState) -> None:
        try:
            await self._client.set(self._key, self._encode(state))
        except RedisError as exc:
            raise PersistenceError(f"Failed writing {self._key}: {exc}") from exc
        logger.debug("Persisted catalog state under %s", self._key)


class InMemoryStatePersistence(StatePersistence):
    """Process-local slot used in development and tests."""

    def __init__(self, schema_version: int | None = None) -> None:
        super().__init__(schema_version)
        self._raw: str | None = None

    async def load(self) -> CatalogState | None:
        if self._raw is None:
            return None
        return self._decode(self._raw)

    async def save(self, state: CatalogState) -> None:
        self._raw = self._encode(state)


def create_persistence() -> StatePersistence:
    """Build the persistence backend selected by ``STORAGE_BACKEND``."""

    if settings.uses_memory_storage:
        return InMemoryStatePersistence()
    return RedisStatePersistence(get_redis_client(), settings.STORAGE_KEY)
