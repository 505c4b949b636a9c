"""
Redis implementation of the key-value backend.

Provides the scalar/hash/set primitives the graph layout needs with:
- A shared connection pool (decoded str responses)
- Optional key namespace so several graphs can share one database
- Uniform error translation: every redis-py failure surfaces as
  BackendUnavailableError, chained to the original exception

No retries are attempted here. A failed call aborts whatever composite
graph operation issued it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from redis.asyncio import ConnectionPool, Redis
from redis.exceptions import RedisError

from ..errors import BackendUnavailableError

logger = logging.getLogger(__name__)


class RedisBackend:
    """
    Redis-based key-value backend for the graph.

    Either builds its own connection pool from ``url`` on ``initialize()``
    or wraps a pre-built ``client`` (e.g. a fakeredis instance in tests).
    """

    def __init__(
        self,
        url: str = "redis://localhost:6379",
        db: int = 0,
        password: str | None = None,
        max_connections: int = 16,
        socket_timeout: float | None = None,
        key_prefix: str = "",
        client: Redis | None = None,
    ):
        """
        Initialize Redis backend.

        Args:
            url: Redis connection URL
            db: Database index
            password: Optional password (overridden by one embedded in url)
            max_connections: Maximum Redis connections in pool
            socket_timeout: Per-command socket timeout, None for the client default
            key_prefix: Prefix for all stored keys
            client: Pre-built Redis client to use instead of creating a pool
        """
        self.url = url
        self.db = db
        self.password = password
        self.max_connections = max_connections
        self.socket_timeout = socket_timeout
        self.key_prefix = key_prefix

        self._pool: ConnectionPool | None = None
        self._redis: Redis | None = client
        self._owns_client = client is None
        self._initialized = False

    async def initialize(self) -> None:
        """Initialize Redis connection pool and verify connectivity."""
        if self._initialized:
            return

        if self._owns_client:
            options = {
                "db": self.db,
                "max_connections": self.max_connections,
                "socket_timeout": self.socket_timeout,
                "decode_responses": True,  # Auto-decode bytes to str
            }
            if self.password:
                options["password"] = self.password
            self._pool = ConnectionPool.from_url(self.url, **options)
            self._redis = Redis(connection_pool=self._pool)

        try:
            await self._redis.ping()
            self._initialized = True
            logger.info(f"RedisBackend initialized: {self.url} (db={self.db}, prefix={self.key_prefix!r})")
        except (RedisError, OSError) as e:
            logger.error(f"RedisBackend initialization failed: {e}")
            if self._owns_client:
                await self._release()
            raise BackendUnavailableError(f"Cannot connect to Redis at {self.url}: {e}") from e

    async def close(self) -> None:
        """Close Redis connection pool."""
        if self._owns_client:
            await self._release()
        self._initialized = False

    async def _release(self) -> None:
        if self._redis:
            await self._redis.aclose()
            self._redis = None

        if self._pool:
            await self._pool.aclose()
            self._pool = None

    @property
    def redis(self) -> Redis:
        if not self._initialized or self._redis is None:
            raise BackendUnavailableError("RedisBackend not initialized. Call initialize() first.")
        return self._redis

    def _make_key(self, key: str) -> str:
        """Add namespace prefix to key."""
        return f"{self.key_prefix}{key}"

    @contextmanager
    def _translate_errors(self, operation: str, key: str) -> Iterator[None]:
        try:
            yield
        except (RedisError, OSError) as e:
            raise BackendUnavailableError(f"Redis {operation} failed for key {key!r}: {e}") from e

    # ── Scalars ─────────────────────────────────────────────────────────

    async def exists(self, key: str) -> bool:
        with self._translate_errors("EXISTS", key):
            return await self.redis.exists(self._make_key(key)) == 1

    async def get(self, key: str) -> str | None:
        with self._translate_errors("GET", key):
            return await self.redis.get(self._make_key(key))

    async def set(self, key: str, value: str) -> None:
        with self._translate_errors("SET", key):
            await self.redis.set(self._make_key(key), value)

    async def delete(self, key: str) -> None:
        with self._translate_errors("DEL", key):
            await self.redis.delete(self._make_key(key))

    # ── Hashes ──────────────────────────────────────────────────────────

    async def hset(self, key: str, mapping: dict[str, str]) -> None:
        if not mapping:
            return
        with self._translate_errors("HSET", key):
            await self.redis.hset(self._make_key(key), mapping=mapping)

    async def hgetall(self, key: str) -> dict[str, str]:
        with self._translate_errors("HGETALL", key):
            return await self.redis.hgetall(self._make_key(key))

    async def hdel(self, key: str, *fields: str) -> None:
        if not fields:
            return
        with self._translate_errors("HDEL", key):
            await self.redis.hdel(self._make_key(key), *fields)

    # ── Sets ────────────────────────────────────────────────────────────

    async def sadd(self, key: str, *members: str) -> None:
        if not members:
            return
        with self._translate_errors("SADD", key):
            await self.redis.sadd(self._make_key(key), *members)

    async def smembers(self, key: str) -> set[str]:
        with self._translate_errors("SMEMBERS", key):
            return set(await self.redis.smembers(self._make_key(key)))

    async def srem(self, key: str, *members: str) -> None:
        if not members:
            return
        with self._translate_errors("SREM", key):
            await self.redis.srem(self._make_key(key), *members)
