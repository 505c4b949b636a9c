"""
Factory for creating and initializing the graph layer.

Creates a RedisBackend + GraphClient from RedisSettings config.
"""

import logging

from ..backend.redis_backend import RedisBackend
from ..config import RedisSettings, settings
from .client import GraphClient

logger = logging.getLogger(__name__)


async def create_graph(config: RedisSettings | None = None) -> GraphClient:
    """
    Create and initialize a Redis-backed graph.

    Args:
        config: Redis settings; defaults to the environment-loaded settings.

    Returns:
        Initialized GraphClient.

    Raises:
        BackendUnavailableError: If Redis cannot be reached.
    """
    config = config or settings.redis

    password = config.password.get_secret_value() if config.password else None

    backend = RedisBackend(
        url=config.url,
        db=config.db,
        password=password,
        max_connections=config.max_connections,
        socket_timeout=config.socket_timeout,
        key_prefix=config.key_prefix,
    )

    client = GraphClient(backend)
    await client.initialize()

    logger.info(f"Graph layer initialized: {config.url}/{config.db}")
    return client
