"""Key-value backends for the graph layer."""

from .base import KeyValueBackend
from .redis_backend import RedisBackend

__all__ = ["KeyValueBackend", "RedisBackend"]
