from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueBackend(Protocol):
    """Protocol for the key-value store the graph is persisted in.

    Implementations must provide scalar, hash and set primitives. Each call
    is expected to be atomic on its own; no multi-key transaction is assumed.

    Failures must be raised as ``BackendUnavailableError`` so callers see
    one error type regardless of the concrete store.
    """

    async def exists(self, key: str) -> bool:
        """Return True if ``key`` holds a value of any type."""
        ...

    async def get(self, key: str) -> str | None:
        """Return the scalar stored at ``key``, or None if absent."""
        ...

    async def set(self, key: str, value: str) -> None:
        """Store a scalar at ``key``, overwriting any previous value."""
        ...

    async def delete(self, key: str) -> None:
        """Remove ``key``. Removing a missing key is a no-op."""
        ...

    async def hset(self, key: str, mapping: dict[str, str]) -> None:
        """Set several fields of the hash at ``key``, leaving other fields untouched."""
        ...

    async def hgetall(self, key: str) -> dict[str, str]:
        """Return every field of the hash at ``key`` (empty dict if absent)."""
        ...

    async def hdel(self, key: str, *fields: str) -> None:
        """Remove fields from the hash at ``key``. Missing fields are ignored."""
        ...

    async def sadd(self, key: str, *members: str) -> None:
        """Add members to the set at ``key``."""
        ...

    async def smembers(self, key: str) -> set[str]:
        """Return the members of the set at ``key`` (empty set if absent)."""
        ...

    async def srem(self, key: str, *members: str) -> None:
        """Remove members from the set at ``key``. Missing members are ignored."""
        ...
