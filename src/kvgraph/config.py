"""
Configuration for the key-value graph layer.

All settings are loaded from environment variables via pydantic-settings:

    KVGRAPH_REDIS_URL              Redis connection URL (default redis://localhost:6379)
    KVGRAPH_REDIS_DB               Database index (default 0)
    KVGRAPH_REDIS_PASSWORD         Password, kept as SecretStr
    KVGRAPH_REDIS_MAX_CONNECTIONS  Connection pool size (default 16)
    KVGRAPH_REDIS_SOCKET_TIMEOUT   Per-command socket timeout in seconds (default: none)
    KVGRAPH_REDIS_KEY_PREFIX       Namespace prepended to every stored key (default empty)
"""

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RedisSettings(BaseSettings):
    """Connection settings for the Redis backend."""

    model_config = SettingsConfigDict(env_prefix="KVGRAPH_REDIS_", extra="ignore")

    url: str = Field(default="redis://localhost:6379", description="Redis connection URL")
    db: int = Field(default=0, ge=0, description="Redis database index")
    password: SecretStr | None = Field(default=None, description="Redis password")
    max_connections: int = Field(default=16, ge=1, le=1024, description="Connection pool size")
    socket_timeout: float | None = Field(default=None, gt=0, description="Socket timeout in seconds")
    key_prefix: str = Field(default="", description="Namespace prepended to all graph keys")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.startswith(("redis://", "rediss://", "unix://")):
            raise ValueError(f"Unsupported Redis URL scheme: {v!r}")
        return v


class Settings(BaseSettings):
    """Top-level settings for kvgraph."""

    model_config = SettingsConfigDict(env_prefix="KVGRAPH_", extra="ignore")

    redis: RedisSettings = Field(default_factory=RedisSettings)


settings = Settings()
