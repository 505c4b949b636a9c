"""
Unit tests for Redis configuration.

Validates defaults, env var loading, and SecretStr handling.
"""

import os
from unittest.mock import patch

import pytest


class TestRedisSettings:
    """Test RedisSettings pydantic model."""

    def test_defaults(self):
        from kvgraph.config import RedisSettings

        cfg = RedisSettings()
        assert cfg.url == "redis://localhost:6379"
        assert cfg.db == 0
        assert cfg.password is None
        assert cfg.max_connections == 16
        assert cfg.socket_timeout is None
        assert cfg.key_prefix == ""

    def test_env_override(self):
        from kvgraph.config import RedisSettings

        env = {
            "KVGRAPH_REDIS_URL": "redis://graphhost:6380",
            "KVGRAPH_REDIS_DB": "3",
            "KVGRAPH_REDIS_PASSWORD": "s3cret",
            "KVGRAPH_REDIS_MAX_CONNECTIONS": "32",
            "KVGRAPH_REDIS_SOCKET_TIMEOUT": "2.5",
            "KVGRAPH_REDIS_KEY_PREFIX": "tenant1:",
        }

        with patch.dict(os.environ, env, clear=False):
            cfg = RedisSettings()

        assert cfg.url == "redis://graphhost:6380"
        assert cfg.db == 3
        assert cfg.password is not None
        assert cfg.password.get_secret_value() == "s3cret"
        assert cfg.max_connections == 32
        assert cfg.socket_timeout == 2.5
        assert cfg.key_prefix == "tenant1:"

    def test_password_is_secretstr(self):
        """Password must not appear in repr/str."""
        from kvgraph.config import RedisSettings

        with patch.dict(os.environ, {"KVGRAPH_REDIS_PASSWORD": "hunter2"}, clear=False):
            cfg = RedisSettings()

        assert "hunter2" not in repr(cfg)
        assert "hunter2" not in str(cfg.password)
        assert cfg.password.get_secret_value() == "hunter2"

    def test_db_validation(self):
        from pydantic import ValidationError

        from kvgraph.config import RedisSettings

        with pytest.raises(ValidationError):
            RedisSettings(db=-1)

    def test_max_connections_validation(self):
        from pydantic import ValidationError

        from kvgraph.config import RedisSettings

        with pytest.raises(ValidationError):
            RedisSettings(max_connections=0)

    def test_url_scheme_validation(self):
        from pydantic import ValidationError

        from kvgraph.config import RedisSettings

        with pytest.raises(ValidationError):
            RedisSettings(url="http://localhost:6379")

        assert RedisSettings(url="rediss://secure:6380").url == "rediss://secure:6380"


class TestSettings:
    def test_aggregates_redis_settings(self):
        from kvgraph.config import RedisSettings, Settings

        cfg = Settings()
        assert isinstance(cfg.redis, RedisSettings)
