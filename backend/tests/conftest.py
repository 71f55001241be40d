"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from admin_service.core.cache import CacheConnectionError
from admin_service.core.config import Settings
from admin_service.main import create_app

SERVICE_ENV_VARS = [
    "NODE_ENV",
    "PORT",
    "HOST",
    "CORS_ALLOWED_ORIGINS",
    "REDIS_URL",
    "REDIS_PASSWORD",
    "LOG_LEVEL",
    "SHUTDOWN_TIMEOUT",
]


class FakeCache:
    """Stands in for the Redis cache manager and records lifecycle calls."""

    def __init__(self, fail_connect=False, fail_disconnect=False):
        self.fail_connect = fail_connect
        self.fail_disconnect = fail_disconnect
        self.connect_calls = 0
        self.disconnect_calls = 0
        self.is_connected = False

    async def connect(self):
        self.connect_calls += 1
        if self.fail_connect:
            raise CacheConnectionError("Could not connect to Redis: refused")
        self.is_connected = True

    async def disconnect(self):
        self.disconnect_calls += 1
        if self.fail_disconnect:
            raise ConnectionResetError("connection reset by peer")
        self.is_connected = False


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the host environment out of the settings under test."""
    for name in SERVICE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_settings():
    """Build settings without reading a .env file."""

    def _make(**overrides):
        return Settings(_env_file=None, **overrides)

    return _make


@pytest.fixture
def fake_cache():
    return FakeCache()


@pytest.fixture
def make_app(make_settings, fake_cache):
    """Create an isolated application instance."""

    def _make(cache=None, **overrides):
        return create_app(make_settings(**overrides), cache=cache or fake_cache)

    return _make


@pytest.fixture
def client(make_app):
    """Production-mode client with the lifespan running."""
    with TestClient(make_app(), raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def dev_client(make_app):
    """Development-mode client with the lifespan running."""
    app = make_app(node_env="development")
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
