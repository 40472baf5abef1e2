"""
Pytest configuration and shared fixtures for backend tests.

WHAT: Centralized test configuration with markers
WHY: Enable test organization, filtering, and shared test utilities
HOW: Define pytest markers, singleton resets, settings/key fixtures
"""

import os

# No log file during tests; must be set before lua_bridge is imported
os.environ.setdefault("LOG_FILE", "")

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from lua_bridge.core.config import settings
from lua_bridge.llm.backend_factory import build_backend_config, create_backend, reset_backend
from lua_bridge.llm.adapter import GenerationAdapter, reset_adapter
from lua_bridge.services.command_relay import reset_relay


API_KEY_ENV = "LUA_BRIDGE_TEST_API_KEY"
API_KEY = "test-key-1234"


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (isolated component tests)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (multiple components)"
    )


@pytest.fixture(autouse=True)
def reset_singletons():
    """
    Reset backend, adapter and relay singletons before and after each test.

    WHAT: Clear process-wide caches between tests
    WHY: Prevent test pollution (a queued command must not leak into the next test)
    HOW: Call the reset helpers around each test
    """
    reset_adapter()
    reset_backend()
    reset_relay()
    yield
    reset_adapter()
    reset_backend()
    reset_relay()


@pytest.fixture
def test_settings(monkeypatch):
    """
    Point the settings singleton at test-friendly values.

    WHAT: Provide consistent configuration
    WHY: Isolate tests from the developer's .env and environment
    HOW: monkeypatch attributes on the real Settings instance
    """
    monkeypatch.setattr(settings, "APP_NAME", "Test Bridge")
    monkeypatch.setattr(settings, "LLM_BACKEND", "openrouter")
    monkeypatch.setattr(settings, "LLM_API_KEY_ENV", API_KEY_ENV)
    monkeypatch.setattr(settings, "LLM_TIMEOUT", 5)
    monkeypatch.setattr(settings, "LLM_TEMPERATURE", None)
    monkeypatch.setattr(settings, "LLM_MAX_OUTPUT_TOKENS", None)
    monkeypatch.setattr(settings, "GEMINI_BASE_URL", "https://gemini.test/v1beta")
    monkeypatch.setattr(settings, "GEMINI_DEFAULT_MODEL", "gemini-2.5-flash")
    monkeypatch.setattr(settings, "OPENROUTER_BASE_URL", "https://openrouter.test/api/v1")
    monkeypatch.setattr(settings, "OPENROUTER_DEFAULT_MODEL", "google/gemini-2.5-flash")
    monkeypatch.setattr(settings, "OPENROUTER_REFERER", "")
    monkeypatch.setattr(settings, "RELAY_STORE", "memory")
    monkeypatch.setattr(settings, "RELAY_MIN_CODE_LENGTH", 5)
    return settings


@pytest.fixture
def api_key(monkeypatch):
    """Set the backend API key in the process environment."""
    monkeypatch.setenv(API_KEY_ENV, API_KEY)
    return API_KEY


@pytest.fixture
def no_api_key(monkeypatch):
    """Make sure the backend API key is absent."""
    monkeypatch.delenv(API_KEY_ENV, raising=False)


@pytest.fixture
def client(test_settings):
    """Create FastAPI test client."""
    from lua_bridge.main import app
    return TestClient(app)


@pytest_asyncio.fixture
async def make_backend(test_settings):
    """
    Build backends straight from settings, bypassing the singleton.

    WHAT: Factory fixture taking an LLM_BACKEND name
    WHY: Each backend owns an httpx.AsyncClient that must be closed
    HOW: Track every backend built and close it on teardown
    """
    created = []

    def _make(name: str):
        test_settings.LLM_BACKEND = name
        backend = create_backend(build_backend_config(test_settings))
        created.append(backend)
        return backend

    yield _make

    for backend in created:
        await backend.close()


@pytest.fixture
def make_adapter(make_backend):
    """Build a GenerationAdapter around a fresh backend."""
    return lambda name: GenerationAdapter(make_backend(name))
