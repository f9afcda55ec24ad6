"""Shared test fixtures for postline tests.

Provides:
- Isolated settings (no POSTLINE_* variables or .env leaking in)
- A fake httpx response and an AsyncClient mock wired to return it
"""

import logging
from datetime import timedelta
from unittest.mock import AsyncMock, Mock

import httpx
import pytest
import structlog

from postline.core.config import PostlineSettings, get_settings


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Run every test with default settings from a clean environment."""
    monkeypatch.chdir(tmp_path)
    for name in ("TIMEOUT_MS", "FOLLOW_REDIRECTS", "VERIFY_SSL", "DEFAULT_SCHEME", "LOG_LEVEL", "LOG_JSON_OUTPUT"):
        monkeypatch.delenv(f"POSTLINE_{name}", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> PostlineSettings:
    return PostlineSettings()


@pytest.fixture
def fake_response() -> Mock:
    """Response double shaped like ``httpx.Response``."""
    response = Mock()
    response.status_code = 200
    response.reason_phrase = "OK"
    response.http_version = "HTTP/1.1"
    response.headers = httpx.Headers([("content-type", "application/json"), ("x-trace", "abc")])
    response.text = '{"hello": "world"}'
    response.elapsed = timedelta(milliseconds=42)
    return response


@pytest.fixture
def mock_async_client(fake_response) -> AsyncMock:
    """AsyncClient double usable as an async context manager."""
    client = AsyncMock()
    client.request.return_value = fake_response
    client.__aenter__.return_value = client
    client.__aexit__.return_value = None
    return client


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo handlers installed by ``configure_logging`` so later tests don't write to closed streams."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        if handler not in handlers:
            root_logger.removeHandler(handler)
    root_logger.setLevel(level)
    structlog.reset_defaults()
