"""Pytest fixtures for all tests."""

import io

import pytest
from httpx import AsyncClient, ASGITransport

from config import Config, GeneratorConfig
from internal.logging import LogLevel, StructuredLogger
from ui.app import create_app


@pytest.fixture
def log_stream():
    """Route structured logs into a buffer for the duration of a test."""
    stream = io.StringIO()
    StructuredLogger.configure(min_level=LogLevel.DEBUG, stream=stream)
    yield stream
    StructuredLogger.configure()


@pytest.fixture
def app_config():
    """Config with a small batch limit."""
    return Config(generator=GeneratorConfig(max_batch=5))


@pytest.fixture
async def app(app_config):
    """Create test FastAPI app."""
    return create_app(app_config)


@pytest.fixture
async def client(app):
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
