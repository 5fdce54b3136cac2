"""
Pytest configuration and fixtures.
Provides a fake organization API, a test DI container and an ASGI test client.
"""

import os

os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from datetime import date
from typing import Callable

import pytest
from dependency_injector import providers
from httpx import ASGITransport, AsyncClient

from educard.deps.di_container import build_container, set_container
from educard.main import app

from fakes import TODAY, FakeHttpClient


@pytest.fixture
def fake_http() -> FakeHttpClient:
    return FakeHttpClient()


@pytest.fixture
def today() -> Callable[[], date]:
    return lambda: TODAY


@pytest.fixture
def container(fake_http: FakeHttpClient, today: Callable[[], date]):
    """Global container wired to the fake organization API."""
    test_container = build_container()
    test_container.http_client.override(providers.Object(fake_http))
    test_container.today.override(providers.Object(today))
    set_container(test_container)
    yield test_container
    set_container(None)


@pytest.fixture
async def test_client(container):
    """
    Create a test HTTP client.
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
