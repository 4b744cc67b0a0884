"""Pytest configuration and fixtures."""

import pytest
import httpx
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

from config import Config
from shortener.geolocation import IPGeolocator
from shortener.service import URLShortenerService
from shortener.shortcode import ShortCodeGenerator
from shortener.store.memory import InMemoryShortcodeRegistry
from shortener.common.logging_config import setup_logging
from web_app import create_app

# Canned answers of the fake geolocation service, keyed by IP
GEO_RESPONSES = {
    "203.0.113.7": {"city": "Berlin", "country_name": "Germany"},
    "203.0.113.8": {"city": None, "country_name": "Japan"},
}
GEO_SERVER_ERROR_IP = "198.51.100.1"
GEO_TIMEOUT_IP = "192.0.2.99"
GEO_BAD_JSON_IP = "192.0.2.100"


class FakeClock:
    """Manually advanced clock for deterministic expiry tests."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


def geo_handler(request: httpx.Request) -> httpx.Response:
    """Fake ipapi.co: /<ip>/json/."""
    ip = request.url.path.strip("/").split("/")[0]
    if ip == GEO_SERVER_ERROR_IP:
        return httpx.Response(500, text="upstream error")
    if ip == GEO_TIMEOUT_IP:
        raise httpx.ConnectTimeout("timed out", request=request)
    if ip == GEO_BAD_JSON_IP:
        return httpx.Response(200, text="<html>not json</html>")
    if ip in GEO_RESPONSES:
        return httpx.Response(200, json=GEO_RESPONSES[ip])
    return httpx.Response(200, json={"ip": ip, "error": True, "reason": "Reserved IP Address"})


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def clock():
    """Create a controllable clock."""
    return FakeClock()


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=6)


@pytest.fixture
def registry(short_code_generator, clock, logger) -> InMemoryShortcodeRegistry:
    """Create an empty registry driven by the fake clock."""
    return InMemoryShortcodeRegistry(
        short_code_generator=short_code_generator,
        clock=clock,
        logger=logger,
    )


@pytest.fixture
async def geo_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client whose requests are answered by the fake geolocation service."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(geo_handler)) as client:
        yield client


@pytest.fixture
def geolocator(geo_client, logger) -> IPGeolocator:
    """Create geolocator backed by the fake geolocation service."""
    return IPGeolocator(
        url_template="http://geo.test/{ip}/json/",
        client=geo_client,
        logger=logger,
    )


@pytest.fixture
def service(registry, geolocator, logger) -> URLShortenerService:
    """Create service instance."""
    return URLShortenerService(
        registry=registry,
        geolocator=geolocator,
        logger=logger,
    )


@pytest.fixture
def config() -> Config:
    """Create test configuration."""
    return Config(base_url="http://testserver", geolocation_enabled=False, trust_forwarded_for=True)


@pytest.fixture
def app(registry, service, config):
    """Create test FastAPI app."""
    return create_app(
        registry_instance=registry,
        service_instance=service,
        config=config,
    )


@pytest.fixture
async def client(app) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Create test client."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
