"""Tests for the geolocation client."""

import httpx
import pytest

from conftest import GEO_BAD_JSON_IP, GEO_SERVER_ERROR_IP, GEO_TIMEOUT_IP
from shortener.geolocation import IPGeolocator


@pytest.mark.asyncio
class TestIPGeolocator:
    """Test best-effort geolocation."""

    async def test_locate(self, geolocator):
        """City and country are joined."""
        assert await geolocator.locate("203.0.113.7") == "Berlin, Germany"

    async def test_locate_without_city(self, geolocator):
        """A missing city becomes Unknown."""
        assert await geolocator.locate("203.0.113.8") == "Unknown, Japan"

    async def test_locate_without_country(self, geolocator):
        """No country means no location."""
        assert await geolocator.locate("127.0.0.1") is None

    @pytest.mark.parametrize("ip", [GEO_SERVER_ERROR_IP, GEO_TIMEOUT_IP, GEO_BAD_JSON_IP])
    async def test_failures_yield_none(self, geolocator, ip):
        """Server errors, timeouts and bad bodies never raise."""
        assert await geolocator.locate(ip) is None

    async def test_missing_ip(self, geolocator):
        """No IP, no lookup."""
        assert await geolocator.locate(None) is None
        assert await geolocator.locate("") is None

    async def test_disabled_makes_no_requests(self, logger):
        """Disabled geolocation never calls out."""
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"city": "X", "country_name": "Y"})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            geolocator = IPGeolocator(client=client, enabled=False, logger=logger)
            assert await geolocator.locate("203.0.113.7") is None

        assert requests == []

    async def test_url_template(self, logger):
        """The IP is substituted into the configured URL."""
        seen = []

        def handler(request):
            seen.append(str(request.url))
            return httpx.Response(200, json={"city": "Paris", "country_name": "France"})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            geolocator = IPGeolocator(url_template="https://geo.test/lookup/{ip}", client=client, logger=logger)
            assert await geolocator.locate("203.0.113.9") == "Paris, France"

        assert seen == ["https://geo.test/lookup/203.0.113.9"]

    async def test_close_leaves_injected_client_open(self, geo_client, logger):
        """Injected clients are owned by the caller."""
        geolocator = IPGeolocator(client=geo_client, logger=logger)

        await geolocator.close()

        assert not geo_client.is_closed

    async def test_close_owned_client(self, logger):
        """A geolocator closes the client it created."""
        geolocator = IPGeolocator(logger=logger)

        await geolocator.close()

        assert geolocator.client.is_closed

    @pytest.mark.parametrize("ip", ["1.2.3.4\t5", "unknown", "203.0.113.7/../admin", "x" * 70000])
    async def test_malformed_ip_makes_no_request(self, logger, ip):
        """Anything that is not an IP address is skipped without raising."""
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"city": "X", "country_name": "Y"})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            geolocator = IPGeolocator(url_template="http://geo.test/{ip}/json/", client=client, logger=logger)
            assert await geolocator.locate(ip) is None

        assert requests == []

    async def test_locate_ipv6(self, logger):
        """IPv6 addresses are looked up too."""
        seen = []

        def handler(request):
            seen.append(request.url.path)
            return httpx.Response(200, json={"city": "Oslo", "country_name": "Norway"})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            geolocator = IPGeolocator(url_template="http://geo.test/{ip}/json/", client=client, logger=logger)
            assert await geolocator.locate("2001:db8::1") == "Oslo, Norway"

        assert seen == ["/2001:db8::1/json/"]
