"""Best-effort IP geolocation for click analytics."""

import ipaddress
import logging
from typing import Optional

import httpx


class IPGeolocator:
    """Resolve a client IP to a human-readable "city, country" string.

    Lookups are best-effort: any failure is logged and reported as an
    unknown location, never raised to the caller.
    """

    DEFAULT_URL_TEMPLATE = "https://ipapi.co/{ip}/json/"

    def __init__(
        self,
        url_template: str = DEFAULT_URL_TEMPLATE,
        timeout_seconds: float = 2.0,
        enabled: bool = True,
        client: Optional[httpx.AsyncClient] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the geolocator.

        Args:
            url_template: Lookup URL with an ``{ip}`` placeholder
            timeout_seconds: Total timeout for one lookup
            enabled: When False, no lookups are made
            client: Optional preconfigured HTTP client (owned by the caller)
            logger: Optional logger instance
        """
        self.url_template = url_template
        self.timeout_seconds = timeout_seconds
        self.enabled = enabled
        self.logger = logger or logging.getLogger(__name__)
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=timeout_seconds)

    async def locate(self, ip: Optional[str]) -> Optional[str]:
        """Look up the location of an IP.

        Args:
            ip: Client IP address

        Returns:
            "City, Country" (city falls back to "Unknown"), or None if unresolved
        """
        if not self.enabled or not ip:
            return None

        # Forwarded addresses are client supplied
        try:
            ip = str(ipaddress.ip_address(ip.strip()))
        except ValueError:
            self.logger.warning(f"Not an IP address, skipping geolocation: {ip[:64]!r}")
            return None

        url = self.url_template.format(ip=ip)
        try:
            response = await self.client.get(url, timeout=self.timeout_seconds)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            self.logger.warning(f"Geolocation failed for {ip}: {e}")
            return None
        except ValueError as e:
            self.logger.warning(f"Geolocation returned invalid JSON for {ip}: {e}")
            return None

        if not isinstance(data, dict) or not data.get("country_name"):
            self.logger.debug(f"No country for {ip}: {data}")
            return None

        return f"{data.get('city') or 'Unknown'}, {data['country_name']}"

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self.client.aclose()
