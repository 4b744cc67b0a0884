"""Business logic service for URL shortener."""

import logging
from typing import Optional, Dict, Any

from .exceptions import InvalidInputError, ShortcodeExpiredError, ShortcodeNotFoundError
from .geolocation import IPGeolocator
from .store.base import ShortcodeRegistryBase
from .store.models import Entry, Click
from .common.validators import is_valid_url, is_valid_short_code, is_valid_validity


class URLShortenerService:
    """Service layer for URL shortening business logic.

    Owns the policy decisions the registry leaves to its callers: input
    validation, and how expired entries are treated by each endpoint.
    """

    def __init__(
        self,
        registry: ShortcodeRegistryBase,
        geolocator: Optional[IPGeolocator] = None,
        logger: Optional[logging.Logger] = None,
        enable_custom_codes: bool = True,
        default_validity_minutes: int = 30,
    ):
        """Initialize URL shortener service.

        Args:
            registry: Shortcode registry instance
            geolocator: Optional geolocation client for click analytics
            logger: Optional logger
            enable_custom_codes: Whether to allow custom short codes
            default_validity_minutes: Validity used when the caller gives none
        """
        self.registry = registry
        self.geolocator = geolocator
        self.logger = logger or logging.getLogger(__name__)
        self.enable_custom_codes = enable_custom_codes
        self.default_validity_minutes = default_validity_minutes

    async def create_short_url(
        self,
        original_url: str,
        validity_minutes: Optional[int] = None,
        custom_code: Optional[str] = None,
    ) -> Entry:
        """Create a new short URL.

        Args:
            original_url: The original long URL
            validity_minutes: Minutes until expiry (default used if None)
            custom_code: Optional custom short code

        Returns:
            The created entry

        Raises:
            InvalidInputError: If validation fails
            ShortcodeConflictError: If custom code exists
            ShortcodeExhaustedError: If no free code could be generated
        """
        is_valid, error = is_valid_url(original_url)
        if not is_valid:
            raise InvalidInputError(f"Invalid URL: {error}")

        if validity_minutes is None:
            validity_minutes = self.default_validity_minutes
        is_valid, error = is_valid_validity(validity_minutes)
        if not is_valid:
            raise InvalidInputError(error)

        if custom_code is not None:
            if not self.enable_custom_codes:
                raise InvalidInputError("Custom short codes are not enabled")

            is_valid, error = is_valid_short_code(custom_code)
            if not is_valid:
                raise InvalidInputError(error)

        return self.registry.create(
            target_url=original_url,
            validity_minutes=validity_minutes,
            requested_code=custom_code,
        )

    async def get_url_stats(self, short_code: str) -> Entry:
        """Get the entry and click history for a live short code.

        Raises:
            ShortcodeNotFoundError: If the code was never created
            ShortcodeExpiredError: If the code has expired
        """
        entry = self._lookup_live(short_code)
        self.logger.debug(f"Retrieved stats for {short_code}: {entry.total_clicks} clicks")
        return entry

    async def resolve_redirect(
        self,
        short_code: str,
        client_ip: Optional[str] = None,
        referrer: Optional[str] = None,
    ) -> str:
        """Resolve a short code for redirect and record the click.

        Geolocation happens before the click is appended and outside the
        registry lock; its failure only leaves the location empty.

        Args:
            short_code: The short code being visited
            client_ip: Caller IP used for geolocation
            referrer: Referer header value, if any

        Returns:
            The target URL

        Raises:
            ShortcodeNotFoundError: If the code was never created
            ShortcodeExpiredError: If the code has expired
        """
        entry = self._lookup_live(short_code, include_clicks=False)

        location = None
        if self.geolocator:
            location = await self.geolocator.locate(client_ip)

        click = Click(
            referrer=referrer or None,
            location=location,
        )
        if not self.registry.record_click(short_code, click):
            self.logger.error(f"Click for {short_code} was not recorded")

        self.logger.debug(f"Redirecting {short_code} -> {entry.target_url}")
        return entry.target_url

    async def get_statistics(self) -> Dict[str, Any]:
        """Get service statistics.

        Returns:
            Dictionary with statistics
        """
        stats = {
            **self.registry.statistics(),
            "custom_codes_enabled": self.enable_custom_codes,
            "geolocation_enabled": self.geolocator is not None and self.geolocator.enabled,
        }

        return stats

    async def health_check(self) -> Dict[str, Any]:
        """Perform health check.

        The registry is in-process, so it is healthy whenever it answers.

        Returns:
            Dictionary with health status
        """
        return {
            "registry": True,
            "total_codes": len(self.registry),
            "overall": True,
        }

    def _lookup_live(self, short_code: str, include_clicks: bool = True) -> Entry:
        try:
            entry = self.registry.lookup(short_code, include_clicks=include_clicks)
        except ShortcodeNotFoundError:
            self.logger.warning(f"Short code not found: {short_code}")
            raise

        if entry.is_expired(self.registry.now()):
            self.logger.info(f"Short code expired: {short_code}")
            raise ShortcodeExpiredError(f"Short code '{short_code}' has expired")
        return entry

    async def close(self) -> None:
        """Close service connections."""
        if self.geolocator:
            await self.geolocator.close()
