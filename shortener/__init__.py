"""Core business logic for URL shortener."""

from .shortcode import ShortCodeGenerator
from .service import URLShortenerService
from .geolocation import IPGeolocator
from .store import InMemoryShortcodeRegistry, Entry, Click

__all__ = [
    "ShortCodeGenerator",
    "URLShortenerService",
    "IPGeolocator",
    "InMemoryShortcodeRegistry",
    "Entry",
    "Click",
]
