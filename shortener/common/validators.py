"""Validation utilities for URL shortener."""

from urllib.parse import urlparse
from typing import Any, Tuple

from ..shortcode import ShortCodeGenerator

MAX_URL_LENGTH = 2048
MAX_VALIDITY_MINUTES = 60 * 24 * 365 * 10  # ten years


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a URL.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"

    try:
        result = urlparse(url)

        # Check if scheme is http or https
        if result.scheme not in ["http", "https"]:
            return False, "URL must use http or https protocol"

        # Check if netloc (domain) exists
        if not result.hostname:
            return False, "URL must have a valid domain"

        return True, ""

    except ValueError as e:
        return False, f"Invalid URL format: {str(e)}"


def is_valid_short_code(short_code: str) -> Tuple[bool, str]:
    """Validate an explicitly requested short code.

    Args:
        short_code: The short code to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not short_code or not isinstance(short_code, str):
        return False, "Short code is required"

    if not ShortCodeGenerator.is_valid_format(short_code):
        return False, "Shortcode must be alphanumeric and up to 6 characters"

    return True, ""


def is_valid_validity(minutes: Any) -> Tuple[bool, str]:
    """Validate a validity window in minutes.

    Args:
        minutes: Number of minutes the short link stays valid

    Returns:
        Tuple of (is_valid, error_message)
    """
    # bool is a subclass of int
    if isinstance(minutes, bool) or not isinstance(minutes, int) or minutes <= 0:
        return False, "Validity must be a positive integer"

    if minutes > MAX_VALIDITY_MINUTES:
        return False, f"Validity must be at most {MAX_VALIDITY_MINUTES} minutes"

    return True, ""
