"""Exceptions raised by the shortcode registry and service layer.

Classes:
    ShortenerError:
        Generic base class for all URL shortener errors.

    InvalidInputError:
        Raised when a URL, validity or shortcode fails validation.

    ShortcodeConflictError:
        Raised when an explicitly requested shortcode is already taken.

    ShortcodeNotFoundError:
        Raised when a shortcode was never created.

    ShortcodeExpiredError:
        Raised when a shortcode exists but its validity window has passed.

    ShortcodeExhaustedError:
        Raised when random generation cannot find a free shortcode within
        the configured number of attempts.

Each class carries the HTTP status code the web layer maps it to.
"""


class ShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = "app:shortener_error"
    status_code = 500


class InvalidInputError(ShortenerError):
    """Raised when request input is malformed."""

    error_code = "input:invalid_input"
    status_code = 400


class ShortcodeConflictError(ShortenerError):
    """Raised when an explicitly requested shortcode already exists (live or expired)."""

    error_code = "registry:shortcode_conflict"
    status_code = 409


class ShortcodeNotFoundError(ShortenerError):
    """Raised when a shortcode is not present in the registry."""

    error_code = "registry:shortcode_not_found"
    status_code = 404


class ShortcodeExpiredError(ShortenerError):
    """Raised when a shortcode is known but past its expiry timestamp."""

    error_code = "registry:shortcode_expired"
    status_code = 410


class ShortcodeExhaustedError(ShortenerError):
    """Raised when the random generation retry budget is used up.

    Seeing this in production means the keyspace is close to saturation.
    """

    error_code = "registry:shortcode_exhausted"
    status_code = 500
