"""Tests for common utilities."""

import json
import logging

import pytest

from shortener.common.validators import MAX_VALIDITY_MINUTES, is_valid_url, is_valid_short_code, is_valid_validity
from shortener.common.headers import extract_forwarded_headers, get_client_ip
from shortener.common.links import build_base_url, build_short_url
from shortener.common.logging_config import JsonFormatter, setup_logging


class TestValidators:
    """Test validation utilities."""

    def test_valid_urls(self):
        """Test valid URL validation."""
        valid, _ = is_valid_url("https://example.com")
        assert valid

        valid, _ = is_valid_url("http://example.com/path")
        assert valid

        valid, _ = is_valid_url("https://sub.example.com:8080/path?query=value")
        assert valid

    def test_invalid_urls(self):
        """Test invalid URL validation."""
        valid, error = is_valid_url("")
        assert not valid
        assert "required" in error.lower()

        valid, error = is_valid_url("not-a-url")
        assert not valid

        valid, error = is_valid_url("ftp://example.com")
        assert not valid
        assert "http" in error.lower()

        valid, error = is_valid_url("https://example.com/" + "a" * 2048)
        assert not valid
        assert "too long" in error.lower()

        valid, error = is_valid_url("http://[::1")
        assert not valid

    def test_valid_short_codes(self):
        """Test valid short code validation."""
        for code in ("abc123", "A", "Zz9", "abcdef"):
            valid, _ = is_valid_short_code(code)
            assert valid, code

    def test_invalid_short_codes(self):
        """Test invalid short code validation."""
        valid, error = is_valid_short_code("")
        assert not valid
        assert "required" in error.lower()

        valid, error = is_valid_short_code("abcdefg")
        assert not valid
        assert "up to 6" in error

        valid, error = is_valid_short_code("abc@12")
        assert not valid

        valid, error = is_valid_short_code("test_1")
        assert not valid

    def test_validity(self):
        """Validity must be a positive integer."""
        assert is_valid_validity(1)[0]
        assert is_valid_validity(10080)[0]

        for value in (0, -1, 2.5, "30", None, True):
            valid, error = is_valid_validity(value)
            assert not valid, value
            assert "positive integer" in error

    @pytest.mark.parametrize("value", [MAX_VALIDITY_MINUTES + 1, 10**10, 10**20])
    def test_validity_upper_bound(self, value):
        """Validity windows past the cap are rejected."""
        assert is_valid_validity(MAX_VALIDITY_MINUTES)[0]

        valid, error = is_valid_validity(value)
        assert not valid
        assert "at most" in error


class TestHeaders:
    """Test header utilities."""

    def test_extract_forwarded_headers(self):
        """Test forwarded header extraction."""
        headers = {
            "X-Forwarded-Proto": "https",
            "X-Forwarded-Host": "example.com",
            "X-Forwarded-For": "1.2.3.4",
        }

        result = extract_forwarded_headers(headers)
        assert result["forwarded_proto"] == "https"
        assert result["forwarded_host"] == "example.com"
        assert result["forwarded_for"] == "1.2.3.4"

    def test_build_base_url_from_headers(self):
        """Test base URL building from headers."""
        headers = {
            "X-Forwarded-Proto": "https",
            "X-Forwarded-Host": "example.com",
        }

        base_url = build_base_url(
            headers=headers,
            fallback_base_url="http://localhost:8000"
        )

        assert base_url == "https://example.com"

    def test_build_base_url_from_request(self):
        """Request scheme and host beat the fallback."""
        base_url = build_base_url(
            headers={},
            fallback_base_url="http://localhost:8000",
            request_scheme="http",
            request_host="short.test",
        )

        assert base_url == "http://short.test"

    def test_build_base_url_fallback(self):
        """Test base URL fallback."""
        base_url = build_base_url(
            headers={},
            fallback_base_url="http://localhost:8000/"
        )

        assert base_url == "http://localhost:8000"

    def test_client_ip_from_forwarded_for(self):
        """The first X-Forwarded-For hop is the client."""
        headers = {"X-Forwarded-For": "203.0.113.7, 10.0.0.1"}

        assert get_client_ip(headers, peer_host="10.0.0.2") == "203.0.113.7"

    def test_client_ip_from_peer(self):
        """Without forwarding headers the peer address is used."""
        assert get_client_ip({}, peer_host="10.0.0.2") == "10.0.0.2"
        assert get_client_ip({"x-forwarded-for": " "}, peer_host="10.0.0.2") == "10.0.0.2"
        assert get_client_ip({}) is None

    def test_client_ip_untrusted_forwarded_for(self):
        """Untrusted X-Forwarded-For is ignored in favour of the peer."""
        headers = {"X-Forwarded-For": "203.0.113.7"}

        assert get_client_ip(headers, peer_host="10.0.0.2", trust_forwarded=False) == "10.0.0.2"


class TestURLBuilder:
    """Test URL building utilities."""

    def test_build_short_url_no_prefix(self):
        """Test short URL building without prefix."""
        url = build_short_url(
            short_code="abc123",
            base_url="https://example.com",
            path_prefix=""
        )

        assert url == "https://example.com/abc123"

    def test_build_short_url_with_prefix(self):
        """Test short URL building with prefix."""
        url = build_short_url(
            short_code="abc123",
            base_url="https://example.com/",
            path_prefix="/s/"
        )

        assert url == "https://example.com/s/abc123"


class TestLogging:
    """Test logging setup."""

    def test_setup_logging(self, tmp_path):
        """Handlers are replaced, not stacked, and a file handler is optional."""
        log_file = tmp_path / "shortener.log"

        setup_logging(level="DEBUG")
        logger = setup_logging(level="warning", log_file=str(log_file))

        assert logger.name == "shortener"
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 2

        logger.warning("disk full")
        for handler in logger.handlers:
            handler.flush()
        assert "disk full" in log_file.read_text()

        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()

    def test_json_formatter(self):
        """JSON lines survive quotes in the message."""
        record = logging.LogRecord(
            name="shortener.web",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg='Created shortcode: %s -> "%s"',
            args=("abc", "https://example.com"),
            exc_info=None,
        )

        data = json.loads(JsonFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["logger"] == "shortener.web"
        assert data["message"] == 'Created shortcode: abc -> "https://example.com"'
