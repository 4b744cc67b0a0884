"""Configuration management for URL shortener."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Config(BaseSettings):
    """Application configuration."""

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )

    port: int = Field(
        default=8000,
        description="Port to listen on"
    )

    workers: int = Field(
        default=1,
        ge=1,
        description="Number of uvicorn worker processes. Each process has its own in-memory registry."
    )

    # URL shortener settings
    base_url: str = Field(
        default="http://localhost:8000",
        description="Base URL for generating short URLs when the request host is unknown"
    )

    path_prefix: str = Field(
        default="",
        description="Path prefix for short URLs (e.g., '/s' for /s/abc123)"
    )

    short_code_length: int = Field(
        default=6,
        ge=1,
        description="Length for generated short codes"
    )

    max_generation_attempts: int = Field(
        default=256,
        ge=1,
        description="Maximum random draws when generating a free short code"
    )

    default_validity_minutes: int = Field(
        default=30,
        gt=0,
        description="Validity window applied when a request omits one"
    )

    enable_custom_codes: bool = Field(
        default=True,
        description="Allow users to provide custom short codes"
    )

    trust_forwarded_for: bool = Field(
        default=False,
        description="Take the client IP from X-Forwarded-For (enable only behind a trusted proxy)"
    )

    # Geolocation settings
    geolocation_enabled: bool = Field(
        default=True,
        description="Resolve click locations from the caller IP"
    )

    geolocation_url: str = Field(
        default="https://ipapi.co/{ip}/json/",
        description="Geolocation lookup URL with an {ip} placeholder"
    )

    geolocation_timeout_seconds: float = Field(
        default=2.0,
        gt=0,
        description="Timeout for a single geolocation lookup"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()
