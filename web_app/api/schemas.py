"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr
from pydantic.alias_generators import to_camel
from typing import List, Optional
from datetime import datetime


class CamelModel(BaseModel):
    """Base for responses whose wire field names are camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ShortenRequest(BaseModel):
    """Request to shorten a URL.

    Only types are checked here; URL shape, validity range and shortcode
    format are validated by the service so every route reports them the
    same way.
    """

    url: StrictStr = Field(..., description="The URL to shorten")
    validity: Optional[StrictInt] = Field(None, description="Validity window in minutes (default 30)")
    shortcode: Optional[StrictStr] = Field(None, description="Optional custom short code (1-6 alphanumeric)")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "url": "https://example.com/very/long/path/to/resource",
                    "validity": 30,
                },
                {
                    "url": "https://github.com/user/repo",
                    "validity": 120,
                    "shortcode": "myrepo"
                }
            ]
        }
    }


class ShortenResponse(CamelModel):
    """Response after shortening a URL."""

    short_link: str = Field(..., description="The complete short URL")
    expiry: datetime = Field(..., description="Expiry timestamp (ISO-8601)")

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "shortLink": "http://localhost:8000/abc123",
                    "expiry": "2024-01-01T12:30:00Z"
                }
            ]
        },
    )


class ClickResponse(BaseModel):
    """One recorded redirect."""

    timestamp: datetime
    referrer: Optional[str] = None
    location: Optional[str] = None


class URLStatsResponse(CamelModel):
    """Response with click statistics for a short URL."""

    total_clicks: int
    original_url: str
    creation_timestamp: datetime
    expiry_timestamp: datetime
    clicks: List[ClickResponse]


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    registry: str = Field(..., description="Registry status")
    total_codes: int = Field(..., description="Number of registered short codes")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Detailed error information")


class StatisticsResponse(BaseModel):
    """Statistics response."""

    total_codes: int
    active_codes: int
    expired_codes: int
    total_clicks: int
    custom_codes_enabled: bool
    geolocation_enabled: bool
