"""API routes implementation."""

from fastapi import APIRouter, Request, status
from datetime import datetime, timezone

from .schemas import (
    ShortenRequest,
    ShortenResponse,
    URLStatsResponse,
    ClickResponse,
    HealthResponse,
    ErrorResponse,
    StatisticsResponse,
)
from shortener.common.links import build_base_url, build_short_url

# Short URL endpoints live at the root; operational endpoints under /api
shorturls_router = APIRouter()
router = APIRouter()


@shorturls_router.post(
    "/shorturls",
    response_model=ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        409: {"model": ErrorResponse, "description": "Short code already exists"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Create short URL",
    description="Create a shortened URL. Optionally provide a validity window and a custom short code.",
)
async def create_short_url(request: Request, body: ShortenRequest):
    """Create a shortened URL."""
    service = request.app.state.service
    config = request.app.state.config

    entry = await service.create_short_url(
        original_url=body.url,
        validity_minutes=body.validity,
        # An empty shortcode means "generate one"
        custom_code=body.shortcode or None,
    )

    # Build complete short URL
    base_url = build_base_url(
        headers=dict(request.headers),
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )

    short_link = build_short_url(
        short_code=entry.code,
        base_url=base_url,
        path_prefix=config.path_prefix,
    )

    return ShortenResponse(short_link=short_link, expiry=entry.expires_at)


@shorturls_router.get(
    "/shorturls/{short_code}",
    response_model=URLStatsResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Short code not found"},
        410: {"model": ErrorResponse, "description": "Short code expired"},
    },
    summary="Get URL statistics",
    description="Get the original URL, timestamps and click history of a live short URL.",
)
async def get_url_stats(request: Request, short_code: str):
    """Get click statistics for a shortened URL."""
    service = request.app.state.service

    entry = await service.get_url_stats(short_code)

    return URLStatsResponse(
        total_clicks=entry.total_clicks,
        original_url=entry.target_url,
        creation_timestamp=entry.created_at,
        expiry_timestamp=entry.expires_at,
        clicks=[
            ClickResponse(
                timestamp=click.timestamp,
                referrer=click.referrer,
                location=click.location,
            )
            for click in entry.clicks
        ],
    )


@router.get(
    "/stats",
    response_model=StatisticsResponse,
    summary="Get statistics",
    description="Get service-wide statistics.",
)
async def get_statistics(request: Request):
    """Get service statistics."""
    service = request.app.state.service

    stats = await service.get_statistics()

    return StatisticsResponse(**stats)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    service = request.app.state.service

    health = await service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        registry="healthy" if health["registry"] else "unhealthy",
        total_codes=health["total_codes"],
        timestamp=datetime.now(timezone.utc),
    )
