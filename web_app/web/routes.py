"""Redirect route implementation."""

from fastapi import APIRouter, Request, status
from fastapi.responses import RedirectResponse

router = APIRouter()


@router.get(
    "/{short_code}",
    include_in_schema=False,
)
async def redirect_to_url(request: Request, short_code: str):
    """Redirect to the original URL, recording one click."""
    service = request.app.state.service

    # Raises not-found / expired, handled by the app's exception handlers
    original_url = await service.resolve_redirect(
        short_code,
        client_ip=getattr(request.state, "client_ip", None),
        referrer=request.headers.get("referer"),
    )

    # Perform 302 redirect (temporary redirect for tracking)
    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)
