"""JSON API routes."""

from .routes import router as api_router, shorturls_router

__all__ = ["api_router", "shorturls_router"]
