#!/usr/bin/env python3
"""
Main entry point for URL shortener service.

Concurrency: requests are served concurrently by uvicorn's event loop. The
shortcode registry guards its own state with a lock, so it is also safe if
routes are later moved to the threadpool. The registry lives in process
memory: with WORKERS > 1 each worker process has its own, independent set
of short codes.

Usage:
    python app.py

Environment variables:
    BASE_URL - Base URL for short links
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    SHORT_CODE_LENGTH - Length of generated short codes (default 6)
    MAX_GENERATION_ATTEMPTS - Random draws before giving up on a free code
    DEFAULT_VALIDITY_MINUTES - Validity applied when a request omits one
    GEOLOCATION_ENABLED - Set to 'false' to skip click geolocation
    GEOLOCATION_URL - Lookup URL template with an {ip} placeholder
    TRUST_FORWARDED_FOR - Set to 'true' behind a proxy that sets X-Forwarded-For
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import load_config
from shortener.geolocation import IPGeolocator
from shortener.service import URLShortenerService
from shortener.shortcode import ShortCodeGenerator
from shortener.store.memory import InMemoryShortcodeRegistry
from shortener.common.logging_config import setup_logging
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting URL shortener service...")

    # Initialize registry
    generator = ShortCodeGenerator(default_length=config.short_code_length)
    registry = InMemoryShortcodeRegistry(
        short_code_generator=generator,
        max_generation_attempts=config.max_generation_attempts,
        logger=logger.getChild("registry"),
    )

    # Initialize geolocation (optional)
    if config.geolocation_enabled:
        logger.info(f"Click geolocation via {config.geolocation_url}")
    else:
        logger.info("Click geolocation disabled")
    geolocator = IPGeolocator(
        url_template=config.geolocation_url,
        timeout_seconds=config.geolocation_timeout_seconds,
        enabled=config.geolocation_enabled,
        logger=logger.getChild("geolocation"),
    )

    # Initialize service
    service = URLShortenerService(
        registry=registry,
        geolocator=geolocator,
        logger=logger,
        enable_custom_codes=config.enable_custom_codes,
        default_validity_minutes=config.default_validity_minutes,
    )

    # Update app state
    app.state.registry = registry
    app.state.service = service

    logger.info("Service started successfully")

    # Yield control to the application
    yield

    # Shutdown
    logger.info("Shutting down URL shortener service...")

    await service.close()

    logger.info("Service stopped")


def main():
    """Main entry point."""
    # Load configuration
    config = load_config()

    # Setup logging
    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("URL Shortener Service")
    logger.info(f"Configuration: {config.model_dump()}")

    # Create FastAPI app with lifespan
    app = create_app(
        registry_instance=None,  # Will be set in lifespan
        service_instance=None,
        config=config,
    )

    # Store config and logger in app state
    app.state.config = config
    app.state.logger = logger

    # Override lifespan
    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        workers=config.workers,
        log_level=config.log_level.lower(),
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

    # Setup signal handlers for graceful shutdown
    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    # Run server
    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
