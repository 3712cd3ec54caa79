"""FastAPI application factory for the metrics endpoint."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from ....application.services import RefreshLoop
    from ..prometheus import ExpiryMetricRegistry

logger = logging.getLogger(__name__)

METRICS_PATH = "/metrics"


def create_app(
    registry: ExpiryMetricRegistry,
    refresh_loop: RefreshLoop | None = None,
    version: str = "1.0.0",
) -> FastAPI:
    """
    Create FastAPI application.

    Args:
        registry: Metric registry served on the metrics path.
        refresh_loop: Background refresh loop tied to the server lifespan.
        version: Application version string.

    Returns:
        Configured FastAPI application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:  # noqa: ARG001
        """Run the refresh loop for as long as the server is up."""
        logger.info("Metrics server starting...")
        if refresh_loop is not None:
            refresh_loop.start()
        try:
            yield
        finally:
            if refresh_loop is not None:
                await refresh_loop.stop()
            logger.info("Metrics server shutting down...")

    app = FastAPI(
        title="Entra ID Secret Monitor",
        version=version,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    @app.get(METRICS_PATH, include_in_schema=False)
    async def metrics() -> Response:
        """Expose the current expiry samples for scraping."""
        return Response(content=registry.expose(), media_type=CONTENT_TYPE_LATEST)

    return app
