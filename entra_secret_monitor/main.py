#!/usr/bin/env python3
"""
Entra ID Secret Monitor

Composition root and application entry point.
Wires together all layers following hexagonal architecture principles.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING

import uvicorn

from . import __version__
from .application.exceptions import ApplicationError
from .application.services import RefreshLoop
from .application.use_cases import RefreshExpiryMetrics
from .domain.value_objects import StaleSamplePolicy, format_duration, parse_duration
from .infrastructure.adapters import EntraIdApplicationDirectory, ExpiryMetricRegistry
from .infrastructure.adapters.api import create_app
from .infrastructure.config import Settings, load_settings

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import timedelta

    from fastapi import FastAPI

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


class ApplicationContainer:
    """
    Dependency injection container.

    Responsible for creating and wiring all application components. The
    metric registry is created once and shared by the refresh loop and the
    HTTP endpoint.
    """

    def __init__(self, settings: Settings) -> None:
        """Initialize container with settings."""
        self._settings = settings
        self.registry = ExpiryMetricRegistry()

    def create_directory(self) -> EntraIdApplicationDirectory:
        """Create the application directory adapter and its credential."""
        directory = EntraIdApplicationDirectory(self._settings.graph_config)
        directory.build_credential()
        return directory

    def create_refresh_use_case(self) -> RefreshExpiryMetrics:
        """Create the refresh use case with all dependencies."""
        return RefreshExpiryMetrics(
            directory=self.create_directory(),
            sink=self.registry,
            timeout=self._settings.refresh_timeout,
            stale_policy=self._settings.stale_policy,
        )

    def create_refresh_loop(self) -> RefreshLoop:
        """Create the background refresh loop."""
        return RefreshLoop(self.create_refresh_use_case(), self._settings.refresh_interval)

    def create_app(self) -> FastAPI:
        """Create the metrics HTTP application."""
        return create_app(
            registry=self.registry,
            refresh_loop=self.create_refresh_loop(),
            version=__version__,
        )


def _duration_arg(value: str) -> timedelta:
    """argparse type for durations, keeping the parser's error message."""
    try:
        return parse_duration(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="entra-secret-monitor",
        description="Export Entra ID application secret expiry times as Prometheus metrics.",
    )
    parser.add_argument(
        "--refresh-interval",
        type=_duration_arg,
        default="1h",
        help="interval at which secrets are reloaded from Entra (default: %(default)s)",
    )
    parser.add_argument(
        "--refresh-timeout",
        type=_duration_arg,
        default="30s",
        help="timeout for a single application listing (default: %(default)s)",
    )
    parser.add_argument(
        "--prune-stale",
        action="store_true",
        help="remove series of secrets that no longer exist in Entra",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 for clean shutdown, 1 for start-up failure).
    """
    args = build_parser().parse_args(argv)

    try:
        logger.info("Entra ID Secret Monitor %s starting...", __version__)

        settings = load_settings(
            refresh_interval=args.refresh_interval,
            refresh_timeout=args.refresh_timeout,
            stale_policy=StaleSamplePolicy.PRUNE if args.prune_stale else StaleSamplePolicy.KEEP,
        )
        logging.getLogger().setLevel(settings.log_level.upper())

        container = ApplicationContainer(settings)
        app = container.create_app()

    except ValueError as e:
        logger.error("Configuration error: %s", e)
        return 1
    except ApplicationError as e:
        logger.error("Startup error: %s", e)
        return 1

    logger.info(
        "Serving metrics on %s:%d (refresh every %s, stale series: %s)",
        settings.metrics_host,
        settings.metrics_port,
        format_duration(settings.refresh_interval),
        settings.stale_policy,
    )

    try:
        uvicorn.run(
            app,
            host=settings.metrics_host,
            port=settings.metrics_port,
            log_level=settings.log_level.lower(),
        )
    except KeyboardInterrupt:
        logger.info("Shutting down...")

    return 0


if __name__ == "__main__":
    sys.exit(main())
