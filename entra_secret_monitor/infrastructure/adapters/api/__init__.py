"""API adapter for the metrics HTTP endpoint."""

from .app import METRICS_PATH, create_app

__all__ = [
    "METRICS_PATH",
    "create_app",
]
