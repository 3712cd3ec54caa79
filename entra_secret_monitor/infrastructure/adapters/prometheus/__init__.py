"""Prometheus adapter - Metric store for credential expiry samples."""

from .registry import EXPIRY_METRIC_NAME, ExpiryMetricRegistry

__all__ = [
    "EXPIRY_METRIC_NAME",
    "ExpiryMetricRegistry",
]
