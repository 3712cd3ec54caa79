"""Application ports - Interfaces for external adapters."""

from .application_directory import ApplicationDirectory
from .expiry_metric_sink import ExpiryMetricSink

__all__ = [
    "ApplicationDirectory",
    "ExpiryMetricSink",
]
