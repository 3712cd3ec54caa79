"""Application use cases."""

from .refresh_expiry_metrics import RefreshExpiryMetrics, RefreshResult

__all__ = [
    "RefreshExpiryMetrics",
    "RefreshResult",
]
