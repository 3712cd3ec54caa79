"""Infrastructure adapters - Implementations of application ports."""

from .entra_id import EntraIdApplicationDirectory
from .prometheus import ExpiryMetricRegistry

__all__ = [
    "EntraIdApplicationDirectory",
    "ExpiryMetricRegistry",
]
