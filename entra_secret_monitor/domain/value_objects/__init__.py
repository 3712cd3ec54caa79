"""Domain value objects - Immutable objects defined by their attributes."""

from .duration import format_duration, parse_duration
from .stale_sample_policy import StaleSamplePolicy

__all__ = [
    "StaleSamplePolicy",
    "format_duration",
    "parse_duration",
]
