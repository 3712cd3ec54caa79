"""Application services - Long-running drivers of the use cases."""

from .refresh_loop import RefreshLoop

__all__ = ["RefreshLoop"]
