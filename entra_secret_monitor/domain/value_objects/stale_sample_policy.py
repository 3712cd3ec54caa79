"""Stale sample policy value object."""

from enum import StrEnum, auto


class StaleSamplePolicy(StrEnum):
    """What happens to series whose credential vanished from the directory."""

    KEEP = auto()
    PRUNE = auto()

    def __str__(self) -> str:
        return self.value

    @property
    def removes_stale(self) -> bool:
        """Whether unobserved series are dropped after a successful refresh."""
        return self is StaleSamplePolicy.PRUNE
