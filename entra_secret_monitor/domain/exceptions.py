"""Domain exceptions."""


class DomainError(Exception):
    """Base exception for domain errors."""


class InvalidDurationError(DomainError, ValueError):
    """Raised when a duration string cannot be parsed."""
