"""Application layer exceptions."""


class ApplicationError(Exception):
    """Base exception for application errors."""


class DirectoryFetchError(ApplicationError):
    """Raised when listing applications from the directory fails."""


class ConfigurationError(ApplicationError, ValueError):
    """Raised when configuration is invalid."""


class ClientConstructionError(ApplicationError):
    """Raised when the directory client cannot be built."""
