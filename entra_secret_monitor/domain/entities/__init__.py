"""Domain entities - Objects with identity and lifecycle."""

from .application import UNNAMED_APPLICATION, Application
from .credential import UNNAMED_CREDENTIAL, Credential

__all__ = [
    "UNNAMED_APPLICATION",
    "UNNAMED_CREDENTIAL",
    "Application",
    "Credential",
]
