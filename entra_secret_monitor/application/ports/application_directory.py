"""Port for the application directory - driven/secondary port."""

from typing import Protocol

from ...domain.entities import Application


class ApplicationDirectory(Protocol):
    """
    Port for listing application registrations from an identity provider.

    This is a driven (secondary) port that defines how the application
    retrieves applications and their password credentials.
    """

    async def list_applications(self) -> list[Application]:
        """
        Retrieve application registrations with their password credentials.

        Returns:
            Applications from a single listing call.

        Raises:
            DirectoryFetchError: If retrieval fails.
        """
        ...
