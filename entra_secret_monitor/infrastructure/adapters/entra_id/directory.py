"""Entra ID application directory implementation."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from ....application.exceptions import DirectoryFetchError
from ....domain.entities import Application, Credential
from .graph_client import GraphClient, GraphClientConfig

logger = logging.getLogger(__name__)


class EntraIdApplicationDirectory:
    """
    Application directory implementation using Microsoft Graph API.

    Implements the ApplicationDirectory port for Entra ID.
    """

    def __init__(self, config: GraphClientConfig, *, client: GraphClient | None = None) -> None:
        """
        Initialize the directory.

        Args:
            config: Configuration for the Graph API client.
            client: Pre-built Graph client, mainly for tests.
        """
        self._client = client or GraphClient(config)

    def build_credential(self) -> None:
        """Create the underlying credential so bad settings fail at start-up."""
        self._client.build_credential()

    async def list_applications(self) -> list[Application]:
        """
        Retrieve app registrations and their password credentials.

        Returns:
            Applications from a single Graph listing call.

        Raises:
            DirectoryFetchError: If retrieval fails.
        """
        try:
            raw_applications = await self._client.get_applications()
        except Exception as e:
            msg = f"Failed to list applications from Entra ID: {e}"
            raise DirectoryFetchError(msg) from e

        applications = [self._map_application(raw) for raw in raw_applications]
        logger.info(
            "Retrieved %d password credentials from %d app registrations",
            sum(len(app.credentials) for app in applications),
            len(applications),
        )
        return applications

    def _map_application(self, raw: dict[str, Any]) -> Application:
        """Map a raw Graph API application to the domain entity."""
        app = Application(
            id=raw.get("id", ""),
            display_name=raw.get("displayName"),
            app_id=raw.get("appId", ""),
        )

        for cred in raw.get("passwordCredentials") or []:
            credential = self._map_credential(cred, app.name)
            if credential:
                app.add_credential(credential)

        return app

    def _map_credential(self, raw: dict[str, Any], app_name: str) -> Credential | None:
        """
        Map raw Graph API credential data to domain entity.

        Args:
            raw: Raw password credential dictionary from Graph API.
            app_name: Owning application name, for log messages.

        Returns:
            Credential entity or None if the record has no usable expiry.
        """
        expiry_str = raw.get("endDateTime")
        if not expiry_str:
            logger.warning(
                "Credential %s in app %s has no expiry date",
                raw.get("keyId", "unknown"),
                app_name,
            )
            return None

        expiry_date = self._parse_datetime(expiry_str)
        if not expiry_date:
            return None

        return Credential(
            key_id=raw.get("keyId", ""),
            display_name=raw.get("displayName"),
            expiry_date=expiry_date,
        )

    @staticmethod
    def _parse_datetime(dt_string: str) -> datetime | None:
        """Parse ISO datetime string to datetime object."""
        try:
            # Handle various formats from Graph API
            dt_string = dt_string.replace("Z", "+00:00")
            dt = datetime.fromisoformat(dt_string)
            # Ensure timezone-aware
            return dt if dt.tzinfo else dt.replace(tzinfo=UTC)
        except ValueError:
            logger.warning("Failed to parse datetime: %s", dt_string)
            return None
