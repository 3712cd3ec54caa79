"""Microsoft Graph API client for Entra ID."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, ClassVar

import httpx
import msal

from ....application.exceptions import ClientConstructionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GraphClientConfig:
    """Configuration for Microsoft Graph API client."""

    tenant_id: str
    client_id: str
    client_secret: str
    timeout: float = 30.0


class GraphClient:
    """
    Async client for Microsoft Graph API.

    Handles authentication and the application listing request. Only the
    first page of a listing is read.
    """

    GRAPH_BASE_URL: ClassVar[str] = "https://graph.microsoft.com/v1.0"
    AUTHORITY_BASE: ClassVar[str] = "https://login.microsoftonline.com"
    SCOPE: ClassVar[list[str]] = ["https://graph.microsoft.com/.default"]
    APPLICATION_FIELDS: ClassVar[str] = "id,appId,displayName,passwordCredentials"

    def __init__(
        self,
        config: GraphClientConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the Graph client.

        Args:
            config: Tenant, client credentials and request timeout.
            transport: Optional httpx transport, used to stub Graph in tests.
        """
        self._config = config
        self._transport = transport
        self._access_token: str | None = None
        self._token_expiry: datetime | None = None
        self._msal_app: msal.ConfidentialClientApplication | None = None

    def _get_msal_app(self) -> msal.ConfidentialClientApplication:
        """Get or create MSAL application instance."""
        if self._msal_app is None:
            authority = f"{self.AUTHORITY_BASE}/{self._config.tenant_id}"
            try:
                self._msal_app = msal.ConfidentialClientApplication(
                    client_id=self._config.client_id,
                    client_credential=self._config.client_secret,
                    authority=authority,
                )
            except Exception as e:
                msg = f"Failed to create credential for tenant {self._config.tenant_id}: {e}"
                raise ClientConstructionError(msg) from e
        return self._msal_app

    def build_credential(self) -> None:
        """
        Create the MSAL credential eagerly.

        Raises:
            ClientConstructionError: If the credential cannot be created.
        """
        self._get_msal_app()

    async def _acquire_token(self) -> str:
        """Acquire access token using client credentials flow."""
        # Check if existing token is still valid
        if self._access_token and self._token_expiry and datetime.now(UTC) < self._token_expiry:
            return self._access_token

        app = self._get_msal_app()
        # MSAL is synchronous; keep the event loop free for scrapes
        result = await asyncio.to_thread(app.acquire_token_for_client, scopes=self.SCOPE)

        if "access_token" not in result:
            error = result.get("error_description", result.get("error", "Unknown error"))
            msg = f"Failed to acquire access token: {error}"
            raise RuntimeError(msg)

        self._access_token = result["access_token"]
        expires_in = result.get("expires_in", 3600)
        # Refresh 5 minutes before expiry
        self._token_expiry = datetime.now(UTC) + timedelta(seconds=expires_in - 300)

        return self._access_token

    async def get_applications(self) -> list[dict[str, Any]]:
        """
        Retrieve application registrations with their password credentials.

        Returns:
            List of application dictionaries from Graph API.
        """
        logger.info("Fetching application registrations from Entra ID...")
        data = await self._get("/applications", params={"$select": self.APPLICATION_FIELDS})

        applications: list[dict[str, Any]] = data.get("value", [])
        if data.get("@odata.nextLink"):
            logger.warning(
                "Listing returned more than one page; only the first %d applications are exported",
                len(applications),
            )

        logger.info("Found %d application registrations", len(applications))
        return applications

    async def _get(self, endpoint: str, params: dict[str, str] | None = None) -> dict[str, Any]:
        """Issue an authenticated GET against the Graph API."""
        token = await self._acquire_token()
        headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }

        async with httpx.AsyncClient(
            base_url=self.GRAPH_BASE_URL,
            timeout=self._config.timeout,
            transport=self._transport,
        ) as client:
            response = await client.get(endpoint, headers=headers, params=params)
            response.raise_for_status()
            return response.json()
