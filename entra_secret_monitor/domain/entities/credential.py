"""Credential entity representing an application password credential."""

import math
from dataclasses import dataclass
from datetime import UTC, datetime

UNNAMED_CREDENTIAL = "Unnamed credential"


@dataclass(frozen=True, slots=True)
class Credential:
    """A password credential (client secret) belonging to an application."""

    key_id: str
    display_name: str | None
    expiry_date: datetime

    @property
    def name(self) -> str:
        """Display name, or a fixed placeholder when the secret has none."""
        return self.display_name or UNNAMED_CREDENTIAL

    @property
    def expiry_date_utc(self) -> datetime:
        """Expiry as a timezone-aware datetime (naive values are taken as UTC)."""
        if self.expiry_date.tzinfo:
            return self.expiry_date
        return self.expiry_date.replace(tzinfo=UTC)

    @property
    def expiry_timestamp(self) -> int:
        """Expiry in whole seconds since the Unix epoch."""
        return math.floor(self.expiry_date_utc.timestamp())
