"""Port for publishing credential expiry samples - driven/secondary port."""

from typing import Protocol


class ExpiryMetricSink(Protocol):
    """
    Port for the metric store holding one expiry sample per secret.

    The refresh engine is the only writer of this store.
    """

    def set_expiry(self, app_name: str, secret_name: str, value: float) -> None:
        """Create or overwrite the sample for ``(app_name, secret_name)``."""
        ...

    def remove(self, app_name: str, secret_name: str) -> None:
        """Drop the sample for ``(app_name, secret_name)`` if present."""
        ...

    def keys(self) -> set[tuple[str, str]]:
        """Return the label pairs currently published."""
        ...
