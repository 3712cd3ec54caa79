"""Prometheus registry holding the secret expiry gauge."""

import threading

from prometheus_client import CollectorRegistry, Gauge, generate_latest

EXPIRY_METRIC_NAME = "entra_secret_monitor_expire_time_seconds"
EXPIRY_METRIC_LABELS = ("app_name", "secret_name")


class ExpiryMetricRegistry:
    """
    Owned metric registry exposing one gauge series per application secret.

    Implements the ExpiryMetricSink port. The refresh loop writes through
    this object and the HTTP endpoint reads from it; the gauge itself is
    thread-safe and the published key set is guarded by a lock.
    """

    def __init__(self) -> None:
        """Create a private collector registry with the expiry gauge."""
        self._registry = CollectorRegistry(auto_describe=True)
        self._gauge = Gauge(
            EXPIRY_METRIC_NAME,
            "Expiry time of Entra ID application secrets in seconds since the Unix epoch",
            list(EXPIRY_METRIC_LABELS),
            registry=self._registry,
        )
        self._keys: set[tuple[str, str]] = set()
        self._lock = threading.Lock()

    def set_expiry(self, app_name: str, secret_name: str, value: float) -> None:
        """Create or overwrite the sample for ``(app_name, secret_name)``."""
        with self._lock:
            self._gauge.labels(app_name=app_name, secret_name=secret_name).set(value)
            self._keys.add((app_name, secret_name))

    def remove(self, app_name: str, secret_name: str) -> None:
        """Drop the sample for ``(app_name, secret_name)`` if present."""
        with self._lock:
            if (app_name, secret_name) not in self._keys:
                return
            self._gauge.remove(app_name, secret_name)
            self._keys.discard((app_name, secret_name))

    def keys(self) -> set[tuple[str, str]]:
        """Return the label pairs currently published."""
        with self._lock:
            return set(self._keys)

    def get(self, app_name: str, secret_name: str) -> float | None:
        """Return the current value for a series, or None if it is not published."""
        return self._registry.get_sample_value(
            EXPIRY_METRIC_NAME,
            {"app_name": app_name, "secret_name": secret_name},
        )

    def expose(self) -> bytes:
        """Render the registry in the Prometheus text exposition format."""
        return generate_latest(self._registry)
