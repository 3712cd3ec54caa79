"""Application settings loaded from environment variables and flags."""

import os
from dataclasses import dataclass, field
from datetime import timedelta
from functools import cached_property

from ...application.exceptions import ConfigurationError
from ...domain.value_objects import StaleSamplePolicy
from ..adapters.entra_id.graph_client import GraphClientConfig

DEFAULT_REFRESH_INTERVAL = timedelta(hours=1)
DEFAULT_REFRESH_TIMEOUT = timedelta(seconds=30)
DEFAULT_METRICS_PORT = 2112

# Level names understood by both logging and uvicorn
LOG_LEVELS = ("critical", "error", "warning", "info", "debug")
_LOG_LEVEL_ALIASES = {"warn": "warning", "fatal": "critical"}


def _env_int(key: str, default: int) -> int:
    """Get integer from environment variable."""
    raw = os.environ.get(key, str(default))
    try:
        return int(raw)
    except ValueError as e:
        msg = f"{key} must be an integer, got {raw!r}"
        raise ConfigurationError(msg) from e


def _env_str(key: str, default: str = "") -> str:
    """Get string from environment variable."""
    return os.environ.get(key, default)


@dataclass
class Settings:
    """Application settings container."""

    # Entra ID
    tenant_id: str = field(default_factory=lambda: _env_str("TENANT_ID"))
    client_id: str = field(default_factory=lambda: _env_str("CLIENT_ID"))
    client_secret: str = field(default_factory=lambda: _env_str("CLIENT_SECRET"))

    # Refresh
    refresh_interval: timedelta = DEFAULT_REFRESH_INTERVAL
    refresh_timeout: timedelta = DEFAULT_REFRESH_TIMEOUT
    stale_policy: StaleSamplePolicy = StaleSamplePolicy.KEEP

    # Metrics server
    metrics_host: str = field(default_factory=lambda: _env_str("METRICS_HOST", "0.0.0.0"))  # noqa: S104
    metrics_port: int = field(default_factory=lambda: _env_int("METRICS_PORT", DEFAULT_METRICS_PORT))
    log_level: str = field(default_factory=lambda: _env_str("LOG_LEVEL", "INFO"))

    def validate(self) -> None:
        """Validate required settings."""
        missing: list[str] = []

        if not self.client_id:
            missing.append("CLIENT_ID")
        if not self.tenant_id:
            missing.append("TENANT_ID")
        if not self.client_secret:
            missing.append("CLIENT_SECRET")

        if missing:
            msg = f"Missing required environment variables: {', '.join(missing)}"
            raise ConfigurationError(msg)

        if self.refresh_interval <= timedelta():
            msg = f"Refresh interval must be positive, got {self.refresh_interval}"
            raise ConfigurationError(msg)
        if self.refresh_timeout <= timedelta():
            msg = f"Refresh timeout must be positive, got {self.refresh_timeout}"
            raise ConfigurationError(msg)
        if not 0 < self.metrics_port < 65536:
            msg = f"METRICS_PORT must be between 1 and 65535, got {self.metrics_port}"
            raise ConfigurationError(msg)

        level = self.log_level.strip().lower()
        level = _LOG_LEVEL_ALIASES.get(level, level)
        if level not in LOG_LEVELS:
            msg = f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}"
            raise ConfigurationError(msg)
        self.log_level = level.upper()

    @cached_property
    def graph_config(self) -> GraphClientConfig:
        """Get Graph API client configuration."""
        return GraphClientConfig(
            tenant_id=self.tenant_id,
            client_id=self.client_id,
            client_secret=self.client_secret,
            timeout=self.refresh_timeout.total_seconds(),
        )


def load_settings(**overrides: object) -> Settings:
    """Load and validate settings from environment, applying flag overrides."""
    settings = Settings(**overrides)  # type: ignore[arg-type]
    settings.validate()
    return settings
