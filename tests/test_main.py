"""Tests for the command line entry point."""

from __future__ import annotations

import logging
from datetime import timedelta
from unittest.mock import MagicMock

import pytest
import uvicorn

from entra_secret_monitor import main as entrypoint
from entra_secret_monitor.domain.value_objects import StaleSamplePolicy


@pytest.fixture
def uvicorn_run(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    """Replace uvicorn.run so no port is ever bound."""
    run = MagicMock()
    monkeypatch.setattr(entrypoint.uvicorn, "run", run)
    return run


@pytest.fixture
def credentials_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Required credentials present in the environment."""
    monkeypatch.setenv("CLIENT_ID", "client")
    monkeypatch.setenv("TENANT_ID", "tenant")
    monkeypatch.setenv("CLIENT_SECRET", "secret")
    monkeypatch.delenv("METRICS_PORT", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)


@pytest.fixture
def no_credential_build(monkeypatch: pytest.MonkeyPatch) -> None:
    """Skip building the MSAL credential, which contacts the authority."""
    monkeypatch.setattr(
        entrypoint.EntraIdApplicationDirectory, "build_credential", lambda self: None
    )


class TestParser:
    """Tests for command line parsing."""

    def test_defaults(self) -> None:
        """The refresh interval defaults to one hour."""
        args = entrypoint.build_parser().parse_args([])

        assert args.refresh_interval == timedelta(hours=1)
        assert args.refresh_timeout == timedelta(seconds=30)
        assert args.prune_stale is False

    def test_custom_values(self) -> None:
        """Durations are parsed from Go-style strings."""
        args = entrypoint.build_parser().parse_args(
            ["--refresh-interval", "15m", "--refresh-timeout", "5s", "--prune-stale"]
        )

        assert args.refresh_interval == timedelta(minutes=15)
        assert args.refresh_timeout == timedelta(seconds=5)
        assert args.prune_stale is True

    def test_invalid_interval_exits(self) -> None:
        """A malformed interval is a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            entrypoint.build_parser().parse_args(["--refresh-interval", "soon"])

        assert exc_info.value.code == 2

    @pytest.mark.parametrize(
        ("value", "message"),
        [("0s", "Duration must be positive"), ("soon", "Invalid duration 'soon'")],
    )
    def test_invalid_interval_message(self, capsys, value: str, message: str) -> None:
        """The usage error carries the duration parser's own message."""
        with pytest.raises(SystemExit):
            entrypoint.build_parser().parse_args(["--refresh-interval", value])

        stderr = capsys.readouterr().err
        assert message in stderr
        assert "invalid _duration_arg value" not in stderr


class TestMain:
    """Tests for main()."""

    def test_missing_env_exits_before_serving(self, monkeypatch, uvicorn_run) -> None:
        """Without credentials the process fails before binding the port."""
        for key in ("CLIENT_ID", "TENANT_ID", "CLIENT_SECRET"):
            monkeypatch.delenv(key, raising=False)

        assert entrypoint.main([]) == 1
        uvicorn_run.assert_not_called()

    def test_client_construction_failure_exits(self, credentials_env, monkeypatch, uvicorn_run) -> None:
        """A credential that cannot be built is fatal at start-up."""
        from entra_secret_monitor.application.exceptions import ClientConstructionError

        def broken(self) -> None:
            raise ClientConstructionError("bad tenant")

        monkeypatch.setattr(entrypoint.EntraIdApplicationDirectory, "build_credential", broken)

        assert entrypoint.main([]) == 1
        uvicorn_run.assert_not_called()

    def test_serves_on_port_2112(self, credentials_env, no_credential_build, uvicorn_run) -> None:
        """With valid configuration the metrics server is started."""
        assert entrypoint.main(["--refresh-interval", "10m"]) == 0

        uvicorn_run.assert_called_once()
        _, kwargs = uvicorn_run.call_args
        assert kwargs["port"] == 2112
        assert kwargs["host"] == "0.0.0.0"  # noqa: S104

    def test_container_wires_shared_registry(self, credentials_env, no_credential_build) -> None:
        """The refresh use case writes into the registry the endpoint serves."""
        settings = entrypoint.load_settings(stale_policy=StaleSamplePolicy.PRUNE)
        container = entrypoint.ApplicationContainer(settings)

        use_case = container.create_refresh_use_case()

        assert use_case._sink is container.registry
        assert use_case._stale_policy is StaleSamplePolicy.PRUNE

    @pytest.mark.parametrize("level", ["WARN", "fatal"])
    def test_logging_aliases_reach_uvicorn_as_valid_levels(
        self, credentials_env, no_credential_build, monkeypatch, level: str
    ) -> None:
        """uvicorn accepts the level derived from a logging alias."""
        configs: list[uvicorn.Config] = []
        monkeypatch.setenv("LOG_LEVEL", level)
        monkeypatch.setattr(
            entrypoint.uvicorn, "run", lambda app, **kwargs: configs.append(uvicorn.Config(app, **kwargs))
        )

        try:
            assert entrypoint.main([]) == 0
        finally:
            logging.getLogger().setLevel(logging.INFO)

        assert configs[0].log_level in ("warning", "critical")

    def test_unknown_log_level_exits_before_serving(self, credentials_env, monkeypatch, uvicorn_run) -> None:
        """An unusable LOG_LEVEL is reported as a configuration error."""
        monkeypatch.setenv("LOG_LEVEL", "NOTSET")

        assert entrypoint.main([]) == 1
        uvicorn_run.assert_not_called()
