"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from entra_secret_monitor.application.exceptions import DirectoryFetchError
from entra_secret_monitor.domain.entities import Application, Credential
from entra_secret_monitor.infrastructure.adapters.prometheus import ExpiryMetricRegistry


class FakeDirectory:
    """In-memory ApplicationDirectory returning canned listings."""

    def __init__(self, applications: list[Application] | None = None) -> None:
        self.applications = applications or []
        self.error: Exception | None = None
        self.calls = 0

    async def list_applications(self) -> list[Application]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.applications)

    def fail_with(self, message: str = "Graph unavailable") -> None:
        self.error = DirectoryFetchError(message)

    def recover(self) -> None:
        self.error = None


@pytest.fixture
def registry() -> ExpiryMetricRegistry:
    """Fresh metric registry."""
    return ExpiryMetricRegistry()


@pytest.fixture
def payroll_app() -> Application:
    """Payroll app with one named and one unnamed secret."""
    return Application(
        id="11111111-1111-1111-1111-111111111111",
        display_name="Payroll",
        credentials=[
            Credential(
                key_id="a",
                display_name="k1",
                expiry_date=datetime(2025, 1, 1, tzinfo=UTC),
            ),
            Credential(
                key_id="b",
                display_name=None,
                expiry_date=datetime(2025, 6, 1, tzinfo=UTC),
            ),
        ],
    )


@pytest.fixture
def billing_app() -> Application:
    """Billing app with a single secret."""
    return Application(
        id="22222222-2222-2222-2222-222222222222",
        display_name="Billing",
        credentials=[
            Credential(
                key_id="c",
                display_name="prod",
                expiry_date=datetime(2026, 3, 15, 12, 30, 45, tzinfo=UTC),
            ),
        ],
    )


@pytest.fixture
def directory(payroll_app: Application, billing_app: Application) -> FakeDirectory:
    """Directory returning the Payroll and Billing apps."""
    return FakeDirectory([payroll_app, billing_app])


@pytest.fixture
def directory_factory() -> type[FakeDirectory]:
    """Factory for directories with custom listings."""
    return FakeDirectory
