"""Use case for refreshing the credential expiry metrics from the directory."""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from ...domain.value_objects import StaleSamplePolicy
from ..exceptions import DirectoryFetchError
from ..ports import ApplicationDirectory, ExpiryMetricSink

logger = logging.getLogger(__name__)

DEFAULT_FETCH_TIMEOUT = timedelta(seconds=30)


@dataclass(frozen=True, slots=True)
class RefreshResult:
    """Result of a single refresh cycle."""

    applications: int
    credentials: int
    removed: int = 0
    completed_at: datetime = field(default_factory=lambda: datetime.now(UTC))


class RefreshExpiryMetrics:
    """
    Use case that synchronizes the expiry gauge with the directory.

    One execution lists the applications once, writes one sample per
    password credential and, depending on the stale sample policy, drops
    series that were not observed.
    """

    def __init__(
        self,
        directory: ApplicationDirectory,
        sink: ExpiryMetricSink,
        *,
        timeout: timedelta = DEFAULT_FETCH_TIMEOUT,
        stale_policy: StaleSamplePolicy = StaleSamplePolicy.KEEP,
    ) -> None:
        """
        Initialize the use case.

        Args:
            directory: Adapter listing application registrations.
            sink: Metric store receiving the expiry samples.
            timeout: Upper bound for the listing call.
            stale_policy: Whether unobserved series survive a refresh.
        """
        self._directory = directory
        self._sink = sink
        self._timeout = timeout
        self._stale_policy = stale_policy

    async def execute(self) -> RefreshResult:
        """
        Execute one refresh cycle.

        Returns:
            RefreshResult with the number of processed applications and credentials.

        Raises:
            DirectoryFetchError: If the listing fails or times out. The metric
                store is not modified in that case.
        """
        try:
            async with asyncio.timeout(self._timeout.total_seconds()):
                applications = await self._directory.list_applications()
        except TimeoutError as e:
            msg = f"Listing applications timed out after {self._timeout.total_seconds():g}s"
            raise DirectoryFetchError(msg) from e

        observed: set[tuple[str, str]] = set()
        written = 0

        for app in applications:
            logger.info("Processing app %s (%s)", app.name, app.id)
            for credential in app.credentials:
                logger.debug(
                    "Credential %s expires %s",
                    credential.name,
                    credential.expiry_date_utc.isoformat(),
                )
                self._sink.set_expiry(app.name, credential.name, credential.expiry_timestamp)
                observed.add((app.name, credential.name))
                written += 1

        removed = self._remove_stale(observed) if self._stale_policy.removes_stale else 0

        logger.info(
            "Refreshed %d credentials from %d applications (%d stale series removed)",
            written,
            len(applications),
            removed,
        )
        return RefreshResult(applications=len(applications), credentials=written, removed=removed)

    def _remove_stale(self, observed: set[tuple[str, str]]) -> int:
        """Drop every published series that was not written in this cycle."""
        stale = self._sink.keys() - observed
        for app_name, secret_name in sorted(stale):
            logger.info("Removing stale series for %s / %s", app_name, secret_name)
            self._sink.remove(app_name, secret_name)
        return len(stale)
