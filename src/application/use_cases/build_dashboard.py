"""Use case to build the net worth dashboard from monthly snapshots."""

from collections.abc import Callable
from datetime import datetime, timezone

from src.application.ports.dashboard_writer import DashboardWriterPort
from src.application.ports.snapshot_repository import SnapshotRepositoryPort
from src.domain.errors import PipelineError
from src.domain.models import Dashboard, Settings
from src.domain.services.assembler import build_dashboard
from src.infrastructure.logging.logger import get_app_logger


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BuildDashboardUseCase:
    """Run the snapshot pipeline and optionally publish the result."""

    def __init__(
        self,
        snapshot_repository: SnapshotRepositoryPort,
        settings: Settings,
        logger=None,
        dashboard_writer: DashboardWriterPort | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            snapshot_repository: Port providing raw monthly snapshots.
            settings: Immutable settings for the run.
            logger: Optional logger compatible with logging.Logger-like API.
            dashboard_writer: Optional port receiving the built dashboard.
            clock: Optional callable returning the generation time.
        """
        self._snapshot_repository = snapshot_repository
        self._settings = settings
        self._logger = logger or get_app_logger()
        self._dashboard_writer = dashboard_writer
        self._clock = clock or _utc_now

    def execute(self) -> Dashboard:
        """Build the dashboard.

        Returns:
            Dashboard: Metadata, yearly rollups and ordered snapshots.

        Raises:
            PipelineError: On any fatal input or configuration error. No
                dashboard is written in that case.
        """
        raw_snapshots = self._snapshot_repository.load_snapshots()
        self._logger.info(f"Loaded {len(raw_snapshots)} monthly snapshots")
        generated_at = self._clock().isoformat(timespec="seconds")
        try:
            dashboard = build_dashboard(
                raw_snapshots,
                self._settings,
                generated_at=generated_at,
                logger=self._logger,
            )
        except PipelineError as exc:
            self._logger.error(f"Dashboard generation failed: {exc}")
            raise

        for month, warning in dashboard.warnings:
            self._logger.warning(f"{month} [{warning.code}] {warning.message}")
        latest = dashboard.latest
        if latest is not None:
            self._logger.info(
                f"Dashboard built: months={len(dashboard.snapshots)}, "
                f"latest={latest.month}, "
                f"net_worth={latest.totals.net_worth} "
                f"{dashboard.metadata.base_currency}"
            )
        else:
            self._logger.warning("Dashboard built without any snapshot")

        if self._dashboard_writer is not None:
            self._dashboard_writer.write(dashboard)
        return dashboard


__all__ = ["BuildDashboardUseCase"]
