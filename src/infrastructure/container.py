"""Composition root for wiring infrastructure adapters."""

from src.application.ports.dashboard_writer import DashboardWriterPort
from src.application.ports.snapshot_repository import SnapshotRepositoryPort
from src.application.use_cases.build_dashboard import BuildDashboardUseCase
from src.application.use_cases.get_snapshot_entries import (
    GetSnapshotEntriesUseCase,
)
from src.domain.models import Settings
from src.infrastructure.dashboard_writer import JsonDashboardWriter
from src.infrastructure.json_snapshot_repository import JsonSnapshotRepository
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import PipelinePaths, load_settings


def build_paths() -> PipelinePaths:
    """Return the file locations configured in the environment."""
    return PipelinePaths.from_env()


def build_settings(paths: PipelinePaths | None = None) -> Settings:
    """Return the settings loaded from the configured settings file."""
    resolved = paths or build_paths()
    return load_settings(resolved.settings_file)


def build_snapshot_repository(
    paths: PipelinePaths | None = None,
) -> SnapshotRepositoryPort:
    """Return the JSON snapshot repository."""
    resolved = paths or build_paths()
    return JsonSnapshotRepository(
        resolved.database_dir,
        logger=get_app_logger(),
    )


def build_dashboard_writer(
    paths: PipelinePaths | None = None,
) -> DashboardWriterPort:
    """Return the JSON dashboard writer."""
    resolved = paths or build_paths()
    return JsonDashboardWriter(
        resolved.dashboard_file,
        logger=get_app_logger(),
    )


def build_dashboard_use_case(
    paths: PipelinePaths | None = None,
    write_output: bool = True,
) -> BuildDashboardUseCase:
    """Return the dashboard use case wired to the configured files.

    Args:
        paths: Optional paths; read from the environment when omitted.
        write_output: Whether the built dashboard is written to disk.
    """
    resolved = paths or build_paths()
    return BuildDashboardUseCase(
        build_snapshot_repository(resolved),
        build_settings(resolved),
        logger=get_app_logger(),
        dashboard_writer=(
            build_dashboard_writer(resolved) if write_output else None
        ),
    )


def build_snapshot_entries_use_case(
    paths: PipelinePaths | None = None,
) -> GetSnapshotEntriesUseCase:
    """Return the use case listing a month's converted entries."""
    resolved = paths or build_paths()
    return GetSnapshotEntriesUseCase(
        build_snapshot_repository(resolved),
        build_settings(resolved),
        logger=get_app_logger(),
    )


__all__ = [
    "build_paths",
    "build_settings",
    "build_snapshot_repository",
    "build_dashboard_writer",
    "build_dashboard_use_case",
    "build_snapshot_entries_use_case",
]
