"""Application use cases package."""

from .build_dashboard import BuildDashboardUseCase
from .get_snapshot_entries import (
    GetSnapshotEntriesUseCase,
    SnapshotEntriesView,
)

__all__ = [
    "BuildDashboardUseCase",
    "GetSnapshotEntriesUseCase",
    "SnapshotEntriesView",
]
