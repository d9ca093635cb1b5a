"""Application ports package."""

from .dashboard_writer import DashboardWriterPort
from .snapshot_repository import SnapshotRepositoryPort

__all__ = [
    "DashboardWriterPort",
    "SnapshotRepositoryPort",
]
