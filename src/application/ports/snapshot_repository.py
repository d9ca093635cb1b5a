"""Port for loading raw monthly snapshots."""

from typing import Protocol

from src.domain.models import RawMonthlySnapshot


class SnapshotRepositoryPort(Protocol):
    """Port exposing the validated monthly inputs of the pipeline."""

    def load_snapshots(self) -> list[RawMonthlySnapshot]:
        """Return every raw monthly snapshot, in any order."""

    def load_snapshot(self, month: str) -> RawMonthlySnapshot:
        """Return the raw snapshot of a single ``YYYY-MM`` month."""


__all__ = ["SnapshotRepositoryPort"]
