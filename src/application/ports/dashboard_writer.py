"""Port for publishing a built dashboard."""

from typing import Protocol

from src.domain.models import Dashboard


class DashboardWriterPort(Protocol):
    """Port receiving the dashboard produced by a pipeline run."""

    def write(self, dashboard: Dashboard) -> None:
        """Persist or publish the dashboard, replacing any prior copy."""


__all__ = ["DashboardWriterPort"]
