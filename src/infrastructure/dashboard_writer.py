"""JSON serialization of the dashboard."""

from dataclasses import asdict
from decimal import Decimal
import json
from pathlib import Path
from typing import Any

from src.application.ports.dashboard_writer import DashboardWriterPort
from src.domain.models import ComputedSnapshot, Dashboard
from src.infrastructure.logging.logger import get_app_logger


def _to_json_number(value: Decimal) -> int | float:
    if value == value.to_integral_value() and value.as_tuple().exponent >= 0:
        return int(value)
    return float(value)


def _jsonable(value: Any) -> Any:
    if isinstance(value, Decimal):
        return _to_json_number(value)
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value


def snapshot_to_dict(snapshot: ComputedSnapshot) -> dict[str, Any]:
    """Return the JSON-ready representation of a computed snapshot."""
    payload = _jsonable(asdict(snapshot))
    if snapshot.location is None:
        payload.pop("location")
    if snapshot.purchasing_power is None:
        payload.pop("purchasing_power")
    return payload


def dashboard_to_dict(dashboard: Dashboard) -> dict[str, Any]:
    """Return the JSON-ready representation of a dashboard.

    Field order follows the dataclass declarations and FX tables are sorted,
    so serializing the same dashboard twice yields identical text.
    """
    return {
        "metadata": _jsonable(asdict(dashboard.metadata)),
        "yearly_stats": [
            _jsonable(asdict(stats)) for stats in dashboard.yearly_stats
        ],
        "snapshots": [
            snapshot_to_dict(snapshot) for snapshot in dashboard.snapshots
        ],
    }


def dashboard_to_json(dashboard: Dashboard, pretty: bool = True) -> str:
    """Serialize a dashboard to JSON text."""
    return json.dumps(
        dashboard_to_dict(dashboard),
        indent=2 if pretty else None,
        ensure_ascii=False,
    )


class JsonDashboardWriter(DashboardWriterPort):
    """Write the dashboard to a JSON file, replacing any prior copy."""

    def __init__(
        self,
        output_path: Path | str,
        logger=None,
        pretty: bool = True,
    ) -> None:
        """Initialize the writer.

        Args:
            output_path: Destination file.
            logger: Optional logger compatible with logging.Logger-like API.
            pretty: Whether to indent the JSON output.
        """
        self._output_path = Path(output_path)
        self._logger = logger or get_app_logger()
        self._pretty = pretty

    def write(self, dashboard: Dashboard) -> None:
        """Write the dashboard atomically to the output path."""
        self._output_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._output_path.with_suffix(
            self._output_path.suffix + ".tmp"
        )
        tmp_path.write_text(
            dashboard_to_json(dashboard, pretty=self._pretty),
            encoding="utf-8",
        )
        tmp_path.replace(self._output_path)
        self._logger.info(f"Dashboard written to {self._output_path}")


__all__ = [
    "JsonDashboardWriter",
    "dashboard_to_dict",
    "dashboard_to_json",
    "snapshot_to_dict",
]
