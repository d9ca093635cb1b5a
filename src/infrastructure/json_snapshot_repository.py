"""Snapshot repository reading monthly JSON documents from a directory.

Each month lives in a ``YYYY_MM.json`` file. This module is the load
boundary of the pipeline: raw JSON is validated here and turned into typed
``RawMonthlySnapshot`` values, so the domain never sees untyped input.
"""

from decimal import Decimal
import json
from pathlib import Path
import re
from typing import Any

from src.application.ports.snapshot_repository import SnapshotRepositoryPort
from src.domain.errors import MalformedSnapshotError
from src.domain.models import (
    CashFlowEntry,
    EcliIndices,
    NetWorthEntry,
    RawMonthlySnapshot,
)
from src.domain.services.validation import validate_month_key
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal


SNAPSHOT_FILE_PATTERN = re.compile(r"^\d{4}_\d{2}\.json$")

_MONTH_KEYS = ("month", "reference_month")
_INDEX_KEYS = ("hicp", "inflation_index")
_CASH_FLOW_KEYS = ("cash_flow_entries", "cash-flow-entries")


class JsonSnapshotRepository(SnapshotRepositoryPort):
    """Load raw monthly snapshots from ``YYYY_MM.json`` files."""

    def __init__(self, database_dir: Path | str, logger=None) -> None:
        """Initialize the repository.

        Args:
            database_dir: Directory holding the monthly JSON files.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._database_dir = Path(database_dir)
        self._logger = logger or get_app_logger()

    def load_snapshots(self) -> list[RawMonthlySnapshot]:
        """Return every monthly snapshot found in the directory.

        Returns:
            list[RawMonthlySnapshot]: Snapshots sorted by file name.

        Raises:
            MalformedSnapshotError: If the directory cannot be read or a
                file fails validation.
        """
        if not self._database_dir.is_dir():
            raise MalformedSnapshotError(
                f"Snapshot directory not found: {self._database_dir}"
            )
        snapshots = []
        for path in sorted(self._database_dir.iterdir()):
            if not path.is_file():
                continue
            if not SNAPSHOT_FILE_PATTERN.match(path.name):
                self._logger.debug(f"Ignoring non-snapshot file {path.name}")
                continue
            snapshots.append(self._load_file(path))
        self._logger.info(
            f"Read {len(snapshots)} snapshot files from {self._database_dir}"
        )
        return snapshots

    def load_snapshot(self, month: str) -> RawMonthlySnapshot:
        """Return the snapshot stored for a single month.

        Args:
            month: Month key in ``YYYY-MM`` format.

        Raises:
            MalformedSnapshotError: If the file is missing or invalid.
        """
        validate_month_key(month)
        path = self._database_dir / f"{month.replace('-', '_')}.json"
        if not path.is_file():
            raise MalformedSnapshotError(f"No snapshot file for {month}")
        return self._load_file(path)

    def _load_file(self, path: Path) -> RawMonthlySnapshot:
        try:
            raw = json.loads(
                path.read_text(encoding="utf-8"),
                parse_float=Decimal,
            )
        except (OSError, json.JSONDecodeError) as exc:
            raise MalformedSnapshotError(
                f"Reading {path.name}: {exc}"
            ) from exc
        try:
            snapshot = parse_snapshot(raw)
        except MalformedSnapshotError as exc:
            raise MalformedSnapshotError(f"{path.name}: {exc}") from exc
        except (KeyError, TypeError, ValueError, ArithmeticError) as exc:
            raise MalformedSnapshotError(
                f"{path.name}: invalid snapshot document ({exc!r})"
            ) from exc
        expected = path.stem.replace("_", "-")
        if snapshot.month != expected:
            raise MalformedSnapshotError(
                f"{path.name} declares month {snapshot.month}, "
                f"expected {expected}"
            )
        return snapshot


def parse_snapshot(raw: dict[str, Any]) -> RawMonthlySnapshot:
    """Validate a decoded monthly document.

    Args:
        raw: Decoded JSON object.

    Returns:
        RawMonthlySnapshot: Typed snapshot.

    Raises:
        MalformedSnapshotError: If required fields are missing or invalid.
    """
    if not isinstance(raw, dict):
        raise MalformedSnapshotError("Snapshot document must be a JSON object")
    month = validate_month_key(_first_of(raw, _MONTH_KEYS, required=True))
    fx_rates = raw.get("fx_rates") or {}
    if not isinstance(fx_rates, dict):
        raise MalformedSnapshotError("fx_rates must be an object")
    index = _first_of(raw, _INDEX_KEYS)
    return RawMonthlySnapshot(
        month=month,
        fx_rates=_parse_fx_rates(fx_rates),
        inflation_index=(
            None if index is None else _number(index, "inflation index")
        ),
        net_worth_entries=tuple(
            NetWorthEntry(
                name=str(item["name"]),
                type=str(item["type"]),
                currency=str(item["currency"]),
                balance=_number(item["balance"], f"{item['name']}.balance"),
                comment=str(item.get("comment", "")),
            )
            for item in _entries(raw, ("net_worth_entries",))
        ),
        cash_flow_entries=_cash_flow_entries(raw, _CASH_FLOW_KEYS),
        investment_contributions=_cash_flow_entries(
            raw,
            ("investment_contributions",),
        ),
        ecli=_parse_ecli(raw.get("ecli")),
    )


def _parse_fx_rates(raw: dict[str, Any]) -> dict[str, Decimal]:
    rates: dict[str, Decimal] = {}
    for code, value in raw.items():
        currency = str(code).strip().upper()
        if currency in rates:
            raise MalformedSnapshotError(
                f"fx_rates lists {currency} more than once"
            )
        rate = _number(value, f"fx_rates.{code}")
        if rate <= 0:
            raise MalformedSnapshotError(
                f"fx_rates.{code} must be positive, got {rate}"
            )
        rates[currency] = rate
    return rates


def _cash_flow_entries(
    raw: dict[str, Any],
    keys: tuple[str, ...],
) -> tuple[CashFlowEntry, ...]:
    return tuple(
        CashFlowEntry(
            name=str(item["name"]),
            type=str(item["type"]),
            currency=str(item["currency"]),
            amount=_number(item["amount"], f"{item['name']}.amount"),
            comment=str(item.get("comment", "")),
        )
        for item in _entries(raw, keys)
    )


def _parse_ecli(raw: dict[str, Any] | None) -> EcliIndices | None:
    if raw is None:
        return None
    return EcliIndices(
        rent_index=_number(raw["rent_index"], "ecli.rent_index"),
        groceries_index=_number(
            raw["groceries_index"],
            "ecli.groceries_index",
        ),
        cost_of_living_index=_number(
            raw["cost_of_living_index"],
            "ecli.cost_of_living_index",
        ),
    )


def _entries(raw: dict[str, Any], keys: tuple[str, ...]) -> list[dict]:
    items = _first_of(raw, keys) or []
    if not isinstance(items, list) or not all(
        isinstance(item, dict) for item in items
    ):
        raise MalformedSnapshotError(f"{keys[0]} must be a list of objects")
    return items


def _first_of(
    raw: dict[str, Any],
    keys: tuple[str, ...],
    required: bool = False,
):
    for key in keys:
        if key in raw and raw[key] is not None:
            return raw[key]
    if required:
        raise MalformedSnapshotError(f"Missing field: {' or '.join(keys)}")
    return None


def _number(value, label: str) -> Decimal:
    # bool is an int subclass and must not pass as a number.
    if isinstance(value, bool) or not isinstance(value, (int, Decimal, float)):
        raise MalformedSnapshotError(
            f"{label} must be a number, got {value!r}"
        )
    number = coerce_decimal(value)
    if not number.is_finite():
        raise MalformedSnapshotError(f"{label} must be finite")
    return number


__all__ = [
    "JsonSnapshotRepository",
    "SNAPSHOT_FILE_PATTERN",
    "parse_snapshot",
]
