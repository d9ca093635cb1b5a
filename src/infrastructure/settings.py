"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
from decimal import Decimal
import json
import os
from pathlib import Path
from typing import Any
from urllib.parse import unquote, urlparse

from src.domain.errors import ConfigurationError
from src.domain.models import (
    CategorySettings,
    InflationSettings,
    LocationSettings,
    Settings,
)
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import coerce_decimal
from src.utils.utils import get_project_root


@dataclass(frozen=True)
class PipelinePaths:
    """File locations used by the pipeline adapters.

    Attributes:
        settings_file: Path to ``settings.json``.
        database_dir: Directory holding the ``YYYY_MM.json`` snapshots.
        dashboard_file: Output path of the generated dashboard.
    """

    settings_file: Path
    database_dir: Path
    dashboard_file: Path

    @classmethod
    def from_env(cls) -> "PipelinePaths":
        """Build paths from environment variables.

        Returns:
            PipelinePaths: Paths sourced from the environment, defaulting to
            locations under the project root.
        """
        logger = get_app_logger()
        root = get_project_root()
        settings_file = cls._normalize_path(
            os.getenv("NETWORTH_SETTINGS_FILE") or str(root / "settings.json"),
            logger=logger,
        )
        database_dir = cls._normalize_path(
            os.getenv("NETWORTH_DATABASE_DIR") or str(root / "database"),
            logger=logger,
        )
        dashboard_file = cls._normalize_path(
            os.getenv("NETWORTH_DASHBOARD_FILE")
            or str(root / "dashboard" / "dashboard.json"),
            logger=logger,
            must_exist=False,
        )
        return cls(
            settings_file=settings_file,
            database_dir=database_dir,
            dashboard_file=dashboard_file,
        )

    @staticmethod
    def _normalize_path(
        raw_path: str,
        logger,
        must_exist: bool = True,
    ) -> Path:
        """Normalize a filesystem path or ``file://`` URI.

        Args:
            raw_path: Raw path string.
            logger: Logger used for warnings.
            must_exist: Whether a missing path should be reported.

        Returns:
            Path: Absolute filesystem path.
        """
        parsed = urlparse(raw_path)
        if parsed.scheme == "file":
            raw_path = unquote(parsed.path)
        path = Path(raw_path).expanduser().resolve()
        if must_exist and not path.exists():
            logger.warning(f"Configured path does not exist: {path}")
        return path


def load_settings(path: Path | str) -> Settings:
    """Load pipeline settings from a JSON file.

    Args:
        path: Path to ``settings.json``.

    Returns:
        Settings: Parsed, validated settings.

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid.
    """
    settings_path = Path(path)
    try:
        raw = json.loads(
            settings_path.read_text(encoding="utf-8"),
            parse_float=Decimal,
        )
    except OSError as exc:
        raise ConfigurationError(
            f"Reading settings file {settings_path}: {exc}"
        ) from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(
            f"Parsing settings JSON in {settings_path}: {exc}"
        ) from exc
    try:
        return parse_settings(raw)
    except (KeyError, TypeError, ValueError, ArithmeticError) as exc:
        raise ConfigurationError(
            f"Invalid settings in {settings_path}: {exc!r}"
        ) from exc


CATEGORY_KEYS = (
    "assets",
    "liabilities",
    "positive_cash_flows",
    "negative_cash_flows",
)

def parse_settings(raw: dict[str, Any]) -> Settings:
    """Build ``Settings`` from a decoded ``settings.json`` document.

    Args:
        raw: Decoded JSON object.

    Returns:
        Settings: Parsed settings.
    """
    if not isinstance(raw, dict):
        raise ConfigurationError("Settings document must be a JSON object")
    categories = raw.get("categories") or {}
    hicp = raw.get("hicp") or {}
    ecli_weight = raw.get("ecli_weight")
    policies = raw.get("policies") or {}
    precision = raw.get("precision") or {}

    optional: dict[str, Any] = {}
    if "purchasing_power" in policies:
        optional["purchasing_power_policy"] = policies["purchasing_power"]
    if "external_inflow" in policies:
        optional["external_inflow_policy"] = policies["external_inflow"]
    if "missing_rate" in policies:
        optional["missing_rate_policy"] = policies["missing_rate"]
    if "money_places" in precision:
        optional["money_places"] = int(precision["money_places"])
    if "ratio_places" in precision:
        optional["ratio_places"] = int(precision["ratio_places"])

    return Settings(
        base_currency=str(raw["base_currency"]).strip().upper(),
        settings_version=int(raw.get("settings_version", 1)),
        categories=_parse_categories(categories),
        inflation=InflationSettings(
            enabled=bool(hicp.get("enabled", bool(hicp))),
            base_value=coerce_decimal(hicp.get("base_value", 100)),
            base_year=_optional_int(hicp.get("base_year")),
            base_month=_optional_int(hicp.get("base_month")),
        ),
        location=_parse_location(ecli_weight),
        **optional,
    )


def _parse_categories(section: dict[str, Any]) -> CategorySettings:
    configured = {
        key: _string_tuple(section, key)
        for key in CATEGORY_KEYS
        if key in section
    }
    return CategorySettings(**configured)


def _parse_location(ecli_weight: dict[str, Any] | None) -> LocationSettings:
    if not ecli_weight:
        return LocationSettings()
    return LocationSettings(
        enabled=bool(ecli_weight.get("enabled", True)),
        rent_index_weight=coerce_decimal(
            ecli_weight["rent_index_weight"]
        ),
        groceries_index_weight=coerce_decimal(
            ecli_weight["groceries_index_weight"]
        ),
        cost_of_living_index_weight=coerce_decimal(
            ecli_weight["cost_of_living_index_weight"]
        ),
    )


def _string_tuple(section: dict[str, Any], key: str) -> tuple[str, ...]:
    values = section.get(key, [])
    if not isinstance(values, list) or not all(
        isinstance(value, str) for value in values
    ):
        raise ConfigurationError(
            f"categories.{key} must be a list of strings"
        )
    return tuple(value.strip() for value in values if value.strip())


def _optional_int(value) -> int | None:
    if value is None or value == "":
        return None
    return int(value)


__all__ = ["PipelinePaths", "load_settings", "parse_settings"]
