"""Domain package for business rules and core models."""

from .constants import (
    DEFAULT_ASSET_CATEGORIES,
    DEFAULT_LIABILITY_CATEGORIES,
)
from .errors import (
    ConfigurationError,
    DuplicateMonthError,
    MalformedSnapshotError,
    MissingIndexError,
    MissingRateError,
    PipelineError,
    UnmappedCategoryError,
)
from .models import (
    ComputedSnapshot,
    Dashboard,
    RawMonthlySnapshot,
    Settings,
    YearlyStats,
)
from .services import (
    build_dashboard,
    compute_period_growth,
    convert_amount,
)

__all__ = [
    "ComputedSnapshot",
    "ConfigurationError",
    "Dashboard",
    "DEFAULT_ASSET_CATEGORIES",
    "DEFAULT_LIABILITY_CATEGORIES",
    "DuplicateMonthError",
    "MalformedSnapshotError",
    "MissingIndexError",
    "MissingRateError",
    "PipelineError",
    "RawMonthlySnapshot",
    "Settings",
    "UnmappedCategoryError",
    "YearlyStats",
    "build_dashboard",
    "compute_period_growth",
    "convert_amount",
]
