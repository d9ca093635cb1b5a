"""Domain errors raised by the snapshot pipeline.

Fatal errors abort a whole pipeline run. ``UnmappedCategoryError`` is the
only recoverable one: aggregators catch it and turn it into a
``SnapshotWarning`` attached to the affected month.
"""


class PipelineError(Exception):
    """Base class for every error raised by the pipeline."""


class ConfigurationError(PipelineError):
    """Raised when settings are missing, malformed or inconsistent."""


class MalformedSnapshotError(PipelineError):
    """Raised when a raw monthly record cannot be parsed or validated."""


class DuplicateMonthError(PipelineError):
    """Raised when the input holds more than one record for a month."""

    def __init__(self, months: list[str]) -> None:
        self.months = months
        super().__init__(
            f"Duplicate month keys in input: {', '.join(months)}"
        )


class MissingRateError(PipelineError):
    """Raised when an entry's currency has no FX rate for the month."""

    def __init__(self, currency: str, base_currency: str) -> None:
        self.currency = currency
        self.base_currency = base_currency
        super().__init__(
            f"Missing FX rate for {currency} to {base_currency}"
        )


class MissingIndexError(PipelineError):
    """Raised when inflation is enabled but a month has no index value."""

    def __init__(self, month: str) -> None:
        self.month = month
        super().__init__(
            f"Missing inflation index for {month} "
            "while inflation adjustment is enabled"
        )


class UnmappedCategoryError(PipelineError):
    """Raised when an entry type matches no configured category."""

    def __init__(self, type_tag: str, entry_name: str) -> None:
        self.type_tag = type_tag
        self.entry_name = entry_name
        super().__init__(
            f"Unknown type '{type_tag}' for entry '{entry_name}', "
            "excluded from totals"
        )


__all__ = [
    "PipelineError",
    "ConfigurationError",
    "MalformedSnapshotError",
    "DuplicateMonthError",
    "MissingRateError",
    "MissingIndexError",
    "UnmappedCategoryError",
]
