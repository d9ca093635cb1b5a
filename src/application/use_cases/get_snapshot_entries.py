"""Use case to list one month's entries converted to the base currency."""

from dataclasses import dataclass
from decimal import Decimal

from src.application.ports.snapshot_repository import SnapshotRepositoryPort
from src.domain.models import ConvertedEntry, Settings
from src.domain.services.categories import list_converted_entries
from src.domain.services.validation import validate_month_key
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class SnapshotEntriesView:
    """Entries of a month with their base-currency values."""

    month: str
    base_currency: str
    fx_rates: dict[str, Decimal]
    inflation_index: Decimal | None
    entries: list[ConvertedEntry]


class GetSnapshotEntriesUseCase:
    """Return the entry-level detail of a single month."""

    def __init__(
        self,
        snapshot_repository: SnapshotRepositoryPort,
        settings: Settings,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            snapshot_repository: Port providing raw monthly snapshots.
            settings: Immutable settings for the run.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._snapshot_repository = snapshot_repository
        self._settings = settings
        self._logger = logger or get_app_logger()

    def execute(self, month: str) -> SnapshotEntriesView:
        """Return the month's entries.

        Args:
            month: Month key in ``YYYY-MM`` format.

        Returns:
            SnapshotEntriesView: Entries in input order.
        """
        validate_month_key(month)
        raw = self._snapshot_repository.load_snapshot(month)
        entries = list_converted_entries(
            raw.net_worth_entries,
            self._settings,
            raw.fx_rates,
            logger=self._logger,
        )
        self._logger.info(f"Loaded {len(entries)} entries for {month}")
        return SnapshotEntriesView(
            month=raw.month,
            base_currency=self._settings.base_currency,
            fx_rates=raw.fx_rates,
            inflation_index=raw.inflation_index,
            entries=entries,
        )


__all__ = ["GetSnapshotEntriesUseCase", "SnapshotEntriesView"]
