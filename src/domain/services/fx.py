"""Currency conversion into the base currency."""

from decimal import Decimal
from logging import Logger

from src.domain.constants import MISSING_RATE_ASSUME_PARITY
from src.domain.errors import MissingRateError
from src.domain.models import ConvertedEntry, Settings, SnapshotWarning
from src.domain.services.normalization import normalize_currency_code
from src.utils.decimal_utils import coerce_decimal


def resolve_rate(
    currency: str,
    fx_rates: dict[str, Decimal],
    base_currency: str,
) -> Decimal:
    """Return the rate converting one unit of ``currency`` to base currency.

    Args:
        currency: Currency code of the amount.
        fx_rates: Month FX table (units of base currency per unit).
        base_currency: Base currency code.

    Returns:
        Decimal: FX rate, ``1`` for the base currency itself.

    Raises:
        MissingRateError: If the currency has no rate in the table.
    """
    code = normalize_currency_code(currency)
    base = normalize_currency_code(base_currency)
    if code is not None and code == base:
        return Decimal("1")
    for key, rate in fx_rates.items():
        if normalize_currency_code(key) == code:
            return coerce_decimal(rate)
    raise MissingRateError(code or str(currency), base or str(base_currency))


def convert_amount(
    amount: Decimal,
    currency: str,
    fx_rates: dict[str, Decimal],
    base_currency: str,
) -> Decimal:
    """Convert an amount into the base currency.

    Args:
        amount: Amount in its own currency.
        currency: Currency code of the amount.
        fx_rates: Month FX table.
        base_currency: Base currency code.

    Returns:
        Decimal: ``amount * rate`` (unrounded).
    """
    rate = resolve_rate(currency, fx_rates, base_currency)
    return coerce_decimal(amount) * rate


def convert_entry(
    name: str,
    type_tag: str,
    amount: Decimal,
    currency: str,
    fx_rates: dict[str, Decimal],
    base_currency: str,
    *,
    assume_parity: bool = False,
) -> ConvertedEntry:
    """Convert an entry into a ``ConvertedEntry``.

    Args:
        name: Entry name.
        type_tag: Entry type tag.
        amount: Balance or movement in the entry currency.
        currency: Entry currency code.
        fx_rates: Month FX table.
        base_currency: Base currency code.
        assume_parity: Use a rate of ``1`` instead of failing when the
            currency has no rate. Callers must record a warning.

    Returns:
        ConvertedEntry: Entry with its base-currency amount.
    """
    original = coerce_decimal(amount)
    try:
        rate = resolve_rate(currency, fx_rates, base_currency)
    except MissingRateError:
        if not assume_parity:
            raise
        rate = Decimal("1")
    return ConvertedEntry(
        name=name,
        type=type_tag,
        currency=normalize_currency_code(currency) or currency,
        original_amount=original,
        rate=rate,
        amount=original * rate,
    )


def convert_with_policy(
    name: str,
    type_tag: str,
    amount: Decimal,
    currency: str,
    fx_rates: dict[str, Decimal],
    settings: Settings,
    *,
    logger: Logger,
) -> tuple[ConvertedEntry, SnapshotWarning | None]:
    """Convert an entry following the settings' missing-rate policy.

    Returns:
        tuple: Converted entry and an optional ``missing_fx_rate`` warning.

    Raises:
        MissingRateError: Under the ``fail`` policy when no rate exists.
    """
    assume_parity = settings.missing_rate_policy == MISSING_RATE_ASSUME_PARITY
    converted = convert_entry(
        name,
        type_tag,
        amount,
        currency,
        fx_rates,
        settings.base_currency,
        assume_parity=assume_parity,
    )
    warning = None
    if assume_parity and not _has_rate(currency, fx_rates, settings):
        message = (
            f"Missing FX rate {converted.currency}->{settings.base_currency} "
            f"for entry '{name}', assuming 1.0"
        )
        logger.warning(message)
        warning = SnapshotWarning(
            code="missing_fx_rate",
            message=message,
            entry_name=name,
        )
    return converted, warning


def _has_rate(
    currency: str,
    fx_rates: dict[str, Decimal],
    settings: Settings,
) -> bool:
    try:
        resolve_rate(currency, fx_rates, settings.base_currency)
    except MissingRateError:
        return False
    return True


__all__ = [
    "resolve_rate",
    "convert_amount",
    "convert_entry",
    "convert_with_policy",
]
