"""Domain normalization helpers."""

from collections.abc import Iterable


def normalize_currency_code(currency: str | None) -> str | None:
    """Normalize ISO currency codes.

    Args:
        currency: Raw currency code from an input document.

    Returns:
        str | None: Stripped, upper-cased code, or None when empty.
    """
    if not currency:
        return None
    cleaned = currency.strip()
    return cleaned.upper() if cleaned else None


def normalize_type_tag(type_tag: str | None) -> str | None:
    """Normalize entry type tags for case-insensitive matching.

    Args:
        type_tag: Raw ``type`` value of an entry.

    Returns:
        str | None: Stripped, lower-cased tag, or None when empty.
    """
    if not type_tag:
        return None
    cleaned = type_tag.strip()
    return cleaned.lower() if cleaned else None


def resolve_category(
    type_tag: str | None,
    categories: Iterable[str],
) -> str | None:
    """Return the configured category matching a type tag.

    Args:
        type_tag: Raw ``type`` value of an entry.
        categories: Category names as written in settings.

    Returns:
        str | None: Canonical category name, or None when unmatched.
    """
    normalized = normalize_type_tag(type_tag)
    if normalized is None:
        return None
    for category in categories:
        if normalize_type_tag(category) == normalized:
            return category
    return None


__all__ = [
    "normalize_currency_code",
    "normalize_type_tag",
    "resolve_category",
]
