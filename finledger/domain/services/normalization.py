"""Domain normalization helpers for aggregator labels."""


def normalize_label(label: str | None) -> str | None:
    """Normalize a category label to upper case.

    Args:
        label: Raw label such as ``"food_and_drink "``.

    Returns:
        str | None: Normalized label, or None when blank.
    """
    if not label:
        return None
    cleaned = label.strip()
    return cleaned.upper() if cleaned else None


def normalize_account_type(value: str | None) -> str:
    """Normalize an aggregator account type or subtype to lower case.

    Args:
        value: Raw type value from the aggregator.

    Returns:
        str: Lower-cased value, empty when missing.
    """
    if not value:
        return ""
    return str(value).strip().lower()


__all__ = ["normalize_label", "normalize_account_type"]
