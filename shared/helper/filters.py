"""Helpers for turning raw filter input into backend query parameters."""

import re
from datetime import datetime

from shared.models.errors import ValidationFailure

_MOBILE_DISALLOWED = re.compile(r"[^\d+]")
_DATE_FORMAT = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def sanitize_mobile(value: str) -> str:
    """Strip every character except digits and "+" (e.g. "+91 98-76" -> "+919876")."""
    return _MOBILE_DISALLOWED.sub("", value or "")


def is_valid_date(value: str) -> bool:
    """Check that a value is a real calendar date in YYYY-MM-DD form."""
    if not _DATE_FORMAT.match(value or ""):
        return False
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        return False
    return True


def validate_date(key: str, value: str | None) -> None:
    """Raise ValidationFailure when a date parameter is set but malformed.

    Args:
        key (str): Name of the parameter, used in the error message.
        value (str | None): The raw value. None and empty values are accepted.

    Raises:
        ValidationFailure: If the value is not a YYYY-MM-DD date.
    """
    if value and not is_valid_date(value):
        raise ValidationFailure(f"Invalid {key} format. Use YYYY-MM-DD")


def active_filters(filters: dict[str, str], allowed_keys: list[str] | None = None) -> dict[str, str]:
    """Return the trimmed, non-empty filters, optionally restricted to declared keys.

    Args:
        filters (dict[str, str]): Raw filter state.
        allowed_keys (list[str] | None): Keys the target collection declares. Others are dropped.

    Returns:
        dict[str, str]: Only the filters that should reach the backend query.
    """
    result: dict[str, str] = {}
    for key, value in filters.items():
        if allowed_keys is not None and key not in allowed_keys:
            continue
        value = (value or "").strip()
        if value:
            result[key] = value
    return result
