"""Allow-list checks for status fields."""

import enum
from collections.abc import Iterable

from admin_dashboard.exceptions import InvalidStatusError


def parse_status(value: str | None, allowed: type[enum.Enum] | Iterable[str]) -> str:
    """
    Return ``value`` if it is one of the permitted statuses.

    ``allowed`` is either a str-valued Enum class or an explicit collection
    of strings (for endpoints that accept only part of an enum).

    Raises:
        InvalidStatusError: If value is missing or not permitted.
    """
    if isinstance(allowed, type) and issubclass(allowed, enum.Enum):
        permitted = [member.value for member in allowed]
    else:
        permitted = list(allowed)

    if value not in permitted:
        raise InvalidStatusError(value, permitted)
    return value
