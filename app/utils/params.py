"""
Tolerant parsers for query-string and path values.

Query parsers return ``None`` for anything they cannot understand, so callers
treat malformed client input as "not specified" rather than as an error.
"""

from enum import Enum
from typing import Optional, Type, TypeVar
import math

from app.utils.exceptions import BadRequestError

EnumType = TypeVar("EnumType", bound=Enum)

# Largest values the Integer and BigInteger column types can hold
MAX_INTEGER = 2_147_483_647
MAX_BIGINT = 9_223_372_036_854_775_807

TRUE_VALUES = {"true", "1", "yes", "on"}
FALSE_VALUES = {"false", "0", "no", "off"}


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def parse_optional_int(
    value: Optional[str],
    minimum: Optional[int] = None,
    maximum: Optional[int] = None
) -> Optional[int]:
    """
    Integer from a query value, or None when absent, malformed or outside
    ``minimum``..``maximum``.

    Only whole numbers are accepted: "2.5" and "1e6" count as malformed.
    """
    value = _clean(value)
    if value is None:
        return None
    try:
        number = int(value)
    except ValueError:
        return None
    if minimum is not None and number < minimum:
        return None
    if maximum is not None and number > maximum:
        return None
    return number


def parse_optional_float(value: Optional[str], minimum: Optional[float] = None) -> Optional[float]:
    value = _clean(value)
    if value is None:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    if minimum is not None and number < minimum:
        return None
    return number


def parse_optional_bool(value: Optional[str]) -> Optional[bool]:
    value = _clean(value)
    if value is None:
        return None
    lowered = value.lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    return None


def parse_optional_enum(value: Optional[str], enum_cls: Type[EnumType]) -> Optional[EnumType]:
    """Enum member by value; unknown values are ignored."""
    value = _clean(value)
    if value is None:
        return None
    try:
        return enum_cls(value.lower())
    except ValueError:
        return None


def parse_optional_text(value: Optional[str]) -> Optional[str]:
    return _clean(value)


def parse_id(value: str, resource: str = "resource") -> int:
    """
    Parse an integer path identifier.

    Raises:
        BadRequestError: If the value is not an integer in 1..MAX_INTEGER
    """
    cleaned = _clean(value)
    if cleaned is None or not (cleaned.isascii() and cleaned.isdigit()):
        raise BadRequestError(f"Invalid {resource} ID: {value}")
    # Compare as text first; int() refuses very long digit strings
    if len(cleaned.lstrip("0")) > len(str(MAX_INTEGER)) or not 1 <= int(cleaned) <= MAX_INTEGER:
        raise BadRequestError(f"Invalid {resource} ID: {value}")
    return int(cleaned)
