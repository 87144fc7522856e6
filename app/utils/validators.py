"""
Validation helpers shared by schemas and services.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
MAX_SLUG_LENGTH = 200


def slugify(value: str) -> str:
    """
    Lowercase URL-safe slug: runs of non-alphanumerics collapse to one hyphen.

    "Luxury Apartment in Delhi!" -> "luxury-apartment-in-delhi"
    """
    slug = (value or "").strip().lower()
    slug = re.sub(r"[^a-z0-9]+", "-", slug)
    slug = slug.strip("-")[:MAX_SLUG_LENGTH].rstrip("-")
    return slug or "property"


def validate_coordinate(value: Optional[str], minimum: float, maximum: float, field_name: str) -> Optional[str]:
    """
    Validate a latitude/longitude decimal string.

    Returns the trimmed string, or None for blank input.

    Raises:
        ValueError: If the value is not a decimal number within range
    """
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        number = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"{field_name} must be a decimal number")
    if not number.is_finite() or not (Decimal(str(minimum)) <= number <= Decimal(str(maximum))):
        raise ValueError(f"{field_name} must be between {minimum} and {maximum}")
    return text


def validate_latitude(value: Optional[str]) -> Optional[str]:
    return validate_coordinate(value, -90, 90, "Latitude")


def validate_longitude(value: Optional[str]) -> Optional[str]:
    return validate_coordinate(value, -180, 180, "Longitude")
