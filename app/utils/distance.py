"""
Facility distance parsing and normalization.

Facilities carry a free-text display distance ("2.5 km", "800 m", "3") and an
optional canonical distance in meters. Parsing is lenient: anything that cannot
be understood yields ``Unparseable`` and callers decide what that means.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union
import logging
import math
import re

from app.utils.geo import haversine_distance, format_distance
from app.utils.params import MAX_INTEGER

logger = logging.getLogger(__name__)

LEADING_NUMBER = re.compile(r"^(\d+(\.\d+)?)")


@dataclass(frozen=True)
class Parsed:
    """A distance understood from text, in whole meters."""
    meters: int


@dataclass(frozen=True)
class Unparseable:
    text: Optional[str] = None


DistanceParseResult = Union[Parsed, Unparseable]


@dataclass(frozen=True)
class NormalizedDistance:
    """Values to persist on a facility: canonical meters and display string."""
    distance_value: Optional[int]
    distance: Optional[str]


def parse_distance_text(text: Optional[str]) -> DistanceParseResult:
    """
    Parse a display distance into meters.

    The text must start with a number. "km" anywhere in the text means
    kilometers, otherwise an "m" means meters, otherwise kilometers are assumed.
    Distances too large to store as meters are ``Unparseable``.
    """
    if not text:
        return Unparseable(text)

    match = LEADING_NUMBER.match(text.strip())
    if not match:
        return Unparseable(text)

    value = float(match.group(1))
    lowered = text.lower()
    if "m" in lowered and "km" not in lowered:
        meters = value
    else:
        meters = value * 1000

    if not math.isfinite(meters) or meters > MAX_INTEGER:
        return Unparseable(text)
    return Parsed(round(meters))


def _parse_coordinates(latitude: Optional[str], longitude: Optional[str]) -> Optional[Tuple[float, float]]:
    if latitude in (None, "") or longitude in (None, ""):
        return None
    try:
        return float(latitude), float(longitude)
    except (TypeError, ValueError):
        logger.debug(f"Ignoring malformed coordinates: {latitude!r}, {longitude!r}")
        return None


def normalize_facility_distance(
    distance_value: Optional[int] = None,
    distance_text: Optional[str] = None,
    property_coordinates: Optional[Tuple[Optional[str], Optional[str]]] = None,
    facility_coordinates: Optional[Tuple[Optional[str], Optional[str]]] = None,
) -> NormalizedDistance:
    """
    Work out the canonical distance for a new facility.

    Sources in priority order: the explicit ``distance_value``, the parsed
    ``distance_text``, then the haversine distance between the property and
    facility coordinates. When no display text was given it is synthesized from
    whichever canonical value was found. Never raises on bad input.
    """
    text = distance_text.strip() if distance_text and distance_text.strip() else None
    meters = distance_value
    if meters is not None and not 0 <= meters <= MAX_INTEGER:
        logger.debug(f"Ignoring out-of-range distance value: {meters}")
        meters = None

    if meters is None and text is not None:
        parsed = parse_distance_text(text)
        if isinstance(parsed, Parsed):
            meters = parsed.meters

    if meters is None and property_coordinates and facility_coordinates:
        origin = _parse_coordinates(*property_coordinates)
        target = _parse_coordinates(*facility_coordinates)
        if origin and target:
            meters = round(haversine_distance(origin[0], origin[1], target[0], target[1]))

    if text is None and meters is not None:
        text = format_distance(meters)

    return NormalizedDistance(distance_value=meters, distance=text)


def effective_distance_meters(distance_value: Optional[int], distance_text: Optional[str]) -> Optional[int]:
    """Canonical meters, falling back to the display text; None when unknown."""
    if distance_value is not None:
        return distance_value
    parsed = parse_distance_text(distance_text)
    if isinstance(parsed, Parsed):
        return parsed.meters
    return None


def filter_facilities_by_radius(
    facilities: Iterable,
    radius_km: float,
    facility_type: Optional[str] = None,
) -> List:
    """
    Keep facilities whose distance is within ``radius_km`` (inclusive).

    Facilities with no usable distance are excluded. The optional type filter is
    an exact match applied after the radius filter. Results are ordered by
    distance, nearest first.
    """
    limit_meters = radius_km * 1000
    within = []

    for facility in facilities:
        meters = effective_distance_meters(facility.distance_value, facility.distance)
        if meters is None or meters > limit_meters:
            continue
        within.append((meters, facility))

    if facility_type:
        within = [
            (meters, facility) for meters, facility in within
            if _facility_type_value(facility) == facility_type
        ]

    within.sort(key=lambda pair: (pair[0], pair[1].id))
    return [facility for _, facility in within]


def _facility_type_value(facility) -> str:
    value = facility.facility_type
    return getattr(value, "value", value)
