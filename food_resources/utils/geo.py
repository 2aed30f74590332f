# food_resources/utils/geo.py
import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

EARTH_RADIUS_MILES = 3958.8


@dataclass
class BBox:
    west: float
    south: float
    east: float
    north: float

    def contains(self, lat: float, lon: float) -> bool:
        return self.south <= lat <= self.north and self.west <= lon <= self.east


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a coordinate
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_valid_latitude(value: Any) -> bool:
    # NaN fails both comparisons; huge ints compare exactly without float conversion
    return _is_number(value) and -90 <= value <= 90


def is_valid_longitude(value: Any) -> bool:
    return _is_number(value) and -180 <= value <= 180


def is_valid_point(lat: Any, lon: Any) -> bool:
    """True when both values are real numbers inside their degree ranges."""
    return is_valid_latitude(lat) and is_valid_longitude(lon)


def compute_distance(lat1: Any, lon1: Any, lat2: Any, lon2: Any) -> Optional[float]:
    """
    Great-circle distance in miles (Haversine), rounded to one decimal.

    Returns None when any coordinate is missing, not a number, NaN or out of
    range. Missing geodata is common, so this never raises.
    """
    if not (is_valid_point(lat1, lon1) and is_valid_point(lat2, lon2)):
        return None

    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    distance = EARTH_RADIUS_MILES * c

    # half away from zero; distance is never negative
    return math.floor(distance * 10 + 0.5) / 10


def _distance_key(entity: Mapping[str, Any]) -> tuple[int, float]:
    distance = entity["distance"]
    if distance is None:
        return (1, 0.0)
    return (0, distance)


def rank_by_distance(
    entities: Sequence[Mapping[str, Any]],
    origin_lat: Any,
    origin_lon: Any,
) -> Sequence[Mapping[str, Any]]:
    """
    Annotate each entity with ``distance`` from the origin and order nearest first.

    Without an origin (either coordinate None) the input is handed back as-is,
    with no ``distance`` key. Entities whose distance is unknown go last, in
    their original order. Inputs are copied, never mutated.
    """
    if origin_lat is None or origin_lon is None:
        return entities

    annotated = [
        {
            **entity,
            "distance": compute_distance(
                origin_lat, origin_lon, entity.get("latitude"), entity.get("longitude")
            ),
        }
        for entity in entities
    ]
    # sorted() is stable, so ties and unknowns keep input order
    return sorted(annotated, key=_distance_key)
