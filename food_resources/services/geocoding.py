# food_resources/services/geocoding.py
"""
Backfill missing coordinates through Nominatim (OpenStreetMap).

Requests go out strictly one at a time with a pause between them, as the
Nominatim usage policy asks (max one request per second).
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

import httpx

from ..core.config import settings
from ..core.exceptions import GeocodingError
from ..utils.geo import BBox, is_valid_point
from ..utils.http import get_json

logger = logging.getLogger(__name__)

# Rough metro Atlanta extent; results outside it go to manual review
ATLANTA_METRO_BBOX = BBox(west=-85.2, south=33.2, east=-83.7, north=34.5)


def round_coordinate(value: float) -> float:
    """Four decimals, roughly 11 m."""
    return round(value, 4)


def full_address(record: Dict[str, Any]) -> str:
    return f"{record.get('address', '')}, {record.get('city', '')}, {record.get('state', '')} {record.get('zipCode', '')}".strip()


class NominatimGeocoder:
    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        delay: Optional[float] = None,
    ):
        self._client = client
        self.base_url = (base_url or settings.nominatim_base).rstrip("/")
        self.user_agent = user_agent or settings.geocoder_user_agent
        self.delay = settings.geocoder_delay_seconds if delay is None else delay

    async def geocode(self, address: str) -> Optional[Tuple[float, float]]:
        """
        Return (lat, lon) of the best match, or None when nothing matched.
        Raises GeocodingError on HTTP failures or unreadable answers.
        """
        url = f"{self.base_url}/search"
        params = {"q": address, "format": "json", "limit": 1}
        try:
            results = await get_json(
                url, params=params, headers={"User-Agent": self.user_agent}, client=self._client
            )
        except httpx.HTTPStatusError as e:
            raise GeocodingError(address, f"Nominatim {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise GeocodingError(address, str(e) or type(e).__name__) from e
        except ValueError as e:
            raise GeocodingError(address, "response was not JSON") from e

        if not results:
            return None
        try:
            return float(results[0]["lat"]), float(results[0]["lon"])
        except (KeyError, TypeError, ValueError, IndexError) as e:
            raise GeocodingError(address, f"unexpected payload: {results[0]!r}") from e


@dataclass
class GeocodeSummary:
    records: List[Dict[str, Any]]
    succeeded: List[Any] = field(default_factory=list)
    already_located: List[Any] = field(default_factory=list)
    failed: List[Dict[str, Any]] = field(default_factory=list)  # {"id", "name", "reason"}


async def backfill_coordinates(
    records: Sequence[Dict[str, Any]],
    geocoder: NominatimGeocoder,
    bbox: Optional[BBox] = ATLANTA_METRO_BBOX,
) -> GeocodeSummary:
    """
    Geocode every record lacking valid coordinates.

    Works on copies; input records are left alone. Failures (no result, HTTP
    error, result outside ``bbox``) are collected and never stop the run.
    """
    summary = GeocodeSummary(records=[dict(r) for r in records])
    pending = [
        r for r in summary.records
        if not is_valid_point(r.get("latitude"), r.get("longitude"))
    ]
    summary.already_located = [
        r.get("id") for r in summary.records
        if is_valid_point(r.get("latitude"), r.get("longitude"))
    ]

    for position, record in enumerate(pending):
        if position > 0 and geocoder.delay:
            await asyncio.sleep(geocoder.delay)

        address = full_address(record)
        logger.info("Geocoding %s: %s", record.get("name"), address)
        try:
            coords = await geocoder.geocode(address)
        except GeocodingError as exc:
            logger.warning("%s", exc)
            summary.failed.append({"id": record.get("id"), "name": record.get("name"), "reason": str(exc)})
            continue

        if coords is None:
            summary.failed.append({"id": record.get("id"), "name": record.get("name"), "reason": "Not found"})
            continue

        lat, lon = round_coordinate(coords[0]), round_coordinate(coords[1])
        if bbox is not None and not bbox.contains(lat, lon):
            summary.failed.append({
                "id": record.get("id"),
                "name": record.get("name"),
                "reason": f"Out of bounds: {lat}, {lon}",
            })
            continue

        record["latitude"] = lat
        record["longitude"] = lon
        summary.succeeded.append(record.get("id"))

    return summary
