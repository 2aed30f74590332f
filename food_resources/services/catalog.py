# food_resources/services/catalog.py
"""
In-memory catalog over the resource dataset.

The catalog is an explicit object handed to whoever needs it (API
dependency, CLI command) rather than a module-level cache.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..core.exceptions import DatasetError, ResourceNotFound
from ..utils.geo import rank_by_distance
from .taxonomy import ALL_SERVICE_TYPES, COUNTIES, group_services, service_category

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 100
MAX_LIMIT = 500


def load_records(path: str | Path) -> List[Dict[str, Any]]:
    """Read a JSON list of resource objects. Raises DatasetError on bad files."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except FileNotFoundError:
        raise DatasetError(str(path), "file not found")
    except json.JSONDecodeError as exc:
        raise DatasetError(str(path), f"not valid JSON ({exc.msg} at line {exc.lineno})")

    if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
        raise DatasetError(str(path), "expected a JSON array of objects")
    return data


def save_records(path: str | Path, records: List[Dict[str, Any]]) -> None:
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(records, fh, indent=2, ensure_ascii=False)
        fh.write("\n")


@dataclass
class Page:
    resources: List[Dict[str, Any]]
    total: int
    limit: int
    offset: int

    @property
    def has_more(self) -> bool:
        return self.offset + self.limit < self.total


def _clamp_limit(limit: Optional[int]) -> int:
    if not limit or limit < 1:
        return DEFAULT_LIMIT
    return min(limit, MAX_LIMIT)


def _matches_text(record: Dict[str, Any], needle: str) -> bool:
    for key in ("name", "description", "address", "city"):
        value = record.get(key)
        if isinstance(value, str) and needle in value.lower():
            return True
    return False


class ResourceCatalog:
    """Read-only view over a list of resource records."""

    def __init__(self, records: Iterable[Dict[str, Any]]):
        self._records = list(records)

    @classmethod
    def from_json(cls, path: str | Path) -> "ResourceCatalog":
        records = load_records(path)
        logger.info("Loaded %d resources from %s", len(records), path)
        return cls(records)

    @property
    def records(self) -> List[Dict[str, Any]]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def _active(self) -> List[Dict[str, Any]]:
        # records without the flag are treated as active
        return [r for r in self._records if r.get("isActive", True)]

    def search(
        self,
        county: Optional[str] = None,
        zip_code: Optional[str] = None,
        services: Optional[List[str]] = None,
        search: Optional[str] = None,
        limit: Optional[int] = DEFAULT_LIMIT,
        offset: Optional[int] = 0,
        origin: Optional[Tuple[Optional[float], Optional[float]]] = None,
    ) -> Page:
        """
        Filter active resources, order by name and slice one page.

        With an ``origin`` (lat, lon) the whole filtered list is ranked nearest
        first before slicing, so page one always holds the closest resources.
        """
        limit = _clamp_limit(limit)
        offset = max(offset or 0, 0)

        hits = self._active()
        if county:
            hits = [r for r in hits if r.get("county") == county]
        if zip_code:
            hits = [r for r in hits if r.get("zipCode") == zip_code]
        if services:
            wanted = {s.strip() for s in services if s.strip()}
            if wanted:
                hits = [
                    r for r in hits
                    if isinstance(r.get("services"), list) and wanted.intersection(r["services"])
                ]
        if search and search.strip():
            needle = search.strip().lower()
            hits = [r for r in hits if _matches_text(r, needle)]

        hits.sort(key=lambda r: str(r.get("name") or "").lower())
        if origin is not None:
            hits = list(rank_by_distance(hits, *origin))
        return Page(
            resources=hits[offset:offset + limit],
            total=len(hits),
            limit=limit,
            offset=offset,
        )

    def get(self, resource_id: int) -> Dict[str, Any]:
        for record in self._active():
            if record.get("id") == resource_id:
                return record
        raise ResourceNotFound(resource_id)

    def counties(self) -> List[dict]:
        counts = {name: 0 for name in COUNTIES}
        for record in self._active():
            county = record.get("county")
            if county in counts:
                counts[county] += 1
        return [
            {"name": name, "resourceCount": counts[name]}
            for name in sorted(counts)
        ]

    def service_types(self, grouped: bool = False) -> List[dict]:
        if grouped:
            return [
                {"category": group["category"], "services": sorted(group["services"])}
                for group in group_services(ALL_SERVICE_TYPES)
            ]
        return [
            {"name": name, "category": service_category(name)}
            for name in sorted(ALL_SERVICE_TYPES)
        ]
