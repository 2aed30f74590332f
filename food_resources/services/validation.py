# food_resources/services/validation.py
"""
Data-quality checks for the resource dataset.

Every check reports instead of raising: bad records produce error or warning
messages so a whole batch can be reviewed in one pass. Errors block
publication; warnings are informational.
"""

import math
import re
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Sequence

from .taxonomy import is_valid_county, is_valid_service_type

REQUIRED_FIELDS: tuple[str, ...] = (
    "id", "name", "address", "city", "state", "zipCode",
    "county", "phone", "website", "description", "services", "hours",
)

_PHONE_RE = re.compile(r"\(\d{3}\) \d{3}-\d{4}")


@dataclass
class RecordReport:
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


@dataclass
class DatasetReport:
    """Aggregate of a validation run over a whole dataset."""

    duplicate_ids: List[Any]
    records: List[RecordReport]

    @property
    def error_count(self) -> int:
        # a duplicate-id finding counts once, however many ids repeat
        return (1 if self.duplicate_ids else 0) + sum(len(r.errors) for r in self.records)

    @property
    def warning_count(self) -> int:
        return sum(len(r.warnings) for r in self.records)

    @property
    def passed(self) -> bool:
        return self.error_count == 0


def _is_blank(value: Any) -> bool:
    if value is None or value is False or value == "":
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0 or (isinstance(value, float) and math.isnan(value))
    return False


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _type_name(value: Any) -> str:
    if _is_number(value):
        return "number"
    return type(value).__name__


def _id_key(rid: Any) -> tuple:
    # strict identity: True is not 1, "1" is not 1; ints and floats compare by value
    kind = "number" if _is_number(rid) else type(rid).__name__
    try:
        hash(rid)
    except TypeError:
        return (kind, repr(rid))
    return (kind, rid)


def find_duplicate_ids(records: Sequence[Mapping[str, Any]]) -> List[Any]:
    """Ids that occur more than once, each listed once, in order of first repeat."""
    seen: set = set()
    reported: set = set()
    duplicates: List[Any] = []
    for record in records:
        rid = record.get("id")
        key = _id_key(rid)
        if key in seen:
            if key not in reported:
                reported.add(key)
                duplicates.append(rid)
        else:
            seen.add(key)
    return duplicates


def missing_required_fields(record: Mapping[str, Any]) -> List[str]:
    return [name for name in REQUIRED_FIELDS if _is_blank(record.get(name))]


def _check_coordinates(record: Mapping[str, Any], report: RecordReport) -> None:
    lat = record.get("latitude")
    lon = record.get("longitude")
    has_lat = lat is not None
    has_lon = lon is not None

    if has_lat != has_lon:
        report.errors.append(f"has only {'latitude' if has_lat else 'longitude'} - both required")
        return
    if not has_lat:
        report.warnings.append("missing latitude/longitude - will not appear on map")
        return

    if not (_is_number(lat) and _is_number(lon)):
        report.errors.append("coordinates must be numbers")
        return
    if any(isinstance(v, float) and math.isnan(v) for v in (lat, lon)):
        report.errors.append("has NaN coordinates")
        return

    if lat < -90 or lat > 90:
        report.errors.append(f"latitude out of range: {lat}")
    if lon < -180 or lon > 180:
        report.errors.append(f"longitude out of range: {lon}")


def validate_record(record: Mapping[str, Any], index: int) -> RecordReport:
    """
    Validate one resource. ``index`` is its 0-based position in the dataset,
    used for the sequential-id warning.
    """
    report = RecordReport()
    expected_id = index + 1

    missing = missing_required_fields(record)
    if missing:
        report.errors.append(f"missing required fields: {', '.join(missing)}")

    if _id_key(record.get("id")) != _id_key(expected_id):
        report.warnings.append(f"has ID {record.get('id')} (expected {expected_id})")

    zip_code = record.get("zipCode")
    if not _is_blank(zip_code) and not isinstance(zip_code, str):
        report.errors.append(f"zipCode must be string, got {_type_name(zip_code)}")

    phone = record.get("phone")
    if not _is_blank(phone) and not (isinstance(phone, str) and _PHONE_RE.fullmatch(phone)):
        report.warnings.append(f"phone format should be (XXX) XXX-XXXX, got: {phone}")

    website = record.get("website")
    if not _is_blank(website) and not (
        isinstance(website, str) and website.startswith(("http://", "https://"))
    ):
        report.errors.append(f"website must start with http:// or https://, got: {website}")

    county = record.get("county")
    if not _is_blank(county) and not (isinstance(county, str) and is_valid_county(county)):
        report.errors.append(f"county must be one of allowed counties, got: {county}")

    services = record.get("services")
    if not _is_blank(services):
        if not isinstance(services, (list, tuple)):
            report.errors.append("services must be an array")
        else:
            unknown = [
                str(s) for s in services
                if not (isinstance(s, str) and is_valid_service_type(s))
            ]
            if unknown:
                report.warnings.append(f"has non-standard services: {', '.join(unknown)}")

    _check_coordinates(record, report)
    return report


def validate_dataset(records: Sequence[Mapping[str, Any]]) -> DatasetReport:
    """Run the duplicate-id check once and validate_record on every record."""
    if not isinstance(records, (list, tuple)):
        raise TypeError(f"expected a list of resource records, got {type(records).__name__}")
    for position, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise TypeError(f"record at index {position} is {type(record).__name__}, not an object")

    return DatasetReport(
        duplicate_ids=find_duplicate_ids(records),
        records=[validate_record(record, i) for i, record in enumerate(records)],
    )
