"""
Command-line tools for the food resources dataset.

Usage:
    food-resources validate [PATH]          # exit 1 when errors are found
    food-resources analyze [PATH]
    food-resources geocode [PATH] [--dry-run]
    food-resources serve [--host H] [--port P]

PATH defaults to DATA_PATH (see core/config.py).
"""

import argparse
import asyncio
import logging
import sys
from collections import Counter
from pathlib import Path
from typing import List, Optional

import httpx

from .core.config import settings
from .core.exceptions import DatasetError
from .services.catalog import load_records, save_records
from .services.geocoding import NominatimGeocoder, backfill_coordinates
from .services.taxonomy import is_valid_service_type
from .services.validation import validate_dataset

logger = logging.getLogger(__name__)

_RULE = "=" * 60


def _resource_label(record: dict, index: int) -> str:
    return f"Resource {index + 1} ({record.get('name') or f'Unnamed (index {index})'})"


def cmd_validate(path: Path) -> int:
    records = load_records(path)
    print(f"\nValidating {path.name}...\n")

    report = validate_dataset(records)
    if report.duplicate_ids:
        print(f"ERROR: Duplicate IDs found: {', '.join(str(i) for i in report.duplicate_ids)}")

    for index, (record, result) in enumerate(zip(records, report.records)):
        label = _resource_label(record, index)
        for error in result.errors:
            print(f"ERROR: {label} {error}")
        for warning in result.warnings:
            print(f"WARNING: {label} {warning}")

    print(f"\n{_RULE}")
    print(f"\nValidation complete: {len(records)} resources checked")
    print(f"Errors: {report.error_count}")
    print(f"Warnings: {report.warning_count}")

    if not report.passed:
        print("\nValidation failed. Please fix errors before deployment.\n")
        return 1
    if report.warning_count:
        print("\nNo errors found, but there are warnings to review.\n")
    else:
        print("\nAll checks passed! Data is valid.\n")
    return 0


def cmd_analyze(path: Path) -> int:
    records = load_records(path)
    usage: Counter = Counter()
    for record in records:
        services = record.get("services")
        if isinstance(services, list):
            usage.update(s for s in services if isinstance(s, str))

    print(f"Total resources: {len(records)}\n")
    print("Service types found:")
    for name in sorted(usage):
        print(f"  - {name} ({usage[name]})")

    non_standard = sorted(s for s in usage if not is_valid_service_type(s))
    print("\nNon-standard service types:")
    for name in non_standard:
        print(f'  - "{name}" (used in {usage[name]} resources)')
    if not non_standard:
        print("  (none)")

    located = sum(1 for r in records if r.get("latitude") is not None and r.get("longitude") is not None)
    print(f"\nWith coordinates: {located}/{len(records)}")
    return 0


async def _geocode(path: Path, dry_run: bool) -> int:
    records = load_records(path)
    async with httpx.AsyncClient(timeout=30.0) as client:
        summary = await backfill_coordinates(records, NominatimGeocoder(client=client))

    print(f"\n{_RULE}")
    print("Geocoding complete!")
    print(f"Already located: {len(summary.already_located)}/{len(records)}")
    print(f"Geocoded: {len(summary.succeeded)}/{len(records)}")
    print(f"Failed: {len(summary.failed)}/{len(records)}")
    if summary.failed:
        print("\nFailed resources (manual geocoding needed):")
        for item in summary.failed:
            print(f"  - ID {item['id']}: {item['name']} ({item['reason']})")

    if dry_run:
        print("\nDry run: data file left untouched.")
    else:
        save_records(path, summary.records)
        print(f"\nData saved to: {path}")
    print(_RULE)
    return 0


def cmd_serve(host: str, port: int) -> int:
    import uvicorn

    uvicorn.run("food_resources.main:app", host=host, port=port, log_level=settings.log_level.lower())
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="food-resources", description="Food resources dataset tools")
    sub = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("validate", "check the dataset; non-zero exit on errors"),
        ("analyze", "summarise service types and coordinate coverage"),
        ("geocode", "fill in missing coordinates via Nominatim"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("path", nargs="?", type=Path, default=settings.data_path)
        if name == "geocode":
            p.add_argument("--dry-run", action="store_true", help="do not write the file back")

    serve = sub.add_parser("serve", help="run the HTTP API")
    serve.add_argument("--host", default=settings.api_host)
    serve.add_argument("--port", type=int, default=settings.api_port)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=settings.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.command == "validate":
            return cmd_validate(args.path)
        if args.command == "analyze":
            return cmd_analyze(args.path)
        if args.command == "geocode":
            return asyncio.run(_geocode(args.path, args.dry_run))
        return cmd_serve(args.host, args.port)
    except DatasetError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
