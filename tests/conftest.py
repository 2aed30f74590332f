"""Shared fixtures: a small, fully valid resource dataset."""

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from food_resources.main import create_app
from food_resources.services.catalog import ResourceCatalog


def make_record(rid: int = 1, **overrides) -> dict:
    record = {
        "id": rid,
        "name": "Westside Community Food Pantry",
        "address": "1020 Joseph E Lowery Blvd NW",
        "city": "Atlanta",
        "state": "GA",
        "zipCode": "30318",
        "county": "Fulton",
        "phone": "(404) 555-0101",
        "website": "https://example.org/westside",
        "description": "Weekly grocery distribution.",
        "services": ["Food Pantry", "Fresh Produce"],
        "hours": "Tue & Thu 10am-2pm",
        "latitude": 33.7801,
        "longitude": -84.4166,
    }
    record.update(overrides)
    return record


@pytest.fixture()
def valid_record() -> dict:
    return make_record()


@pytest.fixture()
def records() -> list[dict]:
    return [
        make_record(1),
        make_record(
            2,
            name="Decatur Free Meals Kitchen",
            address="150 E Ponce de Leon Ave",
            city="Decatur",
            zipCode="30030",
            county="DeKalb",
            description="Hot lunch served daily.",
            services=["Free Meals"],
            latitude=33.7748,
            longitude=-84.2963,
        ),
        make_record(
            3,
            name="Midtown Holiday Meals Program",
            address="800 Peachtree St NE",
            zipCode="30308",
            description="Seasonal holiday meal boxes.",
            services=["Holiday Meals", "Food Distribution"],
            latitude=None,
            longitude=None,
        ),
        make_record(
            4,
            name="Brooklyn Pantry",
            address="1 Main St",
            city="Brooklyn",
            zipCode="11201",
            county="Cobb",
            description="Far away pantry used for sorting tests.",
            services=["Food Pantry"],
            latitude=40.7128,
            longitude=-74.0060,
        ),
        make_record(
            5,
            name="Closed Pantry",
            description="No longer operating.",
            isActive=False,
        ),
    ]


@pytest.fixture()
def dataset_path(tmp_path: Path, records: list[dict]) -> Path:
    path = tmp_path / "food_resources.json"
    path.write_text(json.dumps(records), encoding="utf-8")
    return path


@pytest.fixture()
def catalog(records: list[dict]) -> ResourceCatalog:
    return ResourceCatalog(records)


@pytest.fixture()
def client(catalog: ResourceCatalog):
    with TestClient(create_app(catalog)) as c:
        yield c
