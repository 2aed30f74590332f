# food_resources/services/taxonomy.py
"""Allow-lists for counties and service types, with service categories."""

from typing import Dict, Iterable, List, Optional

# Core metro Atlanta counties
COUNTIES: tuple[str, ...] = (
    "Fulton",
    "DeKalb",
    "Cobb",
    "Gwinnett",
    "Clayton",
    "Cherokee",
    "Paulding",
    "Henry",
    "Douglas",
)

# Category label -> service types, in display order
SERVICE_CATEGORIES: Dict[str, tuple[str, ...]] = {
    "Food Services": (
        "Food Pantry",
        "Free Meals",
        "Mobile Pantry",
        "Emergency Food",
        "Meal Delivery",
        "Food Distribution",
        "Fresh Produce",
        "Grocery Delivery",
        "Grocery Programs",
        "Holiday Meals",
        "Nutrition Support",
    ),
    "Support Services": (
        "Emergency Assistance",
        "Emergency Services",
        "Financial Assistance",
        "Case Management",
    ),
    "Housing Services": ("Shelter", "Housing Support"),
    "Health Services": ("Healthcare", "Pharmacy"),
    "Age-Specific Programs": (
        "Senior Programs",
        "Senior Services",
        "Youth Programs",
        "After School Programs",
        "Childcare",
    ),
    "Education Services": ("Education", "English Classes"),
    "Material Assistance": ("Clothing", "Furniture Bank", "Thrift Store"),
    "Community Services": (
        "Community Resources",
        "Community Support",
        "Community Programs",
        "Community Partnerships",
        "Community Popups",
        "Family Resources",
        "Family Support",
        "Home Visits",
        "Student Support",
    ),
    "Partnership Services": ("Partner Network", "Partner Agency Network"),
}

ALL_SERVICE_TYPES: tuple[str, ...] = tuple(
    service for services in SERVICE_CATEGORIES.values() for service in services
)

_SERVICE_TO_CATEGORY: Dict[str, str] = {
    service: category
    for category, services in SERVICE_CATEGORIES.items()
    for service in services
}


def is_valid_county(county: str) -> bool:
    return county in COUNTIES


def is_valid_service_type(service: str) -> bool:
    return service in _SERVICE_TO_CATEGORY


def service_category(service: str) -> Optional[str]:
    return _SERVICE_TO_CATEGORY.get(service)


def group_services(services: Iterable[str]) -> List[dict]:
    """
    Group service names by category.

    Categories come out in SERVICE_CATEGORIES order, empty ones are dropped and
    unknown service names are ignored.
    """
    grouped: Dict[str, List[str]] = {category: [] for category in SERVICE_CATEGORIES}
    for service in services:
        category = _SERVICE_TO_CATEGORY.get(service)
        if category is not None:
            grouped[category].append(service)
    return [
        {"category": category, "services": names}
        for category, names in grouped.items()
        if names
    ]
