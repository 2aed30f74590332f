# food_resources/core/exceptions.py
"""Exception hierarchy for food_resources."""


class FoodResourcesError(Exception):
    """Base exception for all food_resources errors."""


class DatasetError(FoodResourcesError):
    """The resource dataset file is missing or not a JSON list of objects."""

    def __init__(self, path: str, detail: str):
        self.path = path
        super().__init__(f"Invalid dataset at {path}: {detail}")


class ResourceNotFound(FoodResourcesError):
    """No active resource exists with the requested id."""

    def __init__(self, resource_id: int):
        self.resource_id = resource_id
        super().__init__(f"Resource {resource_id} not found")


class GeocodingError(FoodResourcesError):
    """The geocoding service answered with an error or an unreadable body."""

    def __init__(self, address: str, detail: str):
        self.address = address
        super().__init__(f"Geocoding failed for '{address}': {detail}")
