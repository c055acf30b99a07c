"""
Domain Errors for the Neighborhood Registry

Field-level validation failures (blank names, ages outside a variant's range)
are raised inside Pydantic validators as PydanticCustomError using one of the
error type codes below, so callers receive a regular ValidationError whose
``errors()[i]["type"]`` names the failure kind.

Collection-level failures (duplicate keys, blank lookup keys) are plain
exceptions raised by the aggregates.
"""

# Error type codes carried by ValidationError entries
EMPTY_FIELD = "empty_field"
OUT_OF_RANGE = "out_of_range"


class RegistryError(Exception):
    """Base exception for registry aggregate operations."""
    pass


class DuplicateIdError(RegistryError):
    """A person with the same id already lives in the household."""

    def __init__(self, person_id: str, house_number: int):
        self.person_id = person_id
        self.house_number = house_number
        super().__init__(
            f"A person with id {person_id} already exists in household {house_number}."
        )


class DuplicateHouseNumberError(RegistryError):
    """A household with the same house number already exists."""

    def __init__(self, house_number: int):
        self.house_number = house_number
        super().__init__(
            f"A household with house number {house_number} already exists."
        )


class EmptyArgumentError(RegistryError, ValueError):
    """A lookup key was empty or whitespace."""
    pass
