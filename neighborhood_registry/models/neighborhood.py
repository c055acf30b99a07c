"""
Neighborhood Model

The neighborhood is the aggregate root: it owns every household, and through
them every resident. Nothing holds a reference back to its owner, so lookups
that need the owning household return it explicitly (PersonMatch,
RankedPerson).

Aggregate counts are recomputed on every access and never cached.
"""

from typing import NamedTuple, Optional

from pydantic import BaseModel, PrivateAttr

from neighborhood_registry.models.errors import DuplicateHouseNumberError
from neighborhood_registry.models.household import Household
from neighborhood_registry.models.person import Person


class PersonMatch(NamedTuple):
    """A resident together with the household it lives in."""
    person: Person
    household: Household


class RankedPerson(NamedTuple):
    """A resident and its house number, as listed by the age ranking."""
    person: Person
    house_number: int


class Neighborhood(BaseModel):
    """
    Ordered collection of households keyed by house number.

    NOTE: Person ids are only checked for uniqueness within a household.
    find_person_by_id returns the first match in household order when the same
    id appears in more than one household.
    """

    _households: dict[int, Household] = PrivateAttr(default_factory=dict)

    @property
    def households(self) -> list[Household]:
        """Households in insertion order (a copy)."""
        return list(self._households.values())

    @property
    def house_numbers(self) -> list[int]:
        return list(self._households)

    @property
    def household_count(self) -> int:
        return len(self._households)

    @property
    def total_population(self) -> int:
        return sum(h.member_count for h in self._households.values())

    @property
    def total_adults(self) -> int:
        return sum(h.adult_count for h in self._households.values())

    @property
    def total_children(self) -> int:
        return sum(h.child_count for h in self._households.values())

    def add_household(self, household: Household) -> None:
        """
        Append a household.

        Raises:
            DuplicateHouseNumberError: If the house number is already taken
        """
        if household.house_number in self._households:
            raise DuplicateHouseNumberError(household.house_number)
        self._households[household.house_number] = household

    def remove_household(self, house_number: int) -> bool:
        """Remove a household. Returns True if it existed."""
        return self._households.pop(house_number, None) is not None

    def get_household_by_number(self, house_number: int) -> Optional[Household]:
        return self._households.get(house_number)

    def find_person_by_id(self, key: str) -> Optional[PersonMatch]:
        """
        Search every household, in order, for a resident matching ``key``.

        Returns:
            PersonMatch for the first match, None if nobody matches
        """
        for household in self._households.values():
            person = household.find_member_by_id(key)
            if person is not None:
                return PersonMatch(person, household)
        return None

    def add_person_to_household(self, house_number: int, person: Optional[Person]) -> bool:
        """
        Add a resident to an existing household.

        Returns:
            False if the household does not exist or person is None, True otherwise

        Raises:
            DuplicateIdError: If the household already has a member with that id
        """
        household = self.get_household_by_number(house_number)
        if household is None or person is None:
            return False
        household.add_member(person)
        return True

    def remove_person_from_household(self, house_number: int, key: str) -> bool:
        household = self.get_household_by_number(house_number)
        if household is None:
            return False
        return household.remove_member_by_id(key)

    def edit_person_in_household(
        self,
        house_number: int,
        key: str,
        updated: Optional[Person],
    ) -> bool:
        """
        Replace a resident's record with ``updated``, keeping its position.

        Returns:
            False if the household or the resident does not exist
        """
        household = self.get_household_by_number(house_number)
        if household is None or updated is None:
            return False
        return household.replace_member(key, updated)

    def get_households_with_most_members(self) -> list[Household]:
        """Every household tied at the largest member count ([] when empty)."""
        if not self._households:
            return []
        most = max(h.member_count for h in self._households.values())
        return [h for h in self._households.values() if h.member_count == most]

    def get_households_with_fewest_members(self) -> list[Household]:
        """Every household tied at the smallest member count ([] when empty)."""
        if not self._households:
            return []
        fewest = min(h.member_count for h in self._households.values())
        return [h for h in self._households.values() if h.member_count == fewest]

    def get_people_sorted_by_age(self, ascending: bool = True) -> list[RankedPerson]:
        """
        All residents with their house numbers, ordered by age.

        The sort is stable in both directions: residents of equal age keep
        household order, then member order.
        """
        people = [
            RankedPerson(person, household.house_number)
            for household in self._households.values()
            for person in household.members
        ]
        return sorted(people, key=lambda entry: entry.person.age, reverse=not ascending)
