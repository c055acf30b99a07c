"""
Household Model

A household is a uniquely numbered residence that owns an ordered list of
residents.

DESIGN DECISION: Members are kept in an insertion-ordered dict keyed by person
id. Duplicate detection is a single key lookup while iteration still follows
the order in which residents were added, which the listing and the stable
age sort rely on.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from neighborhood_registry.models.errors import DuplicateIdError, EmptyArgumentError
from neighborhood_registry.models.person import Adult, Child, Person


class Household(BaseModel):
    """
    A residence and its members.

    Members are never shared with another household; removing a member drops
    the household's only reference to it.
    """
    model_config = ConfigDict(str_strip_whitespace=True, validate_assignment=True)

    house_number: int = Field(
        ...,
        gt=0,
        frozen=True,
        description="House number, unique within the neighborhood"
    )
    address: Optional[str] = Field(
        default=None,
        description="Street address"
    )

    _members: dict[str, Person] = PrivateAttr(default_factory=dict)

    @property
    def members(self) -> list[Person]:
        """Members in insertion order (a copy)."""
        return list(self._members.values())

    @property
    def member_count(self) -> int:
        return len(self._members)

    @property
    def adult_count(self) -> int:
        return sum(1 for m in self._members.values() if isinstance(m, Adult))

    @property
    def child_count(self) -> int:
        return sum(1 for m in self._members.values() if isinstance(m, Child))

    def add_member(self, person: Person) -> None:
        """
        Append a resident.

        Raises:
            DuplicateIdError: If a member with the same id is already present
        """
        if person.id in self._members:
            raise DuplicateIdError(person.id, self.house_number)
        self._members[person.id] = person

    def find_member_by_id(self, key: str) -> Optional[Person]:
        """
        Find the first member whose id or id number equals ``key``.

        Returns:
            The member if found, None otherwise

        Raises:
            EmptyArgumentError: If key is empty
        """
        self._require_key(key)
        for person in self._members.values():
            if person.matches(key):
                return person
        return None

    def remove_member_by_id(self, key: str) -> bool:
        """Remove the first member matching ``key``. Returns True if one was removed."""
        person = self.find_member_by_id(key)
        if person is None:
            return False
        del self._members[person.id]
        return True

    def replace_member(self, key: str, person: Person) -> bool:
        """
        Swap the first member matching ``key`` for ``person``, keeping its position.

        Returns:
            True if a member was replaced, False if none matched

        Raises:
            DuplicateIdError: If person.id belongs to a different member
        """
        current = self.find_member_by_id(key)
        if current is None:
            return False
        if person.id != current.id and person.id in self._members:
            raise DuplicateIdError(person.id, self.house_number)

        entries = list(self._members.items())
        position = [member_id for member_id, _ in entries].index(current.id)
        entries[position] = (person.id, person)
        self._members = dict(entries)
        return True

    def get_average_age(self) -> float:
        """Mean member age; 0.0 for an empty household."""
        if not self._members:
            return 0.0
        return sum(m.age for m in self._members.values()) / len(self._members)

    def get_oldest_member(self) -> Optional[Person]:
        """
        Oldest member, or None when empty.

        Ties go to the member added first; ``max`` keeps the first maximal item.
        """
        if not self._members:
            return None
        return max(self._members.values(), key=lambda m: m.age)

    def get_youngest_member(self) -> Optional[Person]:
        """Youngest member, or None when empty. Ties go to the member added first."""
        if not self._members:
            return None
        return min(self._members.values(), key=lambda m: m.age)

    @staticmethod
    def _require_key(key: str) -> None:
        if key is None or not key.strip():
            raise EmptyArgumentError("Person id must not be empty")
