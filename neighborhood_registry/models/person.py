"""
Resident Models for the Neighborhood Registry

A resident is either an Adult or a Child. Both variants share the same core
fields and differ in their age range and in the variant-specific fields they
carry (occupation for adults; school class, school and grade for children).

DESIGN DECISION: Validation runs on construction AND on every assignment
(validate_assignment=True). A failed assignment raises and leaves the model
exactly as it was, so a half-updated resident is never observable.

The ``id`` field is the resident's identity inside the registry. It is
generated once, when the model is built, and is frozen afterwards.
"""

from datetime import date, datetime, time
from typing import Any, ClassVar, Literal, Optional
from uuid import uuid4

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic_core import PydanticCustomError

from neighborhood_registry.models.errors import EMPTY_FIELD, OUT_OF_RANGE


MAX_LIFESPAN_YEARS = 120
PLACEHOLDER_ID_NUMBER_LENGTH = 12


def new_person_id() -> str:
    """Generate a fresh, process-unique person id."""
    return uuid4().hex


def placeholder_id_number() -> str:
    """Synthesize a 12-character id number for adults registered without one."""
    return uuid4().hex[:PLACEHOLDER_ID_NUMBER_LENGTH].upper()


def years_before(moment: datetime, years: int) -> datetime:
    """Shift a timestamp back by whole calendar years (Feb 29 falls to Feb 28)."""
    try:
        return moment.replace(year=moment.year - years)
    except ValueError:
        return moment.replace(year=moment.year - years, day=28)


def earliest_birth_date(now: Optional[datetime] = None) -> datetime:
    """The oldest date of birth the registry accepts."""
    return years_before(now or datetime.now(), MAX_LIFESPAN_YEARS)


def _require_text(value: Optional[str], field_label: str) -> str:
    if value is None or not value.strip():
        raise PydanticCustomError(
            EMPTY_FIELD,
            "{field} must not be empty",
            {"field": field_label},
        )
    return value


class Person(BaseModel):
    """
    Fields and rules shared by every resident.

    Subclasses set ``age_bounds`` and a literal ``person_type`` tag, which is
    the only thing the codec and the statistics branch on.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
    )

    age_bounds: ClassVar[range] = range(0, MAX_LIFESPAN_YEARS + 1)
    field_aliases: ClassVar[dict[str, str]] = {}

    id: str = Field(
        default_factory=new_person_id,
        frozen=True,
        description="Registry identity, generated once and never reused"
    )
    full_name: str = Field(
        ...,
        description="Resident's full name"
    )
    age: int = Field(
        ...,
        description="Age in whole years"
    )
    id_number: str = Field(
        ...,
        description="ID card number (adults) or birth certificate number (children)"
    )
    date_of_birth: datetime = Field(
        ...,
        description="Date of birth; defaults to the same calendar day, age years ago"
    )

    @model_validator(mode="before")
    @classmethod
    def default_date_of_birth(cls, data: Any) -> Any:
        """Derive a date of birth from the age when none is given."""
        if isinstance(data, dict) and data.get("date_of_birth") is None:
            try:
                age = int(data.get("age"))
            except (TypeError, ValueError):
                return data
            # Out-of-range ages are left for validate_age to report.
            if age in cls.age_bounds:
                data = dict(data)
                today = datetime.combine(date.today(), time.min)
                data["date_of_birth"] = years_before(today, age)
        return data

    @field_validator("id", mode="before")
    @classmethod
    def generate_missing_id(cls, v: Any) -> Any:
        """Blank ids are replaced by a generated one, never kept empty."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return new_person_id()
        return v

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v: str) -> str:
        return _require_text(v, "Full name")

    @field_validator("id_number")
    @classmethod
    def validate_id_number(cls, v: str) -> str:
        return _require_text(v, "ID number")

    @field_validator("age")
    @classmethod
    def validate_age(cls, v: int) -> int:
        bounds = cls.age_bounds
        if v not in bounds:
            raise PydanticCustomError(
                OUT_OF_RANGE,
                "{kind} age must be between {low} and {high}, got {age}",
                {
                    "kind": cls.__name__,
                    "low": bounds.start,
                    "high": bounds.stop - 1,
                    "age": v,
                },
            )
        return v

    @field_validator("date_of_birth")
    @classmethod
    def validate_date_of_birth(cls, v: datetime) -> datetime:
        now = datetime.now(v.tzinfo) if v.tzinfo else datetime.now()
        earliest = earliest_birth_date(now)
        if v.date() < earliest.date():
            raise PydanticCustomError(
                OUT_OF_RANGE,
                "Date of birth cannot be earlier than {earliest}",
                {"earliest": earliest.date().isoformat()},
            )
        return v

    def matches(self, key: str) -> bool:
        """True when ``key`` is this resident's id or id number."""
        return key == self.id or key == self.id_number

    def replace(self, **changes: Any) -> "Person":
        """
        Return a re-validated copy with ``changes`` applied.

        The identity is kept; asking to change ``id`` is an error, and so is
        naming a field the resident does not have. Keys listed in
        ``field_aliases`` are accepted under their alias.
        """
        changes = {self.field_aliases.get(key, key): value for key, value in changes.items()}
        if "id" in changes:
            raise ValueError("A person's id cannot be changed")
        unknown = sorted(set(changes) - set(type(self).model_fields))
        if unknown:
            raise ValueError(f"Unknown fields for {type(self).__name__}: {', '.join(unknown)}")
        data = self.model_dump()
        data.update(changes)
        return type(self).model_validate(data)


class Adult(Person):
    """A resident aged 18 to 120 with an occupation and an ID card number."""

    age_bounds: ClassVar[range] = range(18, MAX_LIFESPAN_YEARS + 1)

    person_type: Literal["Adult"] = Field(default="Adult", frozen=True)
    occupation: str = Field(
        ...,
        description="Free-text occupation"
    )

    @field_validator("occupation")
    @classmethod
    def validate_occupation(cls, v: str) -> str:
        return _require_text(v, "Occupation")

    @classmethod
    def create(
        cls,
        full_name: str,
        age: int,
        occupation: str,
        id_number: Optional[str] = None,
        date_of_birth: Optional[datetime] = None,
    ) -> "Adult":
        """Build an adult, synthesizing a placeholder id number if none is given."""
        return cls(
            full_name=full_name,
            age=age,
            occupation=occupation,
            id_number=id_number or placeholder_id_number(),
            date_of_birth=date_of_birth,
        )


class Child(Person):
    """
    A resident younger than 18.

    The id number is the birth certificate number and can be read or written
    under either name. Children always report "Student" as occupation.
    """

    age_bounds: ClassVar[range] = range(0, 18)
    field_aliases: ClassVar[dict[str, str]] = {"birth_certificate_number": "id_number"}

    person_type: Literal["Child"] = Field(default="Child", frozen=True)
    id_number: str = Field(
        ...,
        validation_alias=AliasChoices("id_number", "birth_certificate_number"),
        description="Birth certificate number"
    )
    school_class: str = Field(
        ...,
        description="Class attended, e.g. 'Grade 4'"
    )
    school: str = Field(
        default="",
        description="School name"
    )
    grade: int = Field(
        default=0,
        description="School grade"
    )

    @field_validator("school_class")
    @classmethod
    def validate_school_class(cls, v: str) -> str:
        return _require_text(v, "School class")

    @classmethod
    def for_grade(
        cls,
        full_name: str,
        age: int,
        grade: int,
        birth_certificate_number: str,
        school: str = "",
        date_of_birth: Optional[datetime] = None,
    ) -> "Child":
        """Build a child whose school class is derived from the grade."""
        return cls(
            full_name=full_name,
            age=age,
            grade=grade,
            school_class=f"Grade {grade}",
            school=school,
            id_number=birth_certificate_number,
            date_of_birth=date_of_birth,
        )

    @property
    def occupation(self) -> str:
        return "Student"

    @property
    def birth_certificate_number(self) -> str:
        return self.id_number

    @birth_certificate_number.setter
    def birth_certificate_number(self, value: str) -> None:
        self.id_number = value

    def get_education_level(self) -> str:
        """Education stage implied by the child's age."""
        if self.age < 5:
            return "Preschool"
        if self.age < 11:
            return "Elementary School"
        if self.age < 15:
            return "Middle School"
        return "High School"
