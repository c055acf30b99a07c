"""
Flat Text File Storage Implementation

The neighborhood is stored as plain text, one resident per line, fields
separated by commas, no header row:

    Adult: house_number,address,Adult,full_name,age,occupation,id_number,date_of_birth
    Child: house_number,address,Child,full_name,age,school,id_number,date_of_birth,grade

Dates use month/day/year with a 12-hour clock, e.g. ``3/14/1985 12:00:00 AM``.

TRADEOFFS:
- No quoting or escaping. A field containing a comma corrupts its line; we log
  a warning on write but do not refuse it.
- Households without members produce no lines and do not survive a round trip.
- Person ids are not stored; every load generates fresh ones.
- A child's school class is not stored; it is derived from the grade on load.

Reading is all-or-nothing: the first record that fails to parse aborts the
whole load and no partial neighborhood is returned.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

import structlog

from neighborhood_registry.config import get_settings
from neighborhood_registry.models.errors import RegistryError
from neighborhood_registry.models.household import Household
from neighborhood_registry.models.neighborhood import Neighborhood
from neighborhood_registry.models.person import Adult, Child, Person
from neighborhood_registry.services.storage.interface import (
    MalformedRecordError,
    NeighborhoodStorageInterface,
    PathLike,
    StorageIOError,
)


logger = structlog.get_logger(__name__)


# Column layouts
ADULT_COLUMNS = [
    "house_number",
    "address",
    "person_type",
    "full_name",
    "age",
    "occupation",
    "id_number",
    "date_of_birth",
]

CHILD_COLUMNS = [
    "house_number",
    "address",
    "person_type",
    "full_name",
    "age",
    "school",
    "id_number",
    "date_of_birth",
    "grade",
]

FIELD_SEPARATOR = ","
MIN_FIELD_COUNT = 7
TIMESTAMP_FORMAT = "%m/%d/%Y %I:%M:%S %p"


def format_timestamp(moment: datetime) -> str:
    """Render a timestamp as M/D/YYYY h:mm:ss AM|PM (no zero padding on M, D, h)."""
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return (
        f"{moment.month}/{moment.day}/{moment.year} "
        f"{hour}:{moment.minute:02d}:{moment.second:02d} {meridiem}"
    )


def parse_timestamp(text: str) -> datetime:
    """Parse a timestamp written by format_timestamp (zero padding optional)."""
    return datetime.strptime(text.strip(), TIMESTAMP_FORMAT)


class FlatFileNeighborhoodStorage(NeighborhoodStorageInterface):
    """
    Comma-separated text file implementation of neighborhood storage.

    The codec halves (dumps/loads) work on strings; save/load add the file I/O.
    """

    def __init__(self, encoding: Optional[str] = None):
        self._encoding = encoding or get_settings().file_encoding

    def _person_to_row(self, household: Household, person: Person) -> Optional[list[str]]:
        """Convert a resident to its line fields; None for unsupported variants."""
        values = {
            "house_number": str(household.house_number),
            "address": household.address or "",
            "full_name": person.full_name,
            "age": str(person.age),
            "id_number": person.id_number,
            "date_of_birth": format_timestamp(person.date_of_birth),
        }
        if isinstance(person, Adult):
            columns = ADULT_COLUMNS
            values["person_type"] = "Adult"
            values["occupation"] = person.occupation
        elif isinstance(person, Child):
            columns = CHILD_COLUMNS
            values["person_type"] = "Child"
            values["school"] = person.school
            values["grade"] = str(person.grade)
        else:
            logger.warning(
                "unsupported_person_skipped",
                house_number=household.house_number,
                person_id=person.id,
                person_class=type(person).__name__,
            )
            return None

        row = [values[column] for column in columns]
        if any(FIELD_SEPARATOR in value or "\n" in value for value in row):
            logger.warning(
                "field_contains_separator",
                house_number=household.house_number,
                person_id=person.id,
            )
        return row

    def _row_to_person(self, fields: list[str]) -> Person:
        """
        Convert line fields to an Adult or a Child.

        The type tag picks the column layout; any tag other than "Adult"
        (case-insensitive) reads as a Child.
        """
        person_type = fields[2].strip().strip('"') if len(fields) > 2 else ""
        is_adult = person_type.lower() == "adult"
        columns = ADULT_COLUMNS if is_adult else CHILD_COLUMNS
        record = dict(zip(columns, fields))

        def safe_get(column: str, default: str = "") -> str:
            return record.get(column, default).strip()

        full_name = safe_get("full_name")
        age = int(safe_get("age"))
        id_number = safe_get("id_number")

        date_text = safe_get("date_of_birth")
        if not date_text:
            raise ValueError("Date of birth is missing")
        date_of_birth = parse_timestamp(date_text)

        if is_adult:
            return Adult.create(
                full_name=full_name,
                age=age,
                occupation=safe_get("occupation"),
                id_number=id_number or None,
                date_of_birth=date_of_birth,
            )

        grade_text = safe_get("grade")
        return Child.for_grade(
            full_name=full_name,
            age=age,
            grade=int(grade_text) if grade_text else 0,
            birth_certificate_number=id_number,
            school=safe_get("school"),
            date_of_birth=date_of_birth,
        )

    def dumps(self, neighborhood: Neighborhood) -> str:
        """Serialize a neighborhood to file text."""
        lines = []
        for household in neighborhood.households:
            if household.member_count == 0:
                logger.warning(
                    "empty_household_dropped",
                    house_number=household.house_number,
                )
                continue
            for person in household.members:
                row = self._person_to_row(household, person)
                if row is not None:
                    lines.append(FIELD_SEPARATOR.join(row))
        return "".join(f"{line}\n" for line in lines)

    def loads(self, text: str) -> Neighborhood:
        """
        Parse file text into a new neighborhood.

        The first line seen for a house number creates the household and fixes
        its address; address values on later lines for that house are ignored.

        Raises:
            MalformedRecordError: If any record fails to parse or validate
        """
        neighborhood = Neighborhood()

        for line_number, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            fields = line.split(FIELD_SEPARATOR)
            if len(fields) < MIN_FIELD_COUNT:
                logger.debug(
                    "short_record_skipped",
                    line_number=line_number,
                    field_count=len(fields),
                )
                continue

            try:
                house_number = int(fields[0])
                household = neighborhood.get_household_by_number(house_number)
                if household is None:
                    household = Household(
                        house_number=house_number,
                        address=fields[1].strip() or None,
                    )
                    neighborhood.add_household(household)
                household.add_member(self._row_to_person(fields))
            except (ValueError, RegistryError) as e:
                raise MalformedRecordError(str(e), line_number) from e

        return neighborhood

    def load(self, path: PathLike) -> Neighborhood:
        """Read a neighborhood from a text file."""
        try:
            text = Path(path).read_text(encoding=self._encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise StorageIOError(f"Error reading from file {path}: {e}") from e

        neighborhood = self.loads(text)
        logger.info(
            "neighborhood_file_read",
            path=str(path),
            household_count=neighborhood.household_count,
            population=neighborhood.total_population,
        )
        return neighborhood

    def save(self, neighborhood: Neighborhood, path: PathLike) -> None:
        """Write a neighborhood to a text file, replacing its contents."""
        text = self.dumps(neighborhood)
        try:
            Path(path).write_text(text, encoding=self._encoding)
        except OSError as e:
            raise StorageIOError(f"Error writing to file {path}: {e}") from e

        logger.info(
            "neighborhood_file_written",
            path=str(path),
            household_count=neighborhood.household_count,
            population=neighborhood.total_population,
        )
