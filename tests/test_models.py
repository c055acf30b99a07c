"""
Tests for the Neighborhood Registry models

Test strategy:
1. Unit tests for each resident variant's validation rules
2. Household and neighborhood aggregate behaviour
3. No file I/O here (see test_storage.py)
"""

import pytest
from datetime import datetime
from pydantic import ValidationError

from neighborhood_registry.models import (
    EMPTY_FIELD,
    OUT_OF_RANGE,
    Adult,
    Child,
    DuplicateHouseNumberError,
    DuplicateIdError,
    EmptyArgumentError,
    Household,
    Neighborhood,
    PersonMatch,
)


def error_types(exc_info) -> set[str]:
    return {error["type"] for error in exc_info.value.errors()}


def make_adult(name: str = "Jane Doe", age: int = 40, **kwargs) -> Adult:
    kwargs.setdefault("occupation", "Engineer")
    kwargs.setdefault("id_number", f"ID-{name}")
    return Adult(full_name=name, age=age, **kwargs)


def make_child(name: str = "Tom Lee", age: int = 9, **kwargs) -> Child:
    kwargs.setdefault("school_class", "Grade 4")
    kwargs.setdefault("id_number", f"BC-{name}")
    return Child(full_name=name, age=age, **kwargs)


class TestAdult:
    """Tests for the Adult variant."""

    @pytest.mark.parametrize("age", [18, 19, 40, 119, 120])
    def test_valid_ages_accepted(self, age):
        """Test every boundary of the adult age range."""
        adult = make_adult(age=age)
        assert adult.age == age

    @pytest.mark.parametrize("age", [-1, 0, 17, 121])
    def test_invalid_ages_rejected(self, age):
        """Test that ages outside [18, 120] fail with out_of_range."""
        with pytest.raises(ValidationError) as exc_info:
            make_adult(age=age, date_of_birth=datetime(1985, 3, 14))
        assert OUT_OF_RANGE in error_types(exc_info)

    def test_age_validated_on_assignment(self):
        """Test that a failed assignment keeps the previous age."""
        adult = make_adult(age=40)
        with pytest.raises(ValidationError):
            adult.age = 12
        assert adult.age == 40

        adult.age = 41
        assert adult.age == 41

    @pytest.mark.parametrize("field", ["full_name", "occupation", "id_number"])
    def test_blank_text_fields_rejected(self, field):
        """Test that required text fields reject whitespace-only values."""
        kwargs = {"occupation": "Engineer", "id_number": "ID1", "full_name": "Jane Doe"}
        kwargs[field] = "   "
        with pytest.raises(ValidationError) as exc_info:
            Adult(age=30, **kwargs)
        assert EMPTY_FIELD in error_types(exc_info)

    def test_strips_whitespace(self):
        """Test that whitespace is stripped from names."""
        adult = make_adult(name="  Jane Doe  ")
        assert adult.full_name == "Jane Doe"

    def test_create_synthesizes_id_number(self):
        """Test that the convenience constructor fills in a 12-character id number."""
        first = Adult.create("Jane Doe", 40, "Engineer")
        second = Adult.create("John Doe", 42, "Teacher")
        assert len(first.id_number) == 12
        assert first.id_number != second.id_number

    def test_create_keeps_given_id_number(self):
        adult = Adult.create("Jane Doe", 40, "Engineer", "ID123")
        assert adult.id_number == "ID123"
        assert adult.person_type == "Adult"

    def test_ids_are_generated_and_unique(self):
        """Test that every resident gets its own id."""
        assert make_adult().id != make_adult().id

    def test_blank_id_is_replaced(self):
        """Test that an explicitly blank id is replaced, not kept."""
        adult = make_adult(id="  ")
        assert adult.id.strip()

    def test_id_is_frozen(self):
        """Test that the id cannot be reassigned."""
        adult = make_adult(id="p-1")
        with pytest.raises(ValidationError):
            adult.id = "p-2"
        assert adult.id == "p-1"

    def test_date_of_birth_too_old_rejected(self):
        """Test that a birth date more than 120 years ago is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            make_adult(date_of_birth=datetime(1800, 1, 1))
        assert OUT_OF_RANGE in error_types(exc_info)

    def test_date_of_birth_defaults_from_age(self):
        """Test that an omitted date of birth is derived from the age."""
        adult = make_adult(age=120)
        assert adult.date_of_birth.year == datetime.now().year - 120

    @pytest.mark.parametrize("age", [121, 5000, -3])
    def test_out_of_range_age_without_date_of_birth(self, age):
        """Test that an impossible age is reported as out of range, not as a date error."""
        with pytest.raises(ValidationError) as exc_info:
            Adult(full_name="Old Timer", age=age, occupation="Retired", id_number="ID1")
        assert OUT_OF_RANGE in error_types(exc_info)
        assert "value_error" not in error_types(exc_info)

    def test_numeric_text_age_derives_date_of_birth(self):
        adult = Adult(full_name="Jane Doe", age="40", occupation="Engineer", id_number="ID1")
        assert adult.age == 40
        assert adult.date_of_birth.year == datetime.now().year - 40

    def test_replace_revalidates_and_keeps_id(self):
        """Test that replace returns a validated copy with the same id."""
        adult = make_adult(age=40)
        updated = adult.replace(age=41, occupation="Architect")
        assert updated.id == adult.id
        assert updated.age == 41
        assert updated.occupation == "Architect"
        assert adult.age == 40

        with pytest.raises(ValidationError):
            adult.replace(age=10)

    def test_replace_refuses_new_id(self):
        with pytest.raises(ValueError, match="cannot be changed"):
            make_adult().replace(id="other")

    def test_replace_rejects_unknown_fields(self):
        adult = make_adult()
        with pytest.raises(ValueError, match="Unknown fields for Adult: school"):
            adult.replace(school="Oak Elem")


class TestChild:
    """Tests for the Child variant."""

    @pytest.mark.parametrize("age", [0, 1, 9, 17])
    def test_valid_ages_accepted(self, age):
        assert make_child(age=age).age == age

    @pytest.mark.parametrize("age", [-1, 18, 30])
    def test_invalid_ages_rejected(self, age):
        """Test that ages outside [0, 18) fail with out_of_range."""
        with pytest.raises(ValidationError) as exc_info:
            make_child(age=age, date_of_birth=datetime(2017, 6, 2))
        assert OUT_OF_RANGE in error_types(exc_info)

    def test_for_grade_derives_school_class(self):
        """Test the grade-based constructor."""
        child = Child.for_grade("Tom Lee", 9, 4, "BC456", school="Oak Elem")
        assert child.school_class == "Grade 4"
        assert child.school == "Oak Elem"
        assert child.grade == 4
        assert child.person_type == "Child"

    def test_occupation_is_student(self):
        assert make_child().occupation == "Student"

    def test_birth_certificate_number_alias(self):
        """Test that the birth certificate number is the id number."""
        child = Child(
            full_name="Tom Lee",
            age=9,
            school_class="Grade 4",
            birth_certificate_number="BC456",
        )
        assert child.id_number == "BC456"
        assert child.birth_certificate_number == "BC456"

        child.birth_certificate_number = "BC789"
        assert child.id_number == "BC789"

    def test_replace_accepts_birth_certificate_number(self):
        """Test that replace applies a change given under the alias name."""
        child = Child.for_grade("Tom Lee", 9, 4, "BC1")
        updated = child.replace(birth_certificate_number="BC2")
        assert updated.birth_certificate_number == "BC2"
        assert updated.id == child.id
        assert child.birth_certificate_number == "BC1"

    def test_replace_rejects_read_only_occupation(self):
        with pytest.raises(ValueError, match="Unknown fields for Child: occupation"):
            make_child().replace(occupation="Pilot")

    def test_blank_school_class_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            make_child(school_class=" ")
        assert EMPTY_FIELD in error_types(exc_info)

    def test_school_defaults_to_empty(self):
        child = make_child()
        assert child.school == ""
        assert child.grade == 0

    @pytest.mark.parametrize(
        "age,level",
        [
            (0, "Preschool"),
            (4, "Preschool"),
            (5, "Elementary School"),
            (10, "Elementary School"),
            (11, "Middle School"),
            (14, "Middle School"),
            (15, "High School"),
            (17, "High School"),
        ],
    )
    def test_education_level(self, age, level):
        """Test education level boundaries (lower bound inclusive)."""
        assert make_child(age=age).get_education_level() == level


class TestHousehold:
    """Tests for the Household aggregate."""

    def test_house_number_must_be_positive(self):
        with pytest.raises(ValidationError):
            Household(house_number=0)

    def test_house_number_is_frozen(self):
        household = Household(house_number=5)
        with pytest.raises(ValidationError):
            household.house_number = 6

    def test_add_member_preserves_order(self):
        household = Household(house_number=5, address="1 Main St")
        first, second, third = make_adult("A"), make_child("B"), make_adult("C")
        for person in (first, second, third):
            household.add_member(person)

        assert household.members == [first, second, third]
        assert household.adult_count == 2
        assert household.child_count == 1
        assert household.member_count == 3

    def test_duplicate_id_rejected(self):
        """Test that a second member with the same id fails and changes nothing."""
        household = Household(house_number=5)
        household.add_member(make_adult("A", id="p-1"))

        with pytest.raises(DuplicateIdError):
            household.add_member(make_adult("B", id="p-1"))
        assert household.member_count == 1

    def test_duplicate_id_number_allowed(self):
        """Test that only the registry id has to be unique."""
        household = Household(house_number=5)
        household.add_member(make_adult("A", id_number="SAME"))
        household.add_member(make_adult("B", id_number="SAME"))
        assert household.member_count == 2

    def test_find_member_by_id_or_id_number(self):
        household = Household(house_number=5)
        adult = make_adult(id_number="ID123")
        household.add_member(adult)

        assert household.find_member_by_id(adult.id) is adult
        assert household.find_member_by_id("ID123") is adult
        assert household.find_member_by_id("missing") is None

    def test_find_member_first_match_wins_across_id_kinds(self):
        """Test that an earlier id number match beats a later id match."""
        household = Household(house_number=5)
        first = make_adult("A", id_number="KEY")
        second = make_adult("B", id="KEY", id_number="OTHER")
        household.add_member(first)
        household.add_member(second)

        assert household.find_member_by_id("KEY") is first
        assert household.remove_member_by_id("KEY") is True
        assert household.members == [second]

    @pytest.mark.parametrize("key", ["", "   "])
    def test_blank_key_rejected(self, key):
        household = Household(house_number=5)
        with pytest.raises(EmptyArgumentError):
            household.find_member_by_id(key)
        with pytest.raises(EmptyArgumentError):
            household.remove_member_by_id(key)

    def test_remove_member_removes_first_match_only(self):
        household = Household(house_number=5)
        first = make_adult("A", id_number="SAME")
        second = make_adult("B", id_number="SAME")
        household.add_member(first)
        household.add_member(second)

        assert household.remove_member_by_id("SAME") is True
        assert household.members == [second]
        assert household.remove_member_by_id("unknown") is False

    def test_replace_member_keeps_position(self):
        household = Household(house_number=5)
        first, second, third = make_adult("A"), make_adult("B"), make_adult("C")
        for person in (first, second, third):
            household.add_member(person)

        updated = second.replace(occupation="Doctor")
        assert household.replace_member(second.id, updated) is True
        assert household.members == [first, updated, third]
        assert household.replace_member("unknown", updated) is False

    def test_replace_member_rejects_colliding_id(self):
        household = Household(house_number=5)
        first, second = make_adult("A"), make_adult("B")
        household.add_member(first)
        household.add_member(second)

        with pytest.raises(DuplicateIdError):
            household.replace_member(first.id, second)
        assert household.members == [first, second]

    def test_average_age(self):
        household = Household(house_number=5)
        assert household.get_average_age() == 0.0

        household.add_member(make_adult(age=40))
        household.add_member(make_child(age=10))
        assert household.get_average_age() == 25.0

    def test_oldest_and_youngest(self):
        household = Household(house_number=5)
        assert household.get_oldest_member() is None
        assert household.get_youngest_member() is None

        old = make_adult("Old", age=70)
        young = make_child("Young", age=3)
        household.add_member(make_adult("Mid", age=40))
        household.add_member(old)
        household.add_member(young)
        assert household.get_oldest_member() is old
        assert household.get_youngest_member() is young

    def test_ties_go_to_first_added(self):
        """Test that extremal members tie-break by member order."""
        household = Household(house_number=5)
        first = make_adult("First", age=40)
        second = make_adult("Second", age=40)
        household.add_member(first)
        household.add_member(second)
        assert household.get_oldest_member() is first
        assert household.get_youngest_member() is first


@pytest.fixture
def neighborhood() -> Neighborhood:
    """House 5 with one adult, house 7 with one child."""
    hood = Neighborhood()
    house5 = Household(house_number=5, address="1 Main St")
    house5.add_member(Adult.create("Jane Doe", 40, "Engineer", "ID123", datetime(1985, 3, 14)))
    house7 = Household(house_number=7, address="2 Oak St")
    house7.add_member(Child.for_grade("Tom Lee", 9, 4, "BC456", school="Oak Elem"))
    hood.add_household(house5)
    hood.add_household(house7)
    return hood


class TestNeighborhood:
    """Tests for the Neighborhood aggregate."""

    def test_totals(self, neighborhood):
        assert neighborhood.household_count == 2
        assert neighborhood.total_population == 2
        assert neighborhood.total_adults == 1
        assert neighborhood.total_children == 1

    def test_totals_follow_mutations(self, neighborhood):
        """Test that totals are recomputed, not cached."""
        neighborhood.get_household_by_number(7).add_member(make_adult("New"))
        assert neighborhood.total_population == 3
        assert neighborhood.total_adults == 2

    def test_duplicate_house_number_rejected(self, neighborhood):
        """Test that the count is unchanged after a rejected household."""
        with pytest.raises(DuplicateHouseNumberError):
            neighborhood.add_household(Household(house_number=5))
        assert neighborhood.household_count == 2

    def test_households_keep_insertion_order(self):
        hood = Neighborhood()
        for number in (9, 2, 5):
            hood.add_household(Household(house_number=number))
        assert hood.house_numbers == [9, 2, 5]

    def test_find_person_by_id(self, neighborhood):
        match = neighborhood.find_person_by_id("ID123")
        assert isinstance(match, PersonMatch)
        assert match.person.full_name == "Jane Doe"
        assert match.household.house_number == 5

        assert neighborhood.find_person_by_id("unknown") is None

    def test_find_person_returns_first_household_on_duplicates(self, neighborhood):
        """Test that a duplicated id number resolves to the first household."""
        neighborhood.get_household_by_number(7).add_member(make_adult(id_number="ID123"))
        match = neighborhood.find_person_by_id("ID123")
        assert match.household.house_number == 5

    def test_remove_household(self, neighborhood):
        assert neighborhood.remove_household(5) is True
        assert neighborhood.house_numbers == [7]
        assert neighborhood.total_population == 1
        assert neighborhood.remove_household(5) is False

    def test_add_person_to_household(self, neighborhood):
        assert neighborhood.add_person_to_household(5, make_child()) is True
        assert neighborhood.get_household_by_number(5).member_count == 2
        assert neighborhood.add_person_to_household(99, make_child()) is False
        assert neighborhood.add_person_to_household(5, None) is False

    def test_add_person_duplicate_id_propagates(self, neighborhood):
        """Test that a duplicate id raises instead of returning False."""
        person = make_adult(id="p-1")
        neighborhood.add_person_to_household(5, person)
        with pytest.raises(DuplicateIdError):
            neighborhood.add_person_to_household(5, person)

    def test_remove_person_from_household(self, neighborhood):
        assert neighborhood.remove_person_from_household(7, "BC456") is True
        assert neighborhood.remove_person_from_household(7, "BC456") is False
        assert neighborhood.remove_person_from_household(99, "ID123") is False

    def test_edit_person_in_household(self, neighborhood):
        jane = neighborhood.find_person_by_id("ID123").person
        assert neighborhood.edit_person_in_household(5, "ID123", jane.replace(age=41)) is True
        assert neighborhood.find_person_by_id("ID123").person.age == 41
        assert neighborhood.edit_person_in_household(99, "ID123", jane) is False
        assert neighborhood.edit_person_in_household(5, "unknown", jane) is False

    def test_most_and_fewest_members(self, neighborhood):
        """Test that every tied household is returned."""
        assert neighborhood.get_households_with_most_members() == neighborhood.households
        assert neighborhood.get_households_with_fewest_members() == neighborhood.households

        neighborhood.add_household(Household(house_number=9))
        neighborhood.get_household_by_number(7).add_member(make_adult())
        most = neighborhood.get_households_with_most_members()
        fewest = neighborhood.get_households_with_fewest_members()
        assert [h.house_number for h in most] == [7]
        assert [h.house_number for h in fewest] == [9]

    def test_extremes_empty(self):
        hood = Neighborhood()
        assert hood.get_households_with_most_members() == []
        assert hood.get_households_with_fewest_members() == []

    def test_people_sorted_by_age(self):
        hood = Neighborhood()
        first = Household(house_number=1)
        second = Household(house_number=2)
        a40 = make_adult("A40", age=40)
        c9 = make_child("C9", age=9)
        b30 = make_adult("B30", age=30)
        first.add_member(a40)
        first.add_member(c9)
        second.add_member(b30)
        hood.add_household(first)
        hood.add_household(second)

        ascending = hood.get_people_sorted_by_age(True)
        descending = hood.get_people_sorted_by_age(False)
        assert [p.person for p in ascending] == [c9, b30, a40]
        assert [p.house_number for p in ascending] == [1, 2, 1]
        assert descending == list(reversed(ascending))

    def test_sort_is_stable_in_both_directions(self):
        """Test that equal ages keep household then member order."""
        hood = Neighborhood()
        first = Household(house_number=1)
        second = Household(house_number=2)
        x = make_adult("X", age=30)
        y = make_adult("Y", age=30)
        z = make_adult("Z", age=30)
        young = make_child("Young", age=5)
        first.add_member(x)
        first.add_member(young)
        first.add_member(y)
        second.add_member(z)
        hood.add_household(first)
        hood.add_household(second)

        ascending = [p.person for p in hood.get_people_sorted_by_age(True)]
        descending = [p.person for p in hood.get_people_sorted_by_age(False)]
        assert ascending == [young, x, y, z]
        assert descending == [x, y, z, young]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
