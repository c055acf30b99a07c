"""
Statistics Reports

Read-only summaries of a household or of the whole neighborhood, shaped for
the presentation layer to display without touching the aggregate.

These reports are computed on demand from the live aggregate; they are
snapshots and do not track later changes.
"""

from typing import Optional

from pydantic import BaseModel, Field

from neighborhood_registry.models.household import Household
from neighborhood_registry.models.neighborhood import Neighborhood


class HouseholdStatistics(BaseModel):
    """Member breakdown for one household."""

    house_number: int
    address: Optional[str] = None
    member_count: int = Field(ge=0)
    adult_count: int = Field(ge=0)
    child_count: int = Field(ge=0)
    average_age: float = Field(
        ge=0.0,
        description="Mean member age (0 for an empty household)"
    )
    oldest_member: Optional[str] = Field(
        default=None,
        description="Full name of the oldest member (first added on ties)"
    )
    youngest_member: Optional[str] = Field(
        default=None,
        description="Full name of the youngest member (first added on ties)"
    )


class MembershipExtremes(BaseModel):
    """Households tied at one end of the member-count range."""

    member_count: int = Field(ge=0)
    house_numbers: list[int] = Field(default_factory=list)


class NeighborhoodStatistics(BaseModel):
    """Totals across the neighborhood."""

    household_count: int = Field(ge=0)
    total_population: int = Field(ge=0)
    total_adults: int = Field(ge=0)
    total_children: int = Field(ge=0)
    average_household_size: float = Field(ge=0.0)

    # None when the neighborhood has no households
    most_members: Optional[MembershipExtremes] = None
    fewest_members: Optional[MembershipExtremes] = None


def household_statistics(household: Household) -> HouseholdStatistics:
    """Summarize one household."""
    oldest = household.get_oldest_member()
    youngest = household.get_youngest_member()
    return HouseholdStatistics(
        house_number=household.house_number,
        address=household.address,
        member_count=household.member_count,
        adult_count=household.adult_count,
        child_count=household.child_count,
        average_age=household.get_average_age(),
        oldest_member=oldest.full_name if oldest else None,
        youngest_member=youngest.full_name if youngest else None,
    )


def _extremes(households: list[Household]) -> Optional[MembershipExtremes]:
    if not households:
        return None
    return MembershipExtremes(
        member_count=households[0].member_count,
        house_numbers=[h.house_number for h in households],
    )


def neighborhood_statistics(neighborhood: Neighborhood) -> NeighborhoodStatistics:
    """Summarize the whole neighborhood."""
    household_count = neighborhood.household_count
    population = neighborhood.total_population
    return NeighborhoodStatistics(
        household_count=household_count,
        total_population=population,
        total_adults=neighborhood.total_adults,
        total_children=neighborhood.total_children,
        average_household_size=population / household_count if household_count else 0.0,
        most_members=_extremes(neighborhood.get_households_with_most_members()),
        fewest_members=_extremes(neighborhood.get_households_with_fewest_members()),
    )
