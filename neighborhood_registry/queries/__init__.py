"""Statistics reports package."""

from neighborhood_registry.queries.statistics import (
    HouseholdStatistics,
    MembershipExtremes,
    NeighborhoodStatistics,
    household_statistics,
    neighborhood_statistics,
)

__all__ = [
    "HouseholdStatistics",
    "MembershipExtremes",
    "NeighborhoodStatistics",
    "household_statistics",
    "neighborhood_statistics",
]
