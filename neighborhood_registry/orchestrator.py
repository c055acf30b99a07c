"""
Main Orchestrator for the Neighborhood Registry

This module ties the registry aggregate, the storage backend and the audit
logger together behind one controller. Presentation layers (console menus,
desktop forms) call the controller and only display or collect plain data.

DESIGN DECISION: Failures use a single channel. Lookups that find nothing
return None/False; rule violations (duplicate house number, duplicate person
id, malformed file) raise. The controller audits a rejected operation and
re-raises the original exception unchanged.
"""

from typing import Optional

from neighborhood_registry.audit import AuditLogger, configure_logging
from neighborhood_registry.config import RegistrySettings, get_settings
from neighborhood_registry.models.audit import AuditEventBuilder
from neighborhood_registry.models.errors import RegistryError
from neighborhood_registry.models.household import Household
from neighborhood_registry.models.neighborhood import (
    Neighborhood,
    PersonMatch,
    RankedPerson,
)
from neighborhood_registry.models.person import Person
from neighborhood_registry.queries import (
    HouseholdStatistics,
    NeighborhoodStatistics,
    household_statistics,
    neighborhood_statistics,
)
from neighborhood_registry.services.storage import (
    FlatFileNeighborhoodStorage,
    NeighborhoodStorageInterface,
    StorageError,
)
from neighborhood_registry.services.storage.interface import PathLike


class NeighborhoodController:
    """
    The registry's API surface for presentation layers.

    Every mutation and every load/save is written to the audit log.
    """

    def __init__(
        self,
        neighborhood: Optional[Neighborhood] = None,
        storage: Optional[NeighborhoodStorageInterface] = None,
        audit_logger: Optional[AuditLogger] = None,
        settings: Optional[RegistrySettings] = None,
    ):
        self._settings = settings or get_settings()
        self._neighborhood = neighborhood if neighborhood is not None else Neighborhood()
        self._storage = storage or FlatFileNeighborhoodStorage(self._settings.file_encoding)
        self._audit_logger = audit_logger or AuditLogger()

    @property
    def neighborhood(self) -> Neighborhood:
        return self._neighborhood

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit_logger

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_households(self) -> list[Household]:
        return self._neighborhood.households

    def get_household(self, house_number: int) -> Optional[Household]:
        return self._neighborhood.get_household_by_number(house_number)

    def get_household_count(self) -> int:
        return self._neighborhood.household_count

    def get_total_population(self) -> int:
        return self._neighborhood.total_population

    def get_total_adults(self) -> int:
        return self._neighborhood.total_adults

    def get_total_children(self) -> int:
        return self._neighborhood.total_children

    def find_person(self, key: str) -> Optional[PersonMatch]:
        """Find a resident anywhere in the neighborhood by id or id number."""
        return self._neighborhood.find_person_by_id(key)

    def get_people_sorted_by_age(self, ascending: bool = True) -> list[RankedPerson]:
        return self._neighborhood.get_people_sorted_by_age(ascending)

    def get_households_with_most_members(self) -> list[Household]:
        return self._neighborhood.get_households_with_most_members()

    def get_households_with_fewest_members(self) -> list[Household]:
        return self._neighborhood.get_households_with_fewest_members()

    def get_household_statistics(self, house_number: int) -> Optional[HouseholdStatistics]:
        household = self.get_household(house_number)
        if household is None:
            return None
        return household_statistics(household)

    def get_neighborhood_statistics(self) -> NeighborhoodStatistics:
        return neighborhood_statistics(self._neighborhood)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_household(self, household: Household) -> None:
        """
        Add a household.

        Raises:
            DuplicateHouseNumberError: If the house number is already taken
        """
        try:
            self._neighborhood.add_household(household)
        except RegistryError as e:
            self._reject("add_household", e, house_number=household.house_number)
            raise

        self._audit_logger.log(
            AuditEventBuilder.household_added(household.house_number, household.address)
        )

    def remove_household(self, house_number: int) -> bool:
        household = self.get_household(house_number)
        if household is None:
            return False

        self._neighborhood.remove_household(house_number)
        self._audit_logger.log(
            AuditEventBuilder.household_removed(house_number, household.member_count)
        )
        return True

    def add_person_to_household(self, house_number: int, person: Optional[Person]) -> bool:
        """
        Add a resident to an existing household.

        Returns:
            False if the household does not exist or person is None

        Raises:
            DuplicateIdError: If the household already has a member with that id
        """
        try:
            added = self._neighborhood.add_person_to_household(house_number, person)
        except RegistryError as e:
            self._reject("add_person_to_household", e, house_number=house_number)
            raise

        if added:
            self._audit_logger.log(
                AuditEventBuilder.person_added(house_number, person.id, person.person_type)
            )
        return added

    def remove_person_from_household(self, house_number: int, key: str) -> bool:
        removed = self._neighborhood.remove_person_from_household(house_number, key)
        if removed:
            self._audit_logger.log(AuditEventBuilder.person_removed(house_number, key))
        return removed

    def edit_person(self, house_number: int, key: str, updated: Optional[Person]) -> bool:
        """
        Replace a resident's record in place.

        Build ``updated`` with Person.replace() to keep the resident's id.

        Returns:
            False if the household or the resident does not exist

        Raises:
            DuplicateIdError: If updated.id belongs to another member
        """
        try:
            edited = self._neighborhood.edit_person_in_household(house_number, key, updated)
        except RegistryError as e:
            self._reject("edit_person", e, house_number=house_number, key=key)
            raise

        if edited:
            self._audit_logger.log(
                AuditEventBuilder.person_updated(house_number, key, updated.id)
            )
        return edited

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def load(self, path: Optional[PathLike] = None, merge: bool = True) -> list[int]:
        """
        Load households from storage.

        With merge=True, loaded households are added to the current
        neighborhood and those whose house number already exists are skipped.
        With merge=False, the loaded neighborhood replaces the current one.

        Returns:
            House numbers that were skipped because they already existed

        Raises:
            StorageError: If the file cannot be read or parsed (nothing changes)
        """
        path = path if path is not None else self._settings.data_file
        try:
            loaded = self._storage.load(path)
        except StorageError as e:
            self._audit_logger.log(
                AuditEventBuilder.persistence_failed(str(path), saving=False, error_message=str(e))
            )
            raise

        skipped = []
        if merge:
            for household in loaded.households:
                if self._neighborhood.get_household_by_number(household.house_number) is not None:
                    skipped.append(household.house_number)
                else:
                    self._neighborhood.add_household(household)
        else:
            self._neighborhood = loaded

        self._audit_logger.log(
            AuditEventBuilder.neighborhood_loaded(
                str(path),
                loaded.household_count,
                loaded.total_population,
                skipped,
            )
        )
        return skipped

    def save(self, path: Optional[PathLike] = None) -> None:
        """
        Write the neighborhood to storage.

        Raises:
            StorageError: If the file cannot be written
        """
        path = path if path is not None else self._settings.data_file
        try:
            self._storage.save(self._neighborhood, path)
        except StorageError as e:
            self._audit_logger.log(
                AuditEventBuilder.persistence_failed(str(path), saving=True, error_message=str(e))
            )
            raise

        self._audit_logger.log(
            AuditEventBuilder.neighborhood_saved(
                str(path),
                self._neighborhood.household_count,
                self._neighborhood.total_population,
            )
        )

    def _reject(self, operation: str, error: Exception, **details) -> None:
        self._audit_logger.log(
            AuditEventBuilder.operation_rejected(
                operation,
                type(error).__name__,
                str(error),
                details,
            )
        )


def create_controller(settings: Optional[RegistrySettings] = None) -> NeighborhoodController:
    """
    Create a controller wired with the configured storage and logging.

    This is the entry point presentation layers use at startup.
    """
    settings = settings or get_settings()
    configure_logging(settings)
    return NeighborhoodController(
        storage=FlatFileNeighborhoodStorage(settings.file_encoding),
        settings=settings,
    )
