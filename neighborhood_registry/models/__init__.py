"""
Data Models Package

This package contains the registry aggregate (Neighborhood, Household,
Adult, Child) and the audit models. All residents flowing through the system
must conform to these schemas.
"""

from neighborhood_registry.models.person import (
    Adult,
    Child,
    Person,
)
from neighborhood_registry.models.household import Household
from neighborhood_registry.models.neighborhood import (
    Neighborhood,
    PersonMatch,
    RankedPerson,
)
from neighborhood_registry.models.errors import (
    EMPTY_FIELD,
    OUT_OF_RANGE,
    DuplicateHouseNumberError,
    DuplicateIdError,
    EmptyArgumentError,
    RegistryError,
)
from neighborhood_registry.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Registry models
    "Adult",
    "Child",
    "Household",
    "Neighborhood",
    "Person",
    "PersonMatch",
    "RankedPerson",
    # Errors
    "EMPTY_FIELD",
    "OUT_OF_RANGE",
    "DuplicateHouseNumberError",
    "DuplicateIdError",
    "EmptyArgumentError",
    "RegistryError",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
