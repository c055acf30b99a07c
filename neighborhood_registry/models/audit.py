"""
Audit Models for the Neighborhood Registry

Every change to the registry and every load/save is recorded as an audit
event. This provides:
1. Traceability of who-lives-where changes
2. Debugging information when a file fails to load
3. A history the presentation layer can show

DESIGN DECISION: Audit history is append-only. We never delete or modify events.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Households
    HOUSEHOLD_ADDED = "household_added"
    HOUSEHOLD_REMOVED = "household_removed"

    # Residents
    PERSON_ADDED = "person_added"
    PERSON_REMOVED = "person_removed"
    PERSON_UPDATED = "person_updated"

    # Persistence
    NEIGHBORHOOD_LOADED = "neighborhood_loaded"
    NEIGHBORHOOD_SAVED = "neighborhood_saved"
    LOAD_FAILED = "load_failed"
    SAVE_FAILED = "save_failed"

    # Rejected operations
    OPERATION_REJECTED = "operation_rejected"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    entity_id is a string because it holds either a house number or a
    person id.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred"
    )

    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity ('household', 'person', 'file')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="House number, person id or file path"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.household_added(5, "1 Main St")
        event = AuditEventBuilder.person_removed(5, person_id)
    """

    @staticmethod
    def household_added(house_number: int, address: Optional[str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.HOUSEHOLD_ADDED,
            entity_type="household",
            entity_id=str(house_number),
            description=f"Household {house_number} added",
            details={"address": address},
        )

    @staticmethod
    def household_removed(house_number: int, member_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.HOUSEHOLD_REMOVED,
            entity_type="household",
            entity_id=str(house_number),
            description=f"Household {house_number} removed with {member_count} members",
            details={"member_count": member_count},
        )

    @staticmethod
    def person_added(house_number: int, person_id: str, person_type: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PERSON_ADDED,
            entity_type="person",
            entity_id=person_id,
            description=f"{person_type} added to household {house_number}",
            details={"house_number": house_number, "person_type": person_type},
        )

    @staticmethod
    def person_removed(house_number: int, key: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PERSON_REMOVED,
            entity_type="person",
            entity_id=key,
            description=f"Person removed from household {house_number}",
            details={"house_number": house_number},
        )

    @staticmethod
    def person_updated(house_number: int, key: str, person_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PERSON_UPDATED,
            entity_type="person",
            entity_id=person_id,
            description=f"Person information updated in household {house_number}",
            details={"house_number": house_number, "lookup_key": key},
        )

    @staticmethod
    def neighborhood_loaded(
        path: str,
        household_count: int,
        population: int,
        skipped_house_numbers: list[int],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.NEIGHBORHOOD_LOADED,
            severity=AuditSeverity.WARNING if skipped_house_numbers else AuditSeverity.INFO,
            entity_type="file",
            entity_id=path,
            description=f"Loaded {household_count} households ({population} people)",
            details={
                "household_count": household_count,
                "population": population,
                "skipped_house_numbers": skipped_house_numbers,
            },
        )

    @staticmethod
    def neighborhood_saved(path: str, household_count: int, population: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.NEIGHBORHOOD_SAVED,
            entity_type="file",
            entity_id=path,
            description=f"Saved {household_count} households ({population} people)",
            details={"household_count": household_count, "population": population},
        )

    @staticmethod
    def persistence_failed(path: str, saving: bool, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED if saving else AuditEventType.LOAD_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="file",
            entity_id=path,
            description=f"Failed to {'save' if saving else 'load'} neighborhood file",
            error_message=error_message,
        )

    @staticmethod
    def operation_rejected(
        operation: str,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.OPERATION_REJECTED,
            severity=AuditSeverity.WARNING,
            description=f"Operation rejected: {operation} ({error_type})",
            error_message=error_message,
            details=details or {},
        )
