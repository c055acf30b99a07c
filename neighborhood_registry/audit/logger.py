"""
Audit Logger

DESIGN DECISION: Every change to the registry is logged. This provides:
1. Traceability of who was added, moved or removed
2. Debugging capability when a file fails to load
3. A history the presentation layer can show

The audit logger:
- Writes every event to the structured log
- Keeps an append-only in-memory history for the running session
"""

import logging
from typing import Optional

import structlog

from neighborhood_registry.config import RegistrySettings
from neighborhood_registry.models.audit import AuditEvent, AuditSeverity


def _processors(json_logs: bool) -> list:
    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer()
    )
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ]


# Configure structlog for local logging. Loggers are not cached so that
# configure_logging() reaches loggers that have already been used.
structlog.configure(
    processors=_processors(json_logs=True),
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
)


def configure_logging(settings: RegistrySettings) -> None:
    """Apply the configured level and renderer to the structured log."""
    logging.basicConfig(format="%(message)s", level=settings.log_level)
    logging.getLogger().setLevel(settings.log_level)
    structlog.configure(processors=_processors(settings.json_logs))


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. In-memory history (for the presentation layer)
    """

    def __init__(self):
        self._history: list[AuditEvent] = []
        self._logger = structlog.get_logger("neighborhood_registry.audit")

    @property
    def history(self) -> list[AuditEvent]:
        """Recorded events, oldest first (a copy)."""
        return list(self._history)

    def log(self, event: AuditEvent) -> None:
        """Record an event and write it to the structured log."""
        self._history.append(event)

        log_dict = event.to_log_dict()
        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def events_for(self, entity_type: str, entity_id: Optional[str] = None) -> list[AuditEvent]:
        """Events about one entity type, optionally narrowed to one entity."""
        return [
            event for event in self._history
            if event.entity_type == entity_type
            and (entity_id is None or event.entity_id == entity_id)
        ]
