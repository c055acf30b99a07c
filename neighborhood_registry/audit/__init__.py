"""Audit logging package."""

from neighborhood_registry.audit.logger import AuditLogger, configure_logging

__all__ = ["AuditLogger", "configure_logging"]
