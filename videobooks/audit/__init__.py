"""Audit logging package."""

from videobooks.audit.logger import AuditLogger, configure_logging

__all__ = ["AuditLogger", "configure_logging"]
