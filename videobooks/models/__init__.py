"""
Data Models Package

This package contains all Pydantic models used in Video Editor Books.
All data flowing through the system must conform to these schemas.
"""

from videobooks.models.records import (
    Client,
    ClientLedger,
    ClientSummary,
    Collection,
    Payment,
    Project,
    Record,
    generate_id,
)
from videobooks.models.validation import (
    ValidationIssue,
    ValidationResult,
)
from videobooks.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Record models
    "Client",
    "ClientLedger",
    "ClientSummary",
    "Collection",
    "Payment",
    "Project",
    "Record",
    "generate_id",
    # Validation models
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
