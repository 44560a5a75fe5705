"""
Audit Models for Video Editor Books

Every mutation and every export produces an audit event.
This provides:
1. Traceability of who-paid-what changes
2. Debugging information when a save fails
3. A record of which reports were produced

DESIGN DECISION: Audit events go to the structured log only.
The data document holds exactly three collections and nothing else.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Clients
    CLIENT_ADDED = "client_added"
    CLIENT_DELETED = "client_deleted"

    # Projects
    PROJECT_ADDED = "project_added"
    PROJECT_DELETED = "project_deleted"

    # Payments
    PAYMENT_RECORDED = "payment_recorded"
    PAYMENT_DELETED = "payment_deleted"

    # Validation / persistence
    VALIDATION_FAILED = "validation_failed"
    SAVE_FAILED = "save_failed"

    # Reports
    REPORT_EXPORTED = "report_exported"
    NOTHING_TO_EXPORT = "nothing_to_export"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred (local time)"
    )
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what record is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Collection of the record (client, project, payment, report)"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the record this event relates to"
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
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
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
        event = AuditEventBuilder.client_added(client_id="...", name="Acme")
    """

    @staticmethod
    def client_added(client_id: str, name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CLIENT_ADDED,
            entity_type="client",
            entity_id=client_id,
            description=f"Client added: {name}",
            details={"name": name},
        )

    @staticmethod
    def client_deleted(client_id: str, projects_removed: int, payments_removed: int) -> AuditEvent:
        """Cascading delete of a client and everything it owns."""
        return AuditEvent(
            event_type=AuditEventType.CLIENT_DELETED,
            severity=AuditSeverity.WARNING,
            entity_type="client",
            entity_id=client_id,
            description="Client deleted with its projects and payments",
            details={
                "projects_removed": projects_removed,
                "payments_removed": payments_removed,
            },
        )

    @staticmethod
    def project_added(project_id: str, client_id: str, total: Decimal) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PROJECT_ADDED,
            entity_type="project",
            entity_id=project_id,
            description=f"Project added (total {total})",
            details={"client_id": client_id, "total": str(total)},
        )

    @staticmethod
    def project_deleted(project_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PROJECT_DELETED,
            entity_type="project",
            entity_id=project_id,
            description="Project deleted",
        )

    @staticmethod
    def payment_recorded(payment_id: str, client_id: str, amount: Decimal) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PAYMENT_RECORDED,
            entity_type="payment",
            entity_id=payment_id,
            description=f"Payment of {amount} recorded",
            details={"client_id": client_id, "amount": str(amount)},
        )

    @staticmethod
    def payment_deleted(payment_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PAYMENT_DELETED,
            entity_type="payment",
            entity_id=payment_id,
            description="Payment deleted",
        )

    @staticmethod
    def validation_failed(subject: str, issues: list[dict]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type=subject,
            description=f"Validation failed for {subject}",
            details={"issues": issues},
        )

    @staticmethod
    def save_failed(
        entity_type: str,
        operation: str,
        error_message: str,
        entity_id: Optional[str] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type=entity_type,
            entity_id=entity_id,
            description=f"Storage operation failed: {operation}",
            details={"operation": operation},
            error_message=error_message,
        )

    @staticmethod
    def report_exported(report_type: str, filename: str, rows: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REPORT_EXPORTED,
            entity_type="report",
            description=f"{report_type} report exported as {filename}",
            details={"report_type": report_type, "filename": filename, "rows": rows},
        )

    @staticmethod
    def nothing_to_export(report_type: str, reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.NOTHING_TO_EXPORT,
            entity_type="report",
            description=f"{report_type} report skipped: {reason}",
            details={"report_type": report_type},
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            details=details or {},
            error_message=error_message,
        )
