"""
Audit Logger

DESIGN DECISION: Every mutation and export is logged.
This provides:
1. Traceability of changes to the books
2. Debugging capability when a save fails
3. A history of produced reports

The audit logger:
- Writes structured JSON lines through structlog
- Gracefully handles failures (doesn't crash the app if logging fails)
"""

import logging
from decimal import Decimal
from typing import Optional

import structlog

from videobooks.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Route structlog output to stderr at the given stdlib level."""
    logging.basicConfig(format="%(message)s", level=getattr(logging, level.upper(), logging.INFO))
    logging.getLogger("videobooks").setLevel(level.upper())


class AuditLogger:
    """
    Central audit logging service.

    Events only go to the structured log; the data document is
    reserved for clients, projects and payments.
    """

    def __init__(self, logger_name: str = "videobooks.audit"):
        self._logger = structlog.get_logger(logger_name)

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns False if the event could not be written. Never raises.
        """
        log_dict = event.to_log_dict()

        try:
            if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except (OSError, TypeError, ValueError):
            # Log failure but don't raise
            return False

        return True

    def log_client_added(self, client_id: str, name: str) -> None:
        self.log(AuditEventBuilder.client_added(client_id=client_id, name=name))

    def log_client_deleted(
        self,
        client_id: str,
        projects_removed: int,
        payments_removed: int,
    ) -> None:
        self.log(AuditEventBuilder.client_deleted(
            client_id=client_id,
            projects_removed=projects_removed,
            payments_removed=payments_removed,
        ))

    def log_project_added(self, project_id: str, client_id: str, total: Decimal) -> None:
        self.log(AuditEventBuilder.project_added(
            project_id=project_id,
            client_id=client_id,
            total=total,
        ))

    def log_project_deleted(self, project_id: str) -> None:
        self.log(AuditEventBuilder.project_deleted(project_id=project_id))

    def log_payment_recorded(self, payment_id: str, client_id: str, amount: Decimal) -> None:
        self.log(AuditEventBuilder.payment_recorded(
            payment_id=payment_id,
            client_id=client_id,
            amount=amount,
        ))

    def log_payment_deleted(self, payment_id: str) -> None:
        self.log(AuditEventBuilder.payment_deleted(payment_id=payment_id))

    def log_validation_failed(self, subject: str, issues: list[dict]) -> None:
        """Log a rejected form submission."""
        self.log(AuditEventBuilder.validation_failed(subject=subject, issues=issues))

    def log_save_failed(
        self,
        entity_type: str,
        operation: str,
        error_message: str,
        entity_id: Optional[str] = None,
    ) -> None:
        """Log a storage failure. The caller still re-raises."""
        self.log(AuditEventBuilder.save_failed(
            entity_type=entity_type,
            operation=operation,
            error_message=error_message,
            entity_id=entity_id,
        ))

    def log_report_exported(self, report_type: str, filename: str, rows: int) -> None:
        self.log(AuditEventBuilder.report_exported(
            report_type=report_type,
            filename=filename,
            rows=rows,
        ))

    def log_nothing_to_export(self, report_type: str, reason: str) -> None:
        self.log(AuditEventBuilder.nothing_to_export(report_type=report_type, reason=reason))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
        ))
