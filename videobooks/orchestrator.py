"""
Main Orchestrator for Video Editor Books

This module ties together all the components and defines the
operations the user interface calls:
1. Clients (add, search, summaries, ledger, cascading delete)
2. Projects and payments (add, delete)
3. Reports (per-client workbook, daily payments workbook)

DESIGN DECISION: The orchestrator enforces the boundaries:
- Nothing reaches storage without passing validation
- The storage object is created once and injected, never global
- Every mutation is audited

REFRESH CONTRACT: flows never hand out live views of the data.
After any mutation the caller re-reads whatever it is displaying.
"""

from datetime import date, datetime
from typing import Any, NamedTuple, Optional, Union

from videobooks.audit import AuditLogger, configure_logging
from videobooks.config import get_settings
from videobooks.models.records import (
    Client,
    ClientLedger,
    ClientSummary,
    Collection,
    Payment,
    Project,
)
from videobooks.models.validation import ValidationResult
from videobooks.queries import build_ledger, payments_on_date, search_clients, summarize
from videobooks.services.reports import (
    NothingToExportError,
    ReportExporter,
    ReportFile,
)
from videobooks.services.storage import (
    InMemoryRecordStorage,
    JsonFileRecordStorage,
    RecordStorageInterface,
    StorageError,
)
from videobooks.validation import (
    RecordValidationError,
    RecordValidator,
    parse_amount,
    parse_count,
)


def _check(
    result: ValidationResult,
    audit_logger: Optional[AuditLogger],
) -> None:
    """Raise RecordValidationError if the result has errors."""
    if result.is_valid:
        return
    if audit_logger:
        audit_logger.log_validation_failed(
            subject=result.subject,
            issues=[
                {"field": i.field, "type": i.issue_type, "message": i.message}
                for i in result.issues
            ],
        )
    raise RecordValidationError(result)


class ClientFlow:
    """
    Client operations.

    Deleting a client removes its projects and payments too.
    """

    def __init__(
        self,
        storage: RecordStorageInterface,
        validator: Optional[RecordValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._validator = validator or RecordValidator()
        self._audit_logger = audit_logger

    def add_client(self, name: str) -> Client:
        """
        Validate and store a new client.

        Raises:
            RecordValidationError: If the name is blank or too long
            StorageError: If the client could not be saved
        """
        _check(self._validator.validate_client(name), self._audit_logger)

        client = Client(name=name.strip())
        try:
            self._storage.save(Collection.CLIENTS, client)
        except StorageError as e:
            if self._audit_logger:
                self._audit_logger.log_save_failed(
                    entity_type="client",
                    operation="add_client",
                    error_message=str(e),
                    entity_id=client.id,
                )
            raise

        if self._audit_logger:
            self._audit_logger.log_client_added(client_id=client.id, name=client.name)
        return client

    def list_clients(self, search: Optional[str] = None) -> list[Client]:
        return search_clients(self._storage.get_clients(), search)

    def list_summaries(self, search: Optional[str] = None) -> list[ClientSummary]:
        """Summaries for every client matching the search, in stored order."""
        clients = self.list_clients(search)
        return summarize(
            clients,
            self._storage.get_projects(),
            self._storage.get_payments(),
        )

    def get_ledger(self, client_id: str) -> Optional[ClientLedger]:
        """Summary, projects and payments for a client; None if it no longer exists."""
        client = self._storage.get_client(client_id)
        if client is None:
            return None
        return build_ledger(
            client,
            self._storage.get_projects_by_client(client_id),
            self._storage.get_payments_by_client(client_id),
        )

    def delete_client(self, client_id: str) -> None:
        """Cascading delete. Unknown ids are a no-op."""
        try:
            removed = self._storage.delete_client_cascade(client_id)
        except StorageError as e:
            if self._audit_logger:
                self._audit_logger.log_save_failed(
                    entity_type="client",
                    operation="delete_client",
                    error_message=str(e),
                    entity_id=client_id,
                )
            raise

        if self._audit_logger:
            self._audit_logger.log_client_deleted(
                client_id=client_id,
                projects_removed=removed.projects_removed,
                payments_removed=removed.payments_removed,
            )


class LedgerFlow:
    """
    Project and payment operations.

    Projects and payments are never edited in place; a wrong entry is
    deleted and recorded again.
    """

    def __init__(
        self,
        storage: RecordStorageInterface,
        validator: Optional[RecordValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._validator = validator or RecordValidator()
        self._audit_logger = audit_logger

    def add_project(
        self,
        client_id: str,
        number_of_videos: Any,
        charge_per_video: Any,
    ) -> Project:
        """
        Record a project; its total is fixed now and never recomputed.

        Raises:
            RecordValidationError: If the count or rate is invalid
            StorageError: If the project could not be saved
        """
        _check(
            self._validator.validate_project(number_of_videos, charge_per_video),
            self._audit_logger,
        )

        project = Project(
            client_id=client_id,
            number_of_videos=parse_count(number_of_videos),
            charge_per_video=parse_amount(charge_per_video),
        )
        self._save(Collection.PROJECTS, project, "add_project")

        if self._audit_logger:
            self._audit_logger.log_project_added(
                project_id=project.id,
                client_id=client_id,
                total=project.total,
            )
        return project

    def delete_project(self, project_id: str) -> None:
        self._delete(Collection.PROJECTS, project_id, "delete_project")
        if self._audit_logger:
            self._audit_logger.log_project_deleted(project_id=project_id)

    def record_payment(
        self,
        client_id: str,
        amount: Any,
        on: Union[date, datetime],
        notes: Optional[str] = None,
    ) -> Payment:
        """
        Record a payment received on a given day.

        Blank notes are stored as "no notes" (None).

        Raises:
            RecordValidationError: If the amount or date is invalid
            StorageError: If the payment could not be saved
        """
        _check(self._validator.validate_payment(amount, on), self._audit_logger)

        if notes is not None and not notes.strip():
            notes = None

        payment = Payment(
            client_id=client_id,
            amount=parse_amount(amount),
            date=on,
            notes=notes,
        )
        self._save(Collection.PAYMENTS, payment, "record_payment")

        if self._audit_logger:
            self._audit_logger.log_payment_recorded(
                payment_id=payment.id,
                client_id=client_id,
                amount=payment.amount,
            )
        return payment

    def delete_payment(self, payment_id: str) -> None:
        self._delete(Collection.PAYMENTS, payment_id, "delete_payment")
        if self._audit_logger:
            self._audit_logger.log_payment_deleted(payment_id=payment_id)

    def _save(self, collection: Collection, record, operation: str) -> None:
        try:
            self._storage.save(collection, record)
        except StorageError as e:
            if self._audit_logger:
                self._audit_logger.log_save_failed(
                    entity_type=collection.value,
                    operation=operation,
                    error_message=str(e),
                    entity_id=record.id,
                )
            raise

    def _delete(self, collection: Collection, record_id: str, operation: str) -> None:
        try:
            self._storage.delete(collection, record_id)
        except StorageError as e:
            if self._audit_logger:
                self._audit_logger.log_save_failed(
                    entity_type=collection.value,
                    operation=operation,
                    error_message=str(e),
                    entity_id=record_id,
                )
            raise


class ReportFlow:
    """Builds downloadable workbooks from the current books."""

    def __init__(
        self,
        storage: RecordStorageInterface,
        exporter: Optional[ReportExporter] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._exporter = exporter or ReportExporter()
        self._audit_logger = audit_logger

    def client_report(self, client_id: str) -> Optional[ReportFile]:
        """Workbook for one client, or None if the client no longer exists."""
        client = self._storage.get_client(client_id)
        if client is None:
            return None

        ledger = build_ledger(
            client,
            self._storage.get_projects_by_client(client_id),
            self._storage.get_payments_by_client(client_id),
        )
        report = self._exporter.export_client_report(ledger)

        if self._audit_logger:
            self._audit_logger.log_report_exported(
                report_type="client",
                filename=report.filename,
                rows=len(ledger.projects) + len(ledger.payments),
            )
        return report

    def daily_report(self, on: Union[date, datetime]) -> ReportFile:
        """
        Workbook of the payments received on one day.

        Raises:
            NothingToExportError: If no payment was received that day
        """
        payments = self._storage.get_payments()
        try:
            report = self._exporter.export_daily_report(
                payments,
                self._storage.get_clients(),
                on,
            )
        except NothingToExportError as e:
            if self._audit_logger:
                self._audit_logger.log_nothing_to_export(report_type="daily", reason=str(e))
            raise

        if self._audit_logger:
            self._audit_logger.log_report_exported(
                report_type="daily",
                filename=report.filename,
                rows=len(payments_on_date(payments, on)),
            )
        return report


class AppComponents(NamedTuple):
    client_flow: ClientFlow
    ledger_flow: LedgerFlow
    report_flow: ReportFlow
    storage: RecordStorageInterface


def create_app_components(
    use_storage: bool = True,
    storage: Optional[RecordStorageInterface] = None,
) -> AppComponents:
    """
    Factory function to create all application components.

    Args:
        use_storage: Whether to persist to the JSON document.
                    Set to False to keep everything in memory.
        storage: An already constructed store to use instead.

    Returns:
        AppComponents sharing one storage object
    """
    settings = get_settings()
    configure_logging(settings.app.log_level)

    if storage is None:
        if use_storage:
            storage = JsonFileRecordStorage(settings.storage.document_path)
        else:
            storage = InMemoryRecordStorage()

    audit_logger = AuditLogger()
    validator = RecordValidator()

    return AppComponents(
        client_flow=ClientFlow(storage, validator=validator, audit_logger=audit_logger),
        ledger_flow=LedgerFlow(storage, validator=validator, audit_logger=audit_logger),
        report_flow=ReportFlow(
            storage,
            exporter=ReportExporter(settings.reports),
            audit_logger=audit_logger,
        ),
        storage=storage,
    )
