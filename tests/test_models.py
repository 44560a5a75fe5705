"""
Tests for Video Editor Books models

Test strategy:
1. Unit tests for individual components (models, validators, aggregation)
2. Storage tests against a real JSON file in a temporary directory
3. Flow tests with in-memory storage
"""

import logging
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from videobooks.models.records import (
    Client,
    ClientSummary,
    Collection,
    Payment,
    Project,
    generate_id,
)
from videobooks.audit import AuditLogger
from videobooks.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


class TestRecordModels:
    """Tests for the persisted record models."""

    def test_client_creation(self):
        """Test Client gets an id and a creation time."""
        client = Client(name="Acme Films")
        assert client.id
        assert client.name == "Acme Films"
        assert isinstance(client.created_at, datetime)

    def test_client_strips_whitespace(self):
        """Test that whitespace is stripped from the client name."""
        client = Client(name="  Acme Films  ")
        assert client.name == "Acme Films"

    def test_project_total_computed_at_creation(self):
        """Test total = number of videos x charge per video."""
        project = Project(
            client_id="c1",
            number_of_videos=5,
            charge_per_video=Decimal("20.00"),
        )
        assert project.total == Decimal("100.00")

    def test_project_total_frozen(self):
        """Test a stored total is kept even when other fields change."""
        project = Project(
            client_id="c1",
            number_of_videos=5,
            charge_per_video=Decimal("20.00"),
        )
        changed = project.model_copy(update={"charge_per_video": Decimal("99.00")})
        assert changed.total == Decimal("100.00")

        reloaded = Project.model_validate(
            {**project.to_document(), "numberOfVideos": 7}
        )
        assert reloaded.total == Decimal("100.00")

    def test_project_rejects_fractional_video_count(self):
        """Test that a fractional number of videos is not an int."""
        with pytest.raises(ValueError):
            Project(client_id="c1", number_of_videos=2.5, charge_per_video=Decimal("10"))

    def test_payment_date_accepts_plain_date(self):
        """Test a calendar date becomes midnight of that day."""
        payment = Payment(client_id="c1", amount=Decimal("10"), date=date(2024, 3, 1))
        assert payment.date == datetime(2024, 3, 1, 0, 0)

    def test_aware_datetimes_stored_as_local(self):
        """Test timezone-aware times become naive local time."""
        aware = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)
        expected = aware.astimezone().replace(tzinfo=None)

        payment = Payment(client_id="c1", amount=Decimal("10"), date=aware)
        client = Client(name="Acme", created_at=aware)
        project = Project.model_validate({
            "clientId": "c1",
            "numberOfVideos": 1,
            "chargePerVideo": "10",
            "createdAt": "2024-03-01T12:00:00+00:00",
        })

        assert payment.date == expected
        assert payment.date.tzinfo is None
        assert client.created_at == expected
        assert project.created_at == expected

    def test_payment_notes_absent_vs_empty(self):
        """Test None notes and empty-string notes stay distinct."""
        absent = Payment(client_id="c1", amount=Decimal("10"), date=date(2024, 3, 1))
        empty = Payment(client_id="c1", amount=Decimal("10"), date=date(2024, 3, 1), notes="")
        assert absent.notes is None
        assert empty.notes == ""
        assert absent.to_document()["notes"] is None
        assert empty.to_document()["notes"] == ""

    def test_document_uses_camel_case_and_iso_dates(self):
        """Test the persisted form of a project."""
        project = Project(
            id="p1",
            client_id="c1",
            number_of_videos=3,
            charge_per_video=Decimal("12.50"),
            created_at=datetime(2024, 3, 1, 10, 0),
        )
        doc = project.to_document()
        assert doc["clientId"] == "c1"
        assert doc["numberOfVideos"] == 3
        assert Decimal(doc["chargePerVideo"]) == Decimal("12.50")
        assert Decimal(doc["total"]) == Decimal("37.50")
        assert doc["createdAt"] == "2024-03-01T10:00:00"

    def test_document_round_trip(self):
        """Test a record survives to_document / model_validate."""
        payment = Payment(
            client_id="c1",
            amount=Decimal("42.10"),
            date=datetime(2024, 3, 1, 8, 15),
            notes="cash",
        )
        assert Payment.model_validate(payment.to_document()) == payment

    def test_collection_models(self):
        """Test each collection knows its record type."""
        assert Collection.CLIENTS.model is Client
        assert Collection.PROJECTS.model is Project
        assert Collection.PAYMENTS.model is Payment


class TestIdentifiers:
    """Tests for generate_id."""

    def test_ids_unique_in_tight_loop(self):
        """Test 10,000 ids minted back to back never collide."""
        ids = [generate_id() for _ in range(10_000)]
        assert len(set(ids)) == len(ids)

    def test_ids_are_non_empty_strings(self):
        """Test id shape."""
        value = generate_id()
        assert isinstance(value, str)
        assert value.isalnum()


class TestClientSummary:
    """Tests for the derived summary model."""

    def test_negative_balance_allowed(self):
        """Test overpayment is representable."""
        summary = ClientSummary(
            client=Client(name="Acme"),
            total_projects=1,
            total_earned=Decimal("100.00"),
            total_paid=Decimal("150.00"),
            outstanding_balance=Decimal("-50.00"),
        )
        assert summary.outstanding_balance == Decimal("-50.00")


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.CLIENT_ADDED,
            description="Client added",
        )
        assert event.event_type == AuditEventType.CLIENT_ADDED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEventBuilder.payment_recorded(
            payment_id="p1",
            client_id="c1",
            amount=Decimal("25.00"),
        )
        log_dict = event.to_log_dict()
        assert log_dict["event_type"] == "payment_recorded"
        assert log_dict["entity_id"] == "p1"
        assert log_dict["details"]["amount"] == "25.00"

    def test_client_deleted_is_warning(self):
        """Test cascading deletes are flagged."""
        event = AuditEventBuilder.client_deleted(
            client_id="c1",
            projects_removed=2,
            payments_removed=1,
        )
        assert event.severity == AuditSeverity.WARNING
        assert event.details == {"projects_removed": 2, "payments_removed": 1}

    def test_save_failed_is_error(self):
        """Test storage failures carry the error message."""
        event = AuditEventBuilder.save_failed(
            entity_type="payment",
            operation="record_payment",
            error_message="disk full",
        )
        assert event.severity == AuditSeverity.ERROR
        assert event.error_message == "disk full"


class TestAuditLogger:
    """Tests for the structlog-backed audit logger."""

    def test_events_written_as_json(self, caplog):
        """Test an event reaches the stdlib logger as a JSON line."""
        caplog.set_level(logging.INFO, logger="videobooks.audit")
        logger = AuditLogger()

        assert logger.log(AuditEventBuilder.client_added(client_id="c1", name="Acme")) is True
        logger.log_error(error_type="CorruptDocumentError", error_message="bad json")

        assert '"event_type": "client_added"' in caplog.text
        assert '"error_message": "bad json"' in caplog.text


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
