"""Shared fixtures for the Video Editor Books tests."""

from datetime import datetime
from decimal import Decimal

import pytest

from videobooks.config import ReportSettings
from videobooks.models.records import Client, Payment, Project
from videobooks.services.reports import ReportExporter
from videobooks.services.storage import InMemoryRecordStorage, JsonFileRecordStorage


@pytest.fixture
def document_path(tmp_path):
    return tmp_path / "data" / "videobooks.json"


@pytest.fixture
def json_storage(document_path):
    return JsonFileRecordStorage(document_path)


@pytest.fixture
def memory_storage():
    return InMemoryRecordStorage()


@pytest.fixture
def exporter():
    return ReportExporter(ReportSettings())


@pytest.fixture
def acme():
    return Client(id="client-a", name="Acme Films", created_at=datetime(2024, 1, 10, 9, 30))


@pytest.fixture
def bravo():
    return Client(id="client-b", name="Bravo Studio", created_at=datetime(2024, 2, 1, 14, 0))


@pytest.fixture
def acme_project(acme):
    return Project(
        id="project-a1",
        client_id=acme.id,
        number_of_videos=5,
        charge_per_video=Decimal("20.00"),
        created_at=datetime(2024, 3, 1, 10, 0),
    )


@pytest.fixture
def acme_payment(acme):
    return Payment(
        id="payment-a1",
        client_id=acme.id,
        amount=Decimal("60.00"),
        date=datetime(2024, 3, 1, 23, 59),
        notes="First instalment",
    )
