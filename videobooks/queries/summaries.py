"""
Aggregation Engine

DESIGN DECISION: Everything here is a pure function over collections
that were already loaded from storage. No I/O, no caching; callers
re-query the store after a mutation and call these again.

GUARANTEES:
- Input order is preserved, nothing is sorted
- A client with no activity gets zero totals, not an error
- Overpayment shows up as a negative outstanding balance
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional, Union

from videobooks.models.records import (
    Client,
    ClientLedger,
    ClientSummary,
    Payment,
    Project,
    naive_local,
)


def projects_for_client(projects: Iterable[Project], client_id: str) -> list[Project]:
    return [project for project in projects if project.client_id == client_id]


def payments_for_client(payments: Iterable[Payment], client_id: str) -> list[Payment]:
    return [payment for payment in payments if payment.client_id == client_id]


def find_client(clients: Iterable[Client], client_id: str) -> Optional[Client]:
    """Return the client with this id, or None."""
    for client in clients:
        if client.id == client_id:
            return client
    return None


def search_clients(clients: Iterable[Client], term: Optional[str]) -> list[Client]:
    """
    Case-insensitive substring match on the client name.

    A blank term matches every client.
    """
    needle = (term or "").strip().casefold()
    if not needle:
        return list(clients)
    return [client for client in clients if needle in client.name.casefold()]


def summarize_client(
    client: Client,
    projects: Iterable[Project],
    payments: Iterable[Payment],
) -> ClientSummary:
    """Totals for one client; other clients' records are ignored."""
    own_projects = projects_for_client(projects, client.id)
    own_payments = payments_for_client(payments, client.id)

    total_earned = sum((project.total for project in own_projects), Decimal("0"))
    total_paid = sum((payment.amount for payment in own_payments), Decimal("0"))

    return ClientSummary(
        client=client,
        total_projects=len(own_projects),
        total_earned=total_earned,
        total_paid=total_paid,
        outstanding_balance=total_earned - total_paid,
    )


def summarize(
    clients: Iterable[Client],
    projects: Iterable[Project],
    payments: Iterable[Payment],
) -> list[ClientSummary]:
    """One summary per client, in the order the clients were given."""
    projects = list(projects)
    payments = list(payments)
    return [summarize_client(client, projects, payments) for client in clients]


def build_ledger(
    client: Client,
    projects: Iterable[Project],
    payments: Iterable[Payment],
) -> ClientLedger:
    """Summary plus the client's own projects and payments."""
    own_projects = projects_for_client(projects, client.id)
    own_payments = payments_for_client(payments, client.id)
    return ClientLedger(
        summary=summarize_client(client, own_projects, own_payments),
        projects=own_projects,
        payments=own_payments,
    )


def local_day(value: Union[date, datetime]) -> date:
    """
    Calendar day of a date or datetime in the local time zone.

    Naive datetimes are already local. Aware ones are converted first.
    """
    if isinstance(value, datetime):
        return naive_local(value).date()
    return value


def payments_on_date(
    payments: Iterable[Payment],
    on: Union[date, datetime],
) -> list[Payment]:
    """Payments whose date falls on the same local calendar day as `on`."""
    day = local_day(on)
    return [payment for payment in payments if local_day(payment.date) == day]


def total_amount(payments: Iterable[Payment]) -> Decimal:
    return sum((payment.amount for payment in payments), Decimal("0"))
