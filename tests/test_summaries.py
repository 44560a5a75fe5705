"""Tests for the aggregation engine."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from videobooks.models.records import Client, Payment, Project
from videobooks.queries import (
    build_ledger,
    find_client,
    payments_on_date,
    search_clients,
    summarize,
    summarize_client,
    total_amount,
)


def _project(client_id, count, rate):
    return Project(client_id=client_id, number_of_videos=count, charge_per_video=Decimal(rate))


def _payment(client_id, amount, when, notes=None):
    return Payment(client_id=client_id, amount=Decimal(amount), date=when, notes=notes)


class TestSummarize:
    """Tests for per-client totals."""

    def test_client_without_activity(self, acme):
        """Test zero projects and payments give zero totals."""
        [summary] = summarize([acme], [], [])
        assert summary.total_projects == 0
        assert summary.total_earned == 0
        assert summary.total_paid == 0
        assert summary.outstanding_balance == 0

    def test_totals(self, acme):
        """Test sums of project totals and payment amounts."""
        projects = [_project(acme.id, 5, "20.00"), _project(acme.id, 2, "12.50")]
        payments = [_payment(acme.id, "30.00", datetime(2024, 3, 1))]

        summary = summarize_client(acme, projects, payments)

        assert summary.total_projects == 2
        assert summary.total_earned == Decimal("125.00")
        assert summary.total_paid == Decimal("30.00")
        assert summary.outstanding_balance == Decimal("95.00")

    def test_overpayment_is_negative(self, acme):
        """Test outstanding balance is not clamped at zero."""
        projects = [_project(acme.id, 5, "20.00")]
        payments = [
            _payment(acme.id, "100.00", datetime(2024, 3, 1)),
            _payment(acme.id, "50.00", datetime(2024, 3, 2)),
        ]

        summary = summarize_client(acme, projects, payments)

        assert summary.total_earned == Decimal("100.00")
        assert summary.total_paid == Decimal("150.00")
        assert summary.outstanding_balance == Decimal("-50.00")

    def test_other_clients_ignored(self, acme, bravo):
        """Test each client only counts its own records."""
        projects = [_project(acme.id, 1, "10"), _project(bravo.id, 3, "10")]
        payments = [_payment(bravo.id, "7", datetime(2024, 3, 1))]

        acme_summary, bravo_summary = summarize([acme, bravo], projects, payments)

        assert acme_summary.total_earned == Decimal("10")
        assert acme_summary.total_paid == 0
        assert bravo_summary.total_earned == Decimal("30")
        assert bravo_summary.outstanding_balance == Decimal("23")

    def test_order_follows_input(self, acme, bravo):
        """Test no sorting is imposed."""
        summaries = summarize([bravo, acme], [], [])
        assert [s.client.id for s in summaries] == [bravo.id, acme.id]

    def test_accepts_generators(self, acme, bravo):
        """Test projects/payments iterables are consumed once per call safely."""
        projects = (p for p in [_project(acme.id, 1, "10"), _project(bravo.id, 1, "10")])
        summaries = summarize([acme, bravo], projects, iter([]))
        assert [s.total_projects for s in summaries] == [1, 1]

    def test_build_ledger(self, acme, bravo):
        """Test the ledger holds only the client's own records."""
        projects = [_project(acme.id, 1, "10"), _project(bravo.id, 1, "10")]
        payments = [_payment(acme.id, "4", datetime(2024, 3, 1))]

        ledger = build_ledger(acme, projects, payments)

        assert ledger.client == acme
        assert len(ledger.projects) == 1
        assert len(ledger.payments) == 1
        assert ledger.summary.outstanding_balance == Decimal("6")


class TestPaymentsOnDate:
    """Tests for calendar-day filtering."""

    def test_same_day_any_time(self):
        """Test time of day is ignored."""
        late = _payment("c", "1", datetime(2024, 3, 1, 23, 59))
        early = _payment("c", "2", datetime(2024, 3, 1, 0, 0))
        next_day = _payment("c", "3", datetime(2024, 3, 2, 0, 0, 1))

        result = payments_on_date([late, early, next_day], datetime(2024, 3, 1, 0, 0))

        assert result == [late, early]

    def test_query_by_plain_date(self):
        """Test a date works as the query."""
        payment = _payment("c", "1", datetime(2024, 3, 1, 15, 0))
        assert payments_on_date([payment], date(2024, 3, 1)) == [payment]
        assert payments_on_date([payment], date(2024, 2, 29)) == []

    def test_no_payments(self):
        """Test an empty input gives an empty result."""
        assert payments_on_date([], date(2024, 3, 1)) == []

    def test_total_amount(self):
        """Test summing payment amounts."""
        payments = [_payment("c", "1.10", date(2024, 3, 1)), _payment("c", "2.20", date(2024, 3, 1))]
        assert total_amount(payments) == Decimal("3.30")
        assert total_amount([]) == 0


class TestClientLookup:
    """Tests for search_clients and find_client."""

    @pytest.fixture
    def clients(self):
        return [
            Client(id="1", name="Acme Films"),
            Client(id="2", name="Bravo Studio"),
            Client(id="3", name="acme weddings"),
        ]

    def test_search_case_insensitive(self, clients):
        """Test substring match ignores case."""
        assert [c.id for c in search_clients(clients, "ACME")] == ["1", "3"]

    def test_blank_search_returns_all(self, clients):
        """Test empty and None terms."""
        assert search_clients(clients, "") == clients
        assert search_clients(clients, "   ") == clients
        assert search_clients(clients, None) == clients

    def test_search_no_match(self, clients):
        """Test a term matching nothing."""
        assert search_clients(clients, "zulu") == []

    def test_find_client(self, clients):
        """Test lookup by id, None when absent."""
        assert find_client(clients, "2").name == "Bravo Studio"
        assert find_client(clients, "9") is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
