"""Aggregation package."""

from videobooks.queries.summaries import (
    build_ledger,
    find_client,
    local_day,
    payments_for_client,
    payments_on_date,
    projects_for_client,
    search_clients,
    summarize,
    summarize_client,
    total_amount,
)

__all__ = [
    "build_ledger",
    "find_client",
    "local_day",
    "payments_for_client",
    "payments_on_date",
    "projects_for_client",
    "search_clients",
    "summarize",
    "summarize_client",
    "total_amount",
]
