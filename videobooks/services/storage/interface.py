"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep the JSON document on disk for real use
2. Use in-memory storage for testing and for running without a data dir
3. Swap in SQLite later without touching the flows

The interface is intentionally simple - we're not building a full ORM.
Three collections, get-all / upsert / delete, and one cascading delete.

CONTRACT: Mutations return nothing beyond removal counts. Callers that hold collections in
memory must re-fetch after every mutation; nothing is pushed to them.
"""

from abc import ABC, abstractmethod
from typing import NamedTuple, Optional

from videobooks.models.records import (
    Client,
    Collection,
    Payment,
    Project,
    Record,
)


class CascadeResult(NamedTuple):
    """How many records a cascading client delete removed."""
    clients_removed: int
    projects_removed: int
    payments_removed: int


class RecordStorageInterface(ABC):
    """
    Abstract interface for record storage operations.

    Any storage implementation (JSON file, in-memory, ...)
    must implement these methods.
    """

    @abstractmethod
    def get_all(self, collection: Collection) -> list[Record]:
        """
        Return every record in a collection, in stored order.

        Args:
            collection: Which collection to read

        Returns:
            The records; an empty list if nothing was persisted yet

        Raises:
            StorageError: If the backing store cannot be read
        """
        pass

    @abstractmethod
    def save(self, collection: Collection, record: Record) -> None:
        """
        Insert or replace a record.

        A record with the same id is replaced in place (its position is
        kept); otherwise the record is appended. The whole collection is
        persisted before returning.

        Raises:
            StorageError: If the write fails. Nothing is retried.
        """
        pass

    @abstractmethod
    def delete(self, collection: Collection, record_id: str) -> None:
        """
        Remove a record by id. Removing an unknown id is a no-op.

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def delete_client_cascade(self, client_id: str) -> CascadeResult:
        """
        Remove a client and every project and payment referencing it.

        Removal order is clients, then projects, then payments. All three
        collections are persisted before returning.

        Returns:
            The number of records removed from each collection, counted
            in the same operation as the removal

        Raises:
            StorageError: If any part of the write fails
        """
        pass

    # -------------------------------------------------------------------------
    # Typed helpers
    # -------------------------------------------------------------------------

    def get_clients(self) -> list[Client]:
        return self.get_all(Collection.CLIENTS)

    def get_projects(self) -> list[Project]:
        return self.get_all(Collection.PROJECTS)

    def get_payments(self) -> list[Payment]:
        return self.get_all(Collection.PAYMENTS)

    def get_client(self, client_id: str) -> Optional[Client]:
        """Look up one client. A missing client is None, not an error."""
        for client in self.get_clients():
            if client.id == client_id:
                return client
        return None

    def get_projects_by_client(self, client_id: str) -> list[Project]:
        return [p for p in self.get_projects() if p.client_id == client_id]

    def get_payments_by_client(self, client_id: str) -> list[Payment]:
        return [p for p in self.get_payments() if p.client_id == client_id]


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageUnavailableError(StorageError):
    """The backing document could not be read or written."""
    pass


class CorruptDocumentError(StorageError):
    """The backing document or one of its records is malformed."""
    pass
