"""
Document-backed storage

Both concrete stores keep the same shape of data:

    {"clients": [...], "projects": [...], "payments": [...]}

where each entry is a record's JSON form (camelCase keys, ISO-8601
dates, decimals as strings). This module holds the read-mutate-write
logic; subclasses only know how to load and persist the whole document.

TRADEOFFS:
- Every operation reads and rewrites the whole document. Fine for one
  freelancer's books, not for large data.
- A single lock serializes all operations, so a cascade can never
  interleave with another write.
"""

import threading
from abc import abstractmethod
from contextlib import contextmanager
from typing import Any, Iterator

from pydantic import ValidationError

from videobooks.models.records import Collection, Record
from videobooks.services.storage.interface import (
    CascadeResult,
    CorruptDocumentError,
    RecordStorageInterface,
)


Document = dict[str, list[dict[str, Any]]]


def empty_document() -> Document:
    return {collection.value: [] for collection in Collection}


def normalize_document(raw: Any) -> Document:
    """
    Check the top-level shape of a loaded document.

    Missing collections are treated as empty. Anything that is not a
    dict of lists is corrupt.
    """
    if raw is None:
        return empty_document()
    if not isinstance(raw, dict):
        raise CorruptDocumentError(
            f"Data document must be an object, got {type(raw).__name__}"
        )

    document = empty_document()
    for collection in Collection:
        items = raw.get(collection.value)
        if items is None:
            continue
        if not isinstance(items, list):
            raise CorruptDocumentError(
                f"Collection '{collection.value}' must be a list"
            )
        document[collection.value] = items
    return document


class DocumentRecordStorage(RecordStorageInterface):
    """
    Implements the storage interface over a whole-document load/persist pair.

    Subclasses provide _load_document and _persist_document.
    _persist_document must be all-or-nothing: if it raises, the
    previously persisted document is still intact.
    """

    def __init__(self):
        self._lock = threading.RLock()

    @abstractmethod
    def _load_document(self) -> Document:
        """Load the full document. Absent data is an empty document."""
        pass

    @abstractmethod
    def _persist_document(self, document: Document) -> None:
        """Replace the persisted document with this one."""
        pass

    @contextmanager
    def _open(self, write: bool = False) -> Iterator[Document]:
        """
        Scoped access to the document.

        The lock is held for the whole block. With write=True the
        document is persisted when the block exits normally; if the
        block raises, nothing is written.
        """
        with self._lock:
            document = self._load_document()
            yield document
            if write:
                self._persist_document(document)

    def get_all(self, collection: Collection) -> list[Record]:
        with self._open() as document:
            items = document[collection.value]

        model = collection.model
        records = []
        for position, item in enumerate(items):
            try:
                records.append(model.model_validate(item))
            except ValidationError as e:
                raise CorruptDocumentError(
                    f"Malformed record #{position} in '{collection.value}': {e}"
                ) from e
        return records

    def save(self, collection: Collection, record: Record) -> None:
        if not isinstance(record, collection.model):
            raise TypeError(
                f"Cannot save {type(record).__name__} into '{collection.value}'"
            )

        with self._open(write=True) as document:
            items = document[collection.value]
            stored = record.to_document()
            for index, item in enumerate(items):
                if isinstance(item, dict) and item.get("id") == record.id:
                    items[index] = stored
                    break
            else:
                items.append(stored)

    def delete(self, collection: Collection, record_id: str) -> None:
        with self._open(write=True) as document:
            document[collection.value] = [
                item for item in document[collection.value]
                if not (isinstance(item, dict) and item.get("id") == record_id)
            ]

    def delete_client_cascade(self, client_id: str) -> CascadeResult:
        # One document, one write: the three removals land together or not at all
        removed = []
        with self._open(write=True) as document:
            for collection, key in (
                (Collection.CLIENTS, "id"),
                (Collection.PROJECTS, "clientId"),
                (Collection.PAYMENTS, "clientId"),
            ):
                items = document[collection.value]
                kept = [
                    item for item in items
                    if not (isinstance(item, dict) and item.get(key) == client_id)
                ]
                removed.append(len(items) - len(kept))
                document[collection.value] = kept
        return CascadeResult(*removed)
