"""
In-Memory Storage Implementation

Same document shape and semantics as the JSON file store, kept in
process memory. Used when the app runs without a data directory and
throughout the tests.
"""

import copy
from typing import Optional

from videobooks.services.storage.document import (
    Document,
    DocumentRecordStorage,
    normalize_document,
)


class InMemoryRecordStorage(DocumentRecordStorage):
    """Record storage that lives only as long as the process."""

    def __init__(self, document: Optional[dict] = None):
        super().__init__()
        self._document = normalize_document(copy.deepcopy(document))

    def _load_document(self) -> Document:
        return copy.deepcopy(self._document)

    def _persist_document(self, document: Document) -> None:
        self._document = copy.deepcopy(document)

    def snapshot(self) -> Document:
        """Copy of the raw document, as the JSON store would write it."""
        with self._lock:
            return copy.deepcopy(self._document)
