"""
JSON File Storage Implementation

DESIGN DECISION: One JSON document on local disk holds all the books because:
1. The user can open, back up and copy it by hand
2. No database setup required
3. Data volume is one freelancer's clients, i.e. tiny

Writes go to a temporary file next to the document, are fsynced, and
then atomically replace it. A crash or disk error mid-write leaves the
previous document in place, which also makes the cascading client
delete atomic on disk.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from videobooks.config import get_settings
from videobooks.services.storage.document import (
    Document,
    DocumentRecordStorage,
    normalize_document,
)
from videobooks.services.storage.interface import (
    CorruptDocumentError,
    StorageUnavailableError,
)


class JsonFileRecordStorage(DocumentRecordStorage):
    """
    Record storage persisted as a single JSON document.

    Construct once at application start and pass it to whatever needs it.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        super().__init__()
        if path is None:
            path = get_settings().storage.document_path
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load_document(self) -> Document:
        if not self._path.exists():
            return normalize_document(None)

        try:
            with open(self._path, "r", encoding="utf-8") as f:
                content = f.read()
        except OSError as e:
            raise StorageUnavailableError(
                f"Failed to read data document {self._path}: {e}"
            ) from e
        except UnicodeDecodeError as e:
            raise CorruptDocumentError(
                f"Data document {self._path} is not valid UTF-8: {e}"
            ) from e

        if not content.strip():
            return normalize_document(None)

        try:
            raw = json.loads(content)
        except json.JSONDecodeError as e:
            raise CorruptDocumentError(
                f"Data document {self._path} is not valid JSON: {e}"
            ) from e

        return normalize_document(raw)

    def _persist_document(self, document: Document) -> None:
        directory = self._path.parent
        tmp_name = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=directory,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_name = f.name
                json.dump(document, f, indent=2, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self._path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageUnavailableError(
                f"Failed to write data document {self._path}: {e}"
            ) from e
