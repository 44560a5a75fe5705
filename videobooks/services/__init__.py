"""Services package."""

from videobooks.services.reports import (
    NothingToExportError,
    ReportExporter,
    ReportFile,
)
from videobooks.services.storage import (
    CorruptDocumentError,
    InMemoryRecordStorage,
    JsonFileRecordStorage,
    RecordStorageInterface,
    StorageError,
    StorageUnavailableError,
)

__all__ = [
    # Report services
    "NothingToExportError",
    "ReportExporter",
    "ReportFile",
    # Storage services
    "CorruptDocumentError",
    "InMemoryRecordStorage",
    "JsonFileRecordStorage",
    "RecordStorageInterface",
    "StorageError",
    "StorageUnavailableError",
]
