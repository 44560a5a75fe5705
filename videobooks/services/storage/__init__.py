"""
Storage Services Package

Provides the abstract record storage interface and its implementations.
The JSON file store is the real backend; the in-memory store shares its
semantics for tests and storage-less runs.
"""

from videobooks.services.storage.interface import (
    CascadeResult,
    CorruptDocumentError,
    RecordStorageInterface,
    StorageError,
    StorageUnavailableError,
)
from videobooks.services.storage.document import DocumentRecordStorage
from videobooks.services.storage.json_file import JsonFileRecordStorage
from videobooks.services.storage.memory import InMemoryRecordStorage

__all__ = [
    # Interfaces
    "CascadeResult",
    "DocumentRecordStorage",
    "RecordStorageInterface",
    # Exceptions
    "CorruptDocumentError",
    "StorageError",
    "StorageUnavailableError",
    # Implementations
    "InMemoryRecordStorage",
    "JsonFileRecordStorage",
]
