"""
Storage Services Package

Provides the abstract storage interface and the flat text file implementation.
"""

from neighborhood_registry.services.storage.interface import (
    MalformedRecordError,
    NeighborhoodStorageInterface,
    StorageError,
    StorageIOError,
)
from neighborhood_registry.services.storage.flat_file import (
    FlatFileNeighborhoodStorage,
    format_timestamp,
    parse_timestamp,
)

__all__ = [
    # Interfaces
    "NeighborhoodStorageInterface",
    # Exceptions
    "MalformedRecordError",
    "StorageError",
    "StorageIOError",
    # Flat file implementation
    "FlatFileNeighborhoodStorage",
    "format_timestamp",
    "parse_timestamp",
]
