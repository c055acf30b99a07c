"""Services package."""

from neighborhood_registry.services.storage import (
    FlatFileNeighborhoodStorage,
    MalformedRecordError,
    NeighborhoodStorageInterface,
    StorageError,
    StorageIOError,
)

__all__ = [
    # Storage services
    "FlatFileNeighborhoodStorage",
    "MalformedRecordError",
    "NeighborhoodStorageInterface",
    "StorageError",
    "StorageIOError",
]
