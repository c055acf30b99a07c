"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for persisting a whole
neighborhood. This allows us to:
1. Swap the flat text file for another format later
2. Use in-memory storage for testing
3. Keep the registry model free of any I/O

Each call is a complete read or a complete write; nothing is kept between calls.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from neighborhood_registry.models.neighborhood import Neighborhood


PathLike = Union[str, Path]


class NeighborhoodStorageInterface(ABC):
    """
    Abstract interface for neighborhood storage operations.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def load(self, path: PathLike) -> Neighborhood:
        """
        Read a complete neighborhood.

        Args:
            path: Location to read from

        Returns:
            A new Neighborhood built from the stored records

        Raises:
            StorageIOError: If the location cannot be read
            MalformedRecordError: If a record cannot be parsed
        """
        pass

    @abstractmethod
    def save(self, neighborhood: Neighborhood, path: PathLike) -> None:
        """
        Write a complete neighborhood, replacing whatever was stored there.

        Args:
            neighborhood: The neighborhood to persist
            path: Location to write to

        Raises:
            StorageIOError: If the location cannot be written
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageIOError(StorageError):
    """The underlying file could not be read or written."""
    pass


class MalformedRecordError(StorageError):
    """A stored record could not be turned into a household member."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"Line {line_number}: {message}"
        super().__init__(message)
