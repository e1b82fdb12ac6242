"""
Abstract base class for temp storage adapters.
All storage implementations must inherit from this class.
"""
from abc import ABC, abstractmethod
from typing import Optional, List


class FileStorageInterface(ABC):
    """
    Abstract interface for temp storage operations.

    Paths handed to these methods are relative storage handles
    (e.g. "3f2a...c1.pdf"), never absolute filesystem paths.
    """

    @abstractmethod
    async def initialize(self):
        """Prepare the storage backend (create directories, open clients)."""
        pass

    @abstractmethod
    async def save_bytes(self, content: bytes, file_path: str) -> str:
        """
        Persist raw bytes.

        Args:
            content: File content
            file_path: Relative path where the content should be stored

        Returns:
            Storage path where the file was saved
        """
        pass

    @abstractmethod
    async def get_file(self, file_path: str) -> bytes:
        """
        Retrieve a file's content.

        Raises:
            FileNotFoundError: If nothing is stored under file_path
        """
        pass

    @abstractmethod
    async def delete_file(self, file_path: str) -> bool:
        """
        Delete a stored file.

        Returns:
            True if a file was deleted, False if it did not exist
        """
        pass

    @abstractmethod
    async def file_exists(self, file_path: str) -> bool:
        pass

    @abstractmethod
    async def sweep_older_than(self, max_age_ms: int, now: Optional[float] = None) -> List[str]:
        """
        Delete every stored file whose modification time is older than max_age_ms.

        Args:
            max_age_ms: Maximum age in milliseconds
            now: Reference time as a POSIX timestamp (defaults to current time)

        Returns:
            Storage paths of the deleted files
        """
        pass
