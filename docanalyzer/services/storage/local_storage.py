"""
Local filesystem storage adapter implementing FileStorageInterface.
Holds uploaded files between receipt and processing.
"""
import asyncio
import time
from pathlib import Path
from typing import Optional, List

from .base import FileStorageInterface
from ...api.exceptions import StoragePathError
from ...core.logging_config import get_logger

logger = get_logger(__name__)


class LocalFileStorage(FileStorageInterface):
    """
    Local filesystem storage adapter.
    Stores files flat in a single uploads directory.
    """

    def __init__(self, base_dir: Optional[Path] = None):
        """
        Initialize local file storage.

        Args:
            base_dir: Base directory for file storage (defaults to UPLOAD_DIR)
        """
        if base_dir is None:
            from ...core.config import UPLOAD_DIR
            base_dir = UPLOAD_DIR

        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)

    async def initialize(self):
        """Initialize storage - ensure base directory exists."""
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _get_full_path(self, file_path: str) -> Path:
        """
        Get full filesystem path from storage path.

        Raises:
            StoragePathError: If the path is empty or escapes the base directory
        """
        if not file_path or not str(file_path).strip():
            raise StoragePathError("Storage path is empty")

        # Normalize path to prevent directory traversal
        normalized = Path(file_path).as_posix().lstrip('/')
        base = self.base_dir.resolve()
        full_path = (base / normalized).resolve()
        if full_path == base or base not in full_path.parents:
            raise StoragePathError(f"Invalid storage path: {file_path}")
        return full_path

    async def save_bytes(self, content: bytes, file_path: str) -> str:
        """Save raw bytes to the local filesystem."""
        full_path = self._get_full_path(file_path)

        def _save():
            full_path.parent.mkdir(parents=True, exist_ok=True)
            full_path.write_bytes(content)

        # Run in executor to avoid blocking
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, _save)

        return file_path

    async def get_file(self, file_path: str) -> bytes:
        """Retrieve a file from the local filesystem."""
        full_path = self._get_full_path(file_path)

        if not full_path.is_file():
            raise FileNotFoundError(f"File not found: {file_path}")

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, full_path.read_bytes)

    async def delete_file(self, file_path: str) -> bool:
        """Delete a file from the local filesystem."""
        full_path = self._get_full_path(file_path)

        if not full_path.exists():
            return False

        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, full_path.unlink)
        return True

    async def file_exists(self, file_path: str) -> bool:
        """Check if a file exists in the local filesystem."""
        full_path = self._get_full_path(file_path)
        return full_path.is_file()

    async def sweep_older_than(self, max_age_ms: int, now: Optional[float] = None) -> List[str]:
        """Delete files whose mtime lies more than max_age_ms before now."""
        reference = time.time() if now is None else now
        cutoff = reference - max_age_ms / 1000.0

        def _sweep() -> List[str]:
            removed = []
            for entry in self.base_dir.iterdir():
                try:
                    if not entry.is_file():
                        continue
                    if entry.stat().st_mtime < cutoff:
                        entry.unlink()
                        removed.append(entry.name)
                        logger.info(f"Cleaned up old file: {entry.name}")
                except OSError as e:
                    logger.error(f"Failed to clean up {entry.name}: {e}")
            return removed

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, _sweep)
