"""
File service implementation.
Handles temp file operations using a plug-and-play storage adapter.
"""
import asyncio
from typing import List, Optional

from .storage import FileStorageInterface, LocalFileStorage
from .text_extractors import TextExtractorFactory
from ..api.exceptions import ExtractionError
from ..core.config import TEMP_FILE_MAX_AGE_MS
from ..core.logging_config import get_logger

logger = get_logger(__name__)


class FileService:
    """
    File service implementation.
    Handles file operations - saving, extracting, deleting, sweeping.
    Follows Single Responsibility Principle.
    """

    def __init__(self, storage: Optional[FileStorageInterface] = None):
        """
        Initialize file service with storage adapter.

        Args:
            storage: FileStorageInterface instance (defaults to local UPLOAD_DIR storage)
        """
        self._storage: FileStorageInterface = storage or LocalFileStorage()

    @property
    def storage(self) -> FileStorageInterface:
        return self._storage

    async def save_upload(self, content: bytes, file_path: str) -> str:
        """Persist upload bytes under the given storage path."""
        return await self._storage.save_bytes(content, file_path)

    async def extract_text(self, file_path: str, mime_type: str, filename: str = "") -> str:
        """
        Extract text from a stored file.

        Args:
            file_path: Storage path of the file
            mime_type: Declared MIME type used to choose the extractor
            filename: Original file name for log messages

        Returns:
            Extracted text content

        Raises:
            UnsupportedTypeError: If the MIME type has no extractor
            ExtractionError: If the file is missing or cannot be parsed
        """
        try:
            file_bytes = await self._storage.get_file(file_path)
        except FileNotFoundError as e:
            logger.error(f"File not found for extraction: {file_path}")
            raise ExtractionError("Failed to extract text from document") from e

        return await self._run_extraction(file_bytes, mime_type, filename or file_path)

    async def _run_extraction(self, file_bytes: bytes, mime_type: str, filename: str) -> str:
        # Parsing libraries are synchronous and CPU bound
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None, TextExtractorFactory.extract_text, file_bytes, mime_type, filename
        )

    async def delete_file(self, file_path: Optional[str]) -> bool:
        """
        Best-effort delete of a stored file.

        Failures are logged and never propagate.
        """
        if not file_path:
            return False
        try:
            deleted = await self._storage.delete_file(file_path)
            if deleted:
                logger.info(f"Cleaned up temporary file: {file_path}")
            return deleted
        except Exception as e:
            logger.warning(f"Failed to clean up file {file_path}: {e}")
            return False

    async def sweep_stale_files(self, max_age_ms: int = TEMP_FILE_MAX_AGE_MS) -> List[str]:
        """
        Remove stored files older than max_age_ms.

        Sweep failures are logged and swallowed so uploads proceed.
        """
        try:
            return await self._storage.sweep_older_than(max_age_ms)
        except Exception as e:
            logger.error(f"Error cleaning up old files: {e}")
            return []
