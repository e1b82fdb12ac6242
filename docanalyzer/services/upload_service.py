"""
Upload Service - Handles all file upload operations.

This service encapsulates upload-related business logic:
- Stale temp file sweep before each upload batch
- Per-file size and type validation
- Unique storage naming and persistence

Architecture:
- Follows Single Responsibility Principle
- Uses dependency injection for file_service
- Rejections are reported per file and never abort the batch

Example Usage:
    service = UploadService(file_service)
    outcomes = await service.receive_files(files)
"""
import uuid
from typing import List, Optional

from fastapi import UploadFile

from .file_service import FileService
from ..api.exceptions import FileValidationError
from ..core.config import MAX_FILE_SIZE
from ..core.logging_config import get_logger
from ..domain.entities import UploadedFile, UploadOutcome
from ..domain.value_objects import DocumentFormat, FilePath
from ..utils.document_utils import build_storage_filename, format_size_limit

logger = get_logger(__name__)

UNSUPPORTED_TYPE_MESSAGE = "Unsupported file type"
SAVE_FAILED_MESSAGE = "Failed to save file"


class UploadService:
    """
    Service for receiving uploaded files into temp storage.

    Attributes:
        file_service: FileService instance for file operations
        max_file_size: Largest accepted upload in bytes
    """

    def __init__(self, file_service: FileService, max_file_size: int = MAX_FILE_SIZE):
        """
        Initialize upload service.

        Args:
            file_service: FileService instance
            max_file_size: Size limit in bytes (defaults to MAX_FILE_SIZE)
        """
        self.file_service = file_service
        self.max_file_size = max_file_size

    @property
    def size_limit_message(self) -> str:
        return f"File size exceeds limit ({format_size_limit(self.max_file_size)})"

    def validate(self, file_name: str, size: int, mime_type: Optional[str]) -> None:
        """
        Check one upload against the size limit and the accepted types.

        Raises:
            FileValidationError: With the user-facing rejection reason
        """
        if size > self.max_file_size:
            raise FileValidationError(self.size_limit_message)
        if not DocumentFormat.is_supported(mime_type or ""):
            raise FileValidationError(UNSUPPORTED_TYPE_MESSAGE)

    async def receive_files(self, files: List[UploadFile]) -> List[UploadOutcome]:
        """
        Validate and store a batch of uploads.

        Stale temp files are swept first. Each file yields exactly one
        outcome, in input order.

        Raises:
            FileValidationError: If the batch contains no files
        """
        if not files:
            raise FileValidationError("No files uploaded")

        removed = await self.file_service.sweep_stale_files()
        if removed:
            logger.info(f"Swept {len(removed)} stale temp file(s) before upload")

        outcomes = []
        for file in files:
            outcomes.append(await self.receive_file(file))

        stored = sum(1 for outcome in outcomes if outcome.success)
        logger.info(f"Upload batch: {stored} stored, {len(outcomes) - stored} rejected")
        return outcomes

    async def receive_file(self, file: UploadFile) -> UploadOutcome:
        file_name = file.filename or ""
        content = await file.read()
        size = file.size if file.size is not None else len(content)

        try:
            self.validate(file_name, size, file.content_type)
        except FileValidationError as e:
            logger.warning(f"Rejected upload {file_name} ({file.content_type}, {size} bytes): {e}")
            return UploadOutcome.failed(file_name, str(e))

        file_id = str(uuid.uuid4())
        storage_name = build_storage_filename(file_id, file_name)
        try:
            await self.file_service.save_upload(content, storage_name)
        except Exception as e:
            logger.error(f"Error saving upload {file_name}: {e}", exc_info=True)
            return UploadOutcome.failed(file_name, SAVE_FAILED_MESSAGE)

        uploaded = UploadedFile(
            id=file_id,
            name=file_name,
            size=size,
            type=file.content_type,
            file_path=FilePath(storage_name),
        )
        logger.info(f"Stored upload {file_name} as {storage_name} ({size} bytes)")
        return UploadOutcome.stored(uploaded)
