"""
Batch Processing Service - Runs a list of uploads through the pipeline.
Files are processed strictly one after another, in input order.
"""
import asyncio
import time
from typing import List, Optional, Sequence

from .document_processing_service import DocumentProcessingService
from .progress_registry import ProgressListener
from ..api.exceptions import BatchInputError
from ..core.logging_config import get_logger
from ..domain.entities import (
    BatchProcessingResult,
    DocumentAnalysis,
    FileDescriptor,
    ProcessingProgress,
    UploadedFile,
)
from ..domain.value_objects import ProcessingStage

logger = get_logger(__name__)

STATUS_INITIALIZING = "Initializing..."
STATUS_PROCESSING = "Processing..."
STATUS_COMPLETED = "Completed"
STATUS_ERROR = "Error"


def validate_descriptors(descriptors: Sequence[FileDescriptor]) -> None:
    """
    Reject malformed input before any file is touched.

    Raises:
        BatchInputError: If a descriptor lacks id, file name, path or type
    """
    for index, descriptor in enumerate(descriptors):
        missing = [
            name for name in ("id", "file_name", "file_path", "type")
            if not str(getattr(descriptor, name, "") or "").strip()
        ]
        if missing:
            raise BatchInputError(
                f"File descriptor at position {index} is missing: {', '.join(missing)}"
            )


class BatchProcessingService:
    """
    Processes batches of uploaded documents.

    Per-file failures become error records and never stop the batch. Progress
    is reported to an optional listener; a failing listener is logged and
    ignored.
    """

    def __init__(
        self,
        processing_service: DocumentProcessingService,
        listener: Optional[ProgressListener] = None,
        step_delay: float = 0.0
    ):
        self.processing_service = processing_service
        self.listener = listener
        self.step_delay = step_delay

    async def process_batch(
        self,
        descriptors: Sequence[FileDescriptor],
        listener: Optional[ProgressListener] = None,
        step_delay: Optional[float] = None
    ) -> BatchProcessingResult:
        """
        Process every descriptor and return results in input order.

        Args:
            descriptors: Files to process
            listener: Overrides the service-level progress listener
            step_delay: Seconds to pause after each checkpoint (cosmetic pacing)

        Raises:
            BatchInputError: If any descriptor is malformed (nothing is processed)
        """
        return await self._run(descriptors, [None] * len(descriptors), listener, step_delay)

    async def process_uploads(
        self,
        uploads: Sequence[UploadedFile],
        listener: Optional[ProgressListener] = None,
        step_delay: Optional[float] = None
    ) -> BatchProcessingResult:
        """
        Process files straight from the upload receiver, driving their lifecycle.

        Each file moves from uploaded to processing, then to completed or
        error. Its storage handle is released once the temp file is gone.
        """
        descriptors = [FileDescriptor.from_uploaded(uploaded) for uploaded in uploads]
        return await self._run(descriptors, list(uploads), listener, step_delay)

    async def _run(
        self,
        descriptors: Sequence[FileDescriptor],
        uploads: Sequence[Optional[UploadedFile]],
        listener: Optional[ProgressListener],
        step_delay: Optional[float]
    ) -> BatchProcessingResult:
        validate_descriptors(descriptors)

        listener = listener or self.listener
        delay = self.step_delay if step_delay is None else step_delay
        started = time.monotonic()

        file_ids = [descriptor.id for descriptor in descriptors]
        logger.info(f"Starting batch of {len(descriptors)} file(s)")
        self._notify(listener, "on_batch_start", file_ids)
        for descriptor in descriptors:
            self._emit(listener, descriptor.id, 0, STATUS_INITIALIZING, "Preparing document for analysis")

        results: List[DocumentAnalysis] = []
        try:
            for descriptor, uploaded in zip(descriptors, uploads):
                results.append(await self._process_one(descriptor, listener, delay, uploaded))
        finally:
            self._notify(listener, "on_batch_end", file_ids)

        failed = sum(1 for result in results if result.is_error())
        processing_time = int((time.monotonic() - started) * 1000)
        logger.info(
            f"Batch finished: {len(results) - failed} processed, {failed} failed, {processing_time}ms"
        )
        return BatchProcessingResult(
            total_files=len(descriptors),
            processed_files=len(results) - failed,
            failed_files=failed,
            results=results,
            processing_time=processing_time,
        )

    async def _process_one(
        self,
        descriptor: FileDescriptor,
        listener: Optional[ProgressListener],
        delay: float,
        uploaded: Optional[UploadedFile] = None
    ) -> DocumentAnalysis:
        async def on_stage(stage: ProcessingStage) -> None:
            self._emit(listener, descriptor.id, stage.progress, STATUS_PROCESSING, stage.message)
            if delay > 0:
                await asyncio.sleep(delay)

        if uploaded is not None:
            uploaded.mark_processing()
        try:
            result = await self.processing_service.process_document(descriptor, on_stage=on_stage)
        except Exception as e:
            message = str(e) or "Unknown error"
            if uploaded is not None:
                uploaded.mark_error()
                uploaded.release_storage()
            logger.error(f"Failed to process {descriptor.file_name}: {message}")
            self._emit(listener, descriptor.id, 0, STATUS_ERROR, message)
            return DocumentAnalysis.error_record(descriptor, message)

        if uploaded is not None:
            uploaded.mark_completed()
            uploaded.release_storage()
        self._emit(listener, descriptor.id, 100, STATUS_COMPLETED, "Analysis complete!")
        return result

    @staticmethod
    def _emit(
        listener: Optional[ProgressListener],
        file_id: str,
        progress: int,
        status: str,
        message: Optional[str]
    ) -> None:
        if listener is None:
            return
        try:
            listener.on_progress(ProcessingProgress(file_id, progress, status, message))
        except Exception as e:
            logger.warning(f"Progress listener failed for {file_id}: {e}")

    @staticmethod
    def _notify(listener: Optional[ProgressListener], hook: str, file_ids: List[str]) -> None:
        if listener is None:
            return
        try:
            getattr(listener, hook)(file_ids)
        except Exception as e:
            logger.warning(f"Progress listener {hook} failed: {e}")
