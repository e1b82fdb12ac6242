"""
Document Processing Service - Handles AI processing of a single document.
Runs extraction and analysis for one stored upload and assembles the result.
"""
import time
from typing import Awaitable, Callable, Optional

from .ai_service import AnalysisService
from .file_service import FileService
from ..core.config import TEXT_PREVIEW_LENGTH
from ..core.logging_config import get_logger
from ..domain.entities import DocumentAnalysis, FileDescriptor, utcnow
from ..domain.value_objects import ProcessingStage
from ..utils.document_utils import text_preview

logger = get_logger(__name__)

StageCallback = Callable[[ProcessingStage], Awaitable[None]]


class DocumentProcessingService:
    """
    Service for processing documents with AI.
    Handles text extraction, analysis and temp file cleanup for one file.
    """

    def __init__(self, analysis_service: AnalysisService, file_service: FileService):
        """
        Initialize document processing service.

        Args:
            analysis_service: AnalysisService instance
            file_service: FileService instance
        """
        self.analysis_service = analysis_service
        self.file_service = file_service

    async def process_document(
        self,
        descriptor: FileDescriptor,
        on_stage: Optional[StageCallback] = None
    ) -> DocumentAnalysis:
        """
        Process a stored upload end to end.

        The stored file is deleted afterwards whether or not processing
        succeeded.

        Args:
            descriptor: Identity and storage location of the upload
            on_stage: Awaited at each processing checkpoint

        Returns:
            DocumentAnalysis for the file

        Raises:
            ExtractionError, EmptyContentError, ExternalAPIError: Unchanged from
            the failing step
        """
        started = time.monotonic()
        try:
            await self._notify(on_stage, ProcessingStage.STARTED)

            await self._notify(on_stage, ProcessingStage.EXTRACTING)
            logger.info(f"Extracting text from {descriptor.file_name} ({descriptor.type})")
            text_content = await self.file_service.extract_text(
                descriptor.file_path, descriptor.type, descriptor.file_name
            )

            await self._notify(on_stage, ProcessingStage.ANALYZING)
            analysis = await self.analysis_service.analyze(text_content)
            if analysis.used_fallback:
                logger.warning(f"Model reply for {descriptor.file_name} was not parseable, fallback analysis used")

            await self._notify(on_stage, ProcessingStage.ASSEMBLING)
            processing_time = int((time.monotonic() - started) * 1000)
            result = DocumentAnalysis(
                id=descriptor.id,
                file_name=descriptor.file_name,
                file_type=descriptor.type,
                processing_time=processing_time,
                text_content=text_preview(text_content, TEXT_PREVIEW_LENGTH),
                word_count=analysis.word_count,
                page_count=analysis.page_count,
                sentiment=analysis.sentiment,
                topics=analysis.topics,
                summary=analysis.summary,
                entities=analysis.entities,
                key_insights=analysis.key_insights,
                confidence=analysis.confidence,
                analyzed_at=utcnow(),
            )
            logger.info(
                f"Processed {descriptor.file_name}: {result.word_count} words, "
                f"sentiment={result.sentiment}, {processing_time}ms"
            )
            return result
        except Exception as e:
            logger.error(f"Document processing error for {descriptor.file_name}: {e}")
            raise
        finally:
            await self.file_service.delete_file(descriptor.file_path)

    @staticmethod
    async def _notify(on_stage: Optional[StageCallback], stage: ProcessingStage) -> None:
        if on_stage is not None:
            await on_stage(stage)
