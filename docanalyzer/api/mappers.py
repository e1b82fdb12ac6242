"""
Mappers between domain entities and DTOs.
Separates domain layer from API layer.
"""
from typing import List
from ..domain.entities import (
    BatchProcessingResult,
    DocumentAnalysis,
    FileDescriptor,
    ProcessingProgress,
    UploadOutcome,
)
from .dto import (
    BatchProcessingResultDTO,
    DocumentAnalysisDTO,
    FileDescriptorDTO,
    ProcessingProgressDTO,
    UploadOutcomeDTO,
)


class UploadOutcomeMapper:
    """Maps UploadOutcome to UploadOutcomeDTO."""

    @staticmethod
    def to_dto(outcome: UploadOutcome) -> UploadOutcomeDTO:
        return UploadOutcomeDTO(
            file_name=outcome.file_name,
            success=outcome.success,
            error=outcome.error,
            id=outcome.id,
            original_name=outcome.original_name,
            size=outcome.size,
            type=outcome.type,
            file_path=outcome.file_path,
            uploaded_at=outcome.uploaded_at.isoformat() if outcome.uploaded_at else None
        )

    @staticmethod
    def to_dto_list(outcomes: List[UploadOutcome]) -> List[UploadOutcomeDTO]:
        return [UploadOutcomeMapper.to_dto(outcome) for outcome in outcomes]


class FileDescriptorMapper:
    """Maps request DTOs to FileDescriptor entities."""

    @staticmethod
    def to_entity(dto: FileDescriptorDTO) -> FileDescriptor:
        return FileDescriptor(
            id=dto.id or "",
            file_name=dto.file_name or "",
            file_path=dto.file_path or "",
            type=dto.type or ""
        )

    @staticmethod
    def to_entity_list(dtos: List[FileDescriptorDTO]) -> List[FileDescriptor]:
        return [FileDescriptorMapper.to_entity(dto) for dto in dtos]


class DocumentAnalysisMapper:
    """Maps between DocumentAnalysis entity and DocumentAnalysisDTO."""

    @staticmethod
    def to_dto(analysis: DocumentAnalysis) -> DocumentAnalysisDTO:
        """Convert domain entity to DTO."""
        return DocumentAnalysisDTO(
            id=analysis.id,
            file_name=analysis.file_name,
            file_type=analysis.file_type,
            processing_time=analysis.processing_time,
            text_content=analysis.text_content,
            word_count=analysis.word_count,
            page_count=analysis.page_count,
            sentiment=analysis.sentiment,
            topics=list(analysis.topics),
            summary=analysis.summary,
            entities=list(analysis.entities),
            key_insights=list(analysis.key_insights),
            analyzed_at=analysis.analyzed_at,
            confidence=analysis.confidence
        )

    @staticmethod
    def to_entity(dto: DocumentAnalysisDTO) -> DocumentAnalysis:
        """Convert DTO back to domain entity (used by export)."""
        return DocumentAnalysis(
            id=dto.id,
            file_name=dto.file_name,
            file_type=dto.file_type,
            processing_time=dto.processing_time,
            text_content=dto.text_content,
            word_count=dto.word_count,
            page_count=dto.page_count,
            sentiment=dto.sentiment,
            topics=tuple(dto.topics),
            summary=dto.summary,
            entities=tuple(dto.entities),
            key_insights=tuple(dto.key_insights),
            analyzed_at=dto.analyzed_at,
            confidence=dto.confidence
        )

    @staticmethod
    def to_dto_list(analyses: List[DocumentAnalysis]) -> List[DocumentAnalysisDTO]:
        return [DocumentAnalysisMapper.to_dto(analysis) for analysis in analyses]

    @staticmethod
    def to_entity_list(dtos: List[DocumentAnalysisDTO]) -> List[DocumentAnalysis]:
        return [DocumentAnalysisMapper.to_entity(dto) for dto in dtos]


class BatchResultMapper:
    """Maps BatchProcessingResult to its DTO."""

    @staticmethod
    def to_dto(result: BatchProcessingResult) -> BatchProcessingResultDTO:
        return BatchProcessingResultDTO(
            total_files=result.total_files,
            processed_files=result.processed_files,
            failed_files=result.failed_files,
            results=DocumentAnalysisMapper.to_dto_list(result.results),
            processing_time=result.processing_time
        )


class ProgressMapper:
    """Maps ProcessingProgress to its DTO."""

    @staticmethod
    def to_dto(progress: ProcessingProgress) -> ProcessingProgressDTO:
        return ProcessingProgressDTO(
            file_id=progress.file_id,
            progress=progress.progress,
            status=progress.status,
            message=progress.message
        )
