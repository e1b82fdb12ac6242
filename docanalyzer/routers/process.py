"""
Process Router - Runs uploaded documents through extraction and AI analysis.

Example Usage:
    POST /process - Analyze one stored upload
    POST /process/batch - Analyze several uploads in order
    GET /process/progress - Progress of files in the current batch
    GET /process/progress/{file_id} - Progress of one file
"""
from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import JSONResponse
from typing import List

from .dependencies import (
    get_batch_processing_service,
    get_document_processing_service,
    get_progress_registry
)
from ..api.dto import (
    BatchProcessRequestDTO,
    BatchProcessingResultDTO,
    DocumentAnalysisDTO,
    FileDescriptorDTO,
    ProcessingProgressDTO
)
from ..api.exceptions import DocumentProcessingError, handle_business_exception
from ..api.mappers import (
    BatchResultMapper,
    DocumentAnalysisMapper,
    FileDescriptorMapper,
    ProgressMapper
)
from ..middleware.rate_limit import rate_limit_per_minute
from ..core.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.post("/process", response_model=DocumentAnalysisDTO)
@rate_limit_per_minute
async def process_document(request: Request, file_data: FileDescriptorDTO):
    """
    Analyze a single stored upload.

    The stored file is deleted afterwards whether or not analysis succeeded.

    Returns:
        DocumentAnalysisDTO: Analysis result

    Error Responses:
        400 {"error": "Missing required file data"}
        500 {"error": "Failed to process document: <reason>"}
    """
    if not file_data.is_complete():
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Missing required file data"}
        )

    processing_service = get_document_processing_service()
    descriptor = FileDescriptorMapper.to_entity(file_data)
    try:
        analysis = await processing_service.process_document(descriptor)
    except Exception as e:
        logger.error(f"Processing API error for {descriptor.file_name}: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": f"Failed to process document: {str(e) or 'Unknown error'}"}
        )

    return DocumentAnalysisMapper.to_dto(analysis)


@router.post("/process/batch", response_model=BatchProcessingResultDTO)
@rate_limit_per_minute
async def process_batch(request: Request, batch: BatchProcessRequestDTO):
    """
    Analyze several stored uploads one after another.

    Failed files appear in the results as error records (sentiment "Error",
    confidence 0). Progress can be polled at /process/progress while the
    batch runs.

    Raises:
        HTTPException: 400 if any descriptor is incomplete (nothing is processed)
    """
    batch_service = get_batch_processing_service()
    descriptors = FileDescriptorMapper.to_entity_list(batch.files)
    try:
        result = await batch_service.process_batch(descriptors, step_delay=batch.step_delay)
    except DocumentProcessingError as e:
        raise handle_business_exception(e)

    return BatchResultMapper.to_dto(result)


@router.get("/process/progress", response_model=List[ProcessingProgressDTO])
async def list_progress():
    """Latest progress for every file seen by the batch processor."""
    registry = get_progress_registry()
    return [ProgressMapper.to_dto(progress) for progress in registry.snapshot()]


@router.get("/process/progress/{file_id}", response_model=ProcessingProgressDTO)
async def get_progress(file_id: str):
    """
    Latest progress for one file.

    Raises:
        HTTPException: 404 if the file id is unknown
    """
    registry = get_progress_registry()
    progress = registry.get(file_id)
    if progress is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No progress recorded for file {file_id}"
        )
    return ProgressMapper.to_dto(progress)
