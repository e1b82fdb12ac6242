"""
Upload Router - Handles file upload operations.

Architecture:
- Router handles HTTP request/response only
- UploadService handles validation and storage

Example Usage:
    POST /upload - Upload one or more files (multipart field "files")
"""
from fastapi import APIRouter, UploadFile, File, HTTPException, Request, status
from typing import List, Optional

from .dependencies import get_upload_service
from ..api.dto import UploadResponseDTO
from ..api.exceptions import DocumentProcessingError, handle_business_exception
from ..api.mappers import UploadOutcomeMapper
from ..middleware.rate_limit import rate_limit_per_minute
from ..core.logging_config import get_logger

logger = get_logger(__name__)

# Create router instance
router = APIRouter()


@router.post("/upload", response_model=UploadResponseDTO, response_model_exclude_none=True)
@rate_limit_per_minute
async def upload_files(
    request: Request,
    files: Optional[List[UploadFile]] = File(None)
):
    """
    Upload documents into temp storage.

    Each file is validated (size limit, PDF/DOCX/DOC/TXT only) and stored
    under a fresh id. Rejections are reported per file; the request itself
    succeeds as long as at least one file was sent.

    Args:
        request: Incoming request (used by the rate limiter)
        files: Repeated multipart field "files"

    Returns:
        UploadResponseDTO: {"success": true, "files": [...]} in input order

    Raises:
        HTTPException: 400 if no files were sent
                      500 if upload fails unexpectedly

    Example Response:
        {
            "success": true,
            "files": [
                {"id": "3f2a...", "fileName": "report.pdf", "originalName": "report.pdf",
                 "size": 52133, "type": "application/pdf", "filePath": "3f2a....pdf",
                 "success": true, "uploadedAt": "2024-05-01T10:00:00+00:00"},
                {"fileName": "photo.png", "success": false, "error": "Unsupported file type"}
            ]
        }
    """
    try:
        upload_service = get_upload_service()
        outcomes = await upload_service.receive_files(files or [])
        return UploadResponseDTO(success=True, files=UploadOutcomeMapper.to_dto_list(outcomes))
    except DocumentProcessingError as e:
        raise handle_business_exception(e)
    except Exception as e:
        logger.error(f"Upload error: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Upload failed"
        )
