"""
Custom exceptions for the document pipeline.
Separates business exceptions from HTTP exceptions.
"""
from fastapi import HTTPException, status


class DocumentProcessingError(Exception):
    """Base class for every pipeline failure."""
    pass


class FileValidationError(DocumentProcessingError):
    """Raised when an uploaded file fails size or type validation."""
    pass


class ExtractionError(DocumentProcessingError):
    """Raised when text cannot be extracted from a stored document."""
    pass


class UnsupportedTypeError(ExtractionError):
    """Raised when a declared MIME type has no extractor."""

    def __init__(self, mime_type: str):
        self.mime_type = mime_type
        super().__init__(f"Unsupported file type: {mime_type}")


class StoragePathError(ExtractionError):
    """Raised when a storage handle points outside the uploads directory."""
    pass


class EmptyContentError(DocumentProcessingError):
    """Raised when a document yields no text to analyze."""
    pass


class ExternalAPIError(DocumentProcessingError):
    """Raised when the language-model call fails."""
    pass


class ResponseParseError(DocumentProcessingError):
    """Raised when a model reply holds no JSON object. Always recovered locally."""
    pass


class BatchInputError(DocumentProcessingError):
    """Raised when a batch request is malformed before any file is processed."""
    pass


def handle_business_exception(e: Exception) -> HTTPException:
    """
    Convert business exceptions to HTTP exceptions.
    This keeps business logic clean of HTTP concerns.
    """
    if isinstance(e, (FileValidationError, BatchInputError)):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    elif isinstance(e, (ExtractionError, EmptyContentError)):
        return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    elif isinstance(e, ExternalAPIError):
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    else:
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
