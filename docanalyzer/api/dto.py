"""
Data Transfer Objects (DTOs) for API layer.
Separates API contracts from domain entities.
Field names are snake_case in Python and camelCase on the wire.
"""
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional
from datetime import datetime


class CamelModel(BaseModel):
    """Base DTO that serializes field names in camelCase."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class UploadOutcomeDTO(CamelModel):
    """Per-file upload result. Failed entries only carry file_name, success and error."""
    file_name: str
    success: bool
    error: Optional[str] = None
    id: Optional[str] = None
    original_name: Optional[str] = None
    size: Optional[int] = None
    type: Optional[str] = None
    file_path: Optional[str] = None
    uploaded_at: Optional[str] = None


class UploadResponseDTO(CamelModel):
    """Response DTO for multipart upload."""
    success: bool
    files: List[UploadOutcomeDTO]


class FileDescriptorDTO(CamelModel):
    """
    Request DTO identifying one stored upload.
    Fields are optional so that missing data is reported by the endpoint
    instead of a schema error.
    """
    id: Optional[str] = None
    file_name: Optional[str] = None
    file_path: Optional[str] = None
    type: Optional[str] = None

    def is_complete(self) -> bool:
        return all([self.id, self.file_name, self.file_path, self.type])


class BatchProcessRequestDTO(CamelModel):
    """Request DTO for batch processing."""
    files: List[FileDescriptorDTO]
    step_delay: float = Field(default=0.0, ge=0.0, le=5.0)


class DocumentAnalysisDTO(CamelModel):
    """Analysis result for one document."""
    id: str
    file_name: str
    file_type: str
    processing_time: int
    text_content: str
    word_count: int
    page_count: Optional[int] = None
    sentiment: str
    topics: List[str]
    summary: str
    entities: List[str]
    key_insights: List[str]
    analyzed_at: datetime
    confidence: float


class BatchProcessingResultDTO(CamelModel):
    """Aggregate outcome of a batch run."""
    total_files: int
    processed_files: int
    failed_files: int
    results: List[DocumentAnalysisDTO]
    processing_time: int


class ProcessingProgressDTO(CamelModel):
    """Latest progress snapshot for one file."""
    file_id: str
    progress: int
    status: str
    message: Optional[str] = None


class ErrorResponseDTO(BaseModel):
    """Error response DTO."""
    error: str
    detail: Optional[str] = None
    code: Optional[str] = None
