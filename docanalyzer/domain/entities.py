"""
Domain entities - Core business objects.
These represent the business concepts, not API payloads.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Tuple, List
from .value_objects import FilePath


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class UploadedFile:
    """
    Uploaded file entity - a document sitting in temp storage.

    Owned by the upload receiver until handed to the batch orchestrator,
    which releases its storage once the file has been processed.
    """
    id: str
    name: str
    size: int
    type: str
    uploaded_at: datetime = field(default_factory=utcnow)
    status: str = "uploaded"  # uploaded, processing, completed, error
    file_path: Optional[FilePath] = None

    def is_completed(self) -> bool:
        return self.status == "completed"

    def is_failed(self) -> bool:
        return self.status == "error"

    def mark_processing(self):
        self.status = "processing"

    def mark_completed(self):
        self.status = "completed"

    def mark_error(self):
        self.status = "error"

    def release_storage(self):
        """Drop the storage handle after the temp file has been deleted."""
        self.file_path = None


@dataclass(frozen=True)
class UploadOutcome:
    """Per-file result of an upload request (success or failure)."""
    file_name: str
    success: bool
    error: Optional[str] = None
    id: Optional[str] = None
    original_name: Optional[str] = None
    size: Optional[int] = None
    type: Optional[str] = None
    file_path: Optional[FilePath] = None
    uploaded_at: Optional[datetime] = None

    @classmethod
    def failed(cls, file_name: str, error: str) -> "UploadOutcome":
        return cls(file_name=file_name, success=False, error=error)

    @classmethod
    def stored(cls, uploaded: UploadedFile) -> "UploadOutcome":
        return cls(
            file_name=uploaded.name,
            success=True,
            id=uploaded.id,
            original_name=uploaded.name,
            size=uploaded.size,
            type=uploaded.type,
            file_path=uploaded.file_path,
            uploaded_at=uploaded.uploaded_at,
        )


@dataclass(frozen=True)
class FileDescriptor:
    """What the processor needs to locate and analyze one stored file."""
    id: str
    file_name: str
    file_path: str
    type: str

    @classmethod
    def from_uploaded(cls, uploaded: UploadedFile) -> "FileDescriptor":
        return cls(
            id=uploaded.id,
            file_name=uploaded.name,
            file_path=uploaded.file_path or "",
            type=uploaded.type,
        )


@dataclass(frozen=True)
class AnalysisResult:
    """Structured output of a single language-model analysis."""
    sentiment: str
    topics: Tuple[str, ...]
    summary: str
    entities: Tuple[str, ...]
    key_insights: Tuple[str, ...]
    confidence: float
    word_count: int = 0
    page_count: int = 0
    duration_ms: int = 0
    used_fallback: bool = False


@dataclass(frozen=True)
class DocumentAnalysis:
    """
    Final per-file record of a batch.

    Created exactly once per input file, either from a successful analysis
    or as an error record. Never mutated afterwards.
    """
    id: str
    file_name: str
    file_type: str
    processing_time: int
    text_content: str
    word_count: int
    sentiment: str
    topics: Tuple[str, ...]
    summary: str
    entities: Tuple[str, ...]
    key_insights: Tuple[str, ...]
    confidence: float
    analyzed_at: datetime = field(default_factory=utcnow)
    page_count: Optional[int] = None

    def is_error(self) -> bool:
        return self.sentiment == "Error" and self.confidence == 0

    @classmethod
    def error_record(cls, descriptor: FileDescriptor, message: str) -> "DocumentAnalysis":
        """Synthesize the record shown for a file that failed to process."""
        return cls(
            id=descriptor.id,
            file_name=descriptor.file_name,
            file_type=descriptor.type,
            processing_time=0,
            text_content="",
            word_count=0,
            sentiment="Error",
            topics=(),
            summary=f"Processing failed: {message}",
            entities=(),
            key_insights=(),
            confidence=0.0,
        )


@dataclass(frozen=True)
class ProcessingProgress:
    """Transient per-file status used for progress feedback during a batch."""
    file_id: str
    progress: int
    status: str
    message: Optional[str] = None


@dataclass(frozen=True)
class BatchProcessingResult:
    """Aggregate outcome of one batch run, results in input order."""
    total_files: int
    processed_files: int
    failed_files: int
    results: List[DocumentAnalysis]
    processing_time: int
