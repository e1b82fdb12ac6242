"""
Domain layer - Contains business entities and domain logic.
This layer is independent of infrastructure and frameworks.
"""
from .entities import (
    UploadedFile,
    UploadOutcome,
    FileDescriptor,
    AnalysisResult,
    DocumentAnalysis,
    ProcessingProgress,
    BatchProcessingResult,
)
from .value_objects import DocumentFormat, FilePath, ProcessingStage

__all__ = [
    "UploadedFile",
    "UploadOutcome",
    "FileDescriptor",
    "AnalysisResult",
    "DocumentAnalysis",
    "ProcessingProgress",
    "BatchProcessingResult",
    "DocumentFormat",
    "FilePath",
    "ProcessingStage",
]
