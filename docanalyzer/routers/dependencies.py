"""
Shared dependencies for routers.
Provides service initialization and lookup.

Services are module-level singletons created once at startup and shared
across all request handlers.
"""
from typing import Optional

from ..services.ai_service import AnalysisService
from ..services.batch_processing_service import BatchProcessingService
from ..services.document_processing_service import DocumentProcessingService
from ..services.export_service import ExportService
from ..services.file_service import FileService
from ..services.progress_registry import ProgressRegistry
from ..services.providers import AIProvider, AIProviderFactory
from ..services.storage import FileStorageInterface, LocalFileStorage
from ..services.upload_service import UploadService
from ..core.logging_config import get_logger

logger = get_logger(__name__)

# Global services (will be initialized on startup)
file_service = None
analysis_service = None
upload_service = None
document_processing_service = None
batch_processing_service = None
progress_registry = None
export_service = None


async def initialize_services(
    storage: Optional[FileStorageInterface] = None,
    provider: Optional[AIProvider] = None
):
    """
    Initialize all services.

    Args:
        storage: Temp storage adapter (defaults to local UPLOAD_DIR storage)
        provider: AI provider (defaults to AIProviderFactory selection)
    """
    global file_service, analysis_service, upload_service, document_processing_service
    global batch_processing_service, progress_registry, export_service

    logger.info("Initializing services...")

    storage = storage or LocalFileStorage()
    await storage.initialize()
    file_service = FileService(storage)
    logger.info(f"  → File Service initialized ({type(storage).__name__})")

    provider = provider or AIProviderFactory.get_provider()
    analysis_service = AnalysisService(provider)
    logger.info(f"  → Analysis Service initialized (provider: {provider.describe()})")

    upload_service = UploadService(file_service)
    document_processing_service = DocumentProcessingService(analysis_service, file_service)
    progress_registry = ProgressRegistry()
    batch_processing_service = BatchProcessingService(document_processing_service, listener=progress_registry)
    export_service = ExportService()

    logger.info("All services initialized successfully")


def services_ready() -> bool:
    return all(
        service is not None
        for service in (file_service, analysis_service, upload_service, batch_processing_service)
    )


def get_upload_service() -> UploadService:
    """Get upload service (dependency injection)."""
    if upload_service is None:
        raise RuntimeError("Upload service not initialized")
    return upload_service


def get_document_processing_service() -> DocumentProcessingService:
    """Get document processing service (dependency injection)."""
    if document_processing_service is None:
        raise RuntimeError("Document processing service not initialized")
    return document_processing_service


def get_batch_processing_service() -> BatchProcessingService:
    """Get batch processing service (dependency injection)."""
    if batch_processing_service is None:
        raise RuntimeError("Batch processing service not initialized")
    return batch_processing_service


def get_progress_registry() -> ProgressRegistry:
    """Get progress registry (dependency injection)."""
    if progress_registry is None:
        raise RuntimeError("Progress registry not initialized")
    return progress_registry


def get_export_service() -> ExportService:
    """Get export service (dependency injection)."""
    if export_service is None:
        raise RuntimeError("Export service not initialized")
    return export_service
