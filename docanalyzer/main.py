import sys

from .gateway import APIGateway
from .routers import uploads, process, export
from .routers.dependencies import initialize_services
from .core.config import (
    ENVIRONMENT,
    UPLOAD_DIR,
    MAX_FILE_SIZE,
    TEMP_FILE_MAX_AGE_MS,
    AI_PROVIDER,
    RATE_LIMIT_ENABLED,
    RATE_LIMIT_PER_MINUTE,
    CORS_ORIGINS
)
from .core.logging_config import setup_logging, get_logger
from .services.text_extractors import TextExtractorFactory
from .utils.document_utils import format_size_limit

# Initialize logging
setup_logging()
logger = get_logger(__name__)

API_PREFIXES = ["", "/api"]

# Initialize API Gateway
gateway = APIGateway(
    title="Document Analyzer API",
    description="Upload PDF, Word and text documents and analyze them with a language model",
    version="1.0.0"
)

# Setup middleware (CORS, logging, error handling)
gateway.setup_middleware()

# Routes are served both at the root and under /api
gateway.register_router(uploads.router, prefixes=API_PREFIXES, tags=["Uploads"])
gateway.register_router(process.router, prefixes=API_PREFIXES, tags=["Processing"])
gateway.register_router(export.router, prefixes=API_PREFIXES, tags=["Export"])

# Register health check endpoints
gateway.register_health_endpoints()

# Get FastAPI app instance
app = gateway.get_app()


@app.on_event("startup")
async def startup_event():
    """Initialize application on startup."""
    logger.info("=" * 60)
    logger.info("Starting Document Analyzer...")
    logger.info("=" * 60)

    try:
        import fastapi
        import uvicorn
        logger.info("Framework & Server:")
        logger.info(f"  → FastAPI Version: {fastapi.__version__}")
        logger.info(f"  → Uvicorn Version: {uvicorn.__version__}")
        logger.info(f"  → Python Version: {sys.version.split()[0]}")
    except ImportError as e:
        logger.debug(f"Could not get framework versions: {e}")

    logger.info("Configuration:")
    logger.info(f"  → Environment: {ENVIRONMENT}")
    logger.info(f"  → Docs URL: {app.docs_url if app.docs_url else 'Disabled (production)'}")
    logger.info(f"  → Upload directory: {UPLOAD_DIR}")
    logger.info(f"  → Max file size: {format_size_limit(MAX_FILE_SIZE)}")
    logger.info(f"  → Temp file max age: {TEMP_FILE_MAX_AGE_MS // 1000}s")
    logger.info(f"  → AI provider (configured): {AI_PROVIDER}")
    logger.info(f"  → Rate limiting: {f'{RATE_LIMIT_PER_MINUTE} requests/minute' if RATE_LIMIT_ENABLED else 'disabled'}")
    logger.info(f"  → CORS origins: {', '.join(CORS_ORIGINS)}")
    logger.info(f"  → Extractors: {', '.join(TextExtractorFactory.get_supported_formats())}")

    await initialize_services()

    route_summary = gateway.get_route_summary()
    logger.info(f"API Routes: {route_summary['total_routes']} ({route_summary['routes_by_method']})")
    logger.info("  → Upload: /upload and /api/upload")
    logger.info("  → Process: /process, /process/batch, /process/progress and /api/*")
    logger.info("  → Export: /export/json, /export/csv and /api/*")

    logger.info("=" * 60)
    logger.info("Document Analyzer initialized successfully")
    logger.info("=" * 60)


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown."""
    logger.info("Document Analyzer shutdown complete")
