"""
API Gateway

Main gateway class that orchestrates routing and middleware.
Acts as the single entry point for all API requests.
"""
from typing import Optional, List
from fastapi import FastAPI, APIRouter
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from ..core.config import ENVIRONMENT, CORS_ORIGINS
from ..core.logging_config import get_logger
from ..middleware.rate_limit import limiter
from .middleware import (
    RequestIDMiddleware,
    RequestLoggingMiddleware,
    ErrorHandlingMiddleware,
    http_exception_handler,
    validation_exception_handler
)

logger = get_logger(__name__)


class APIGateway:
    """
    API Gateway that manages routing and middleware.

    Responsibilities:
    - Initialize FastAPI application
    - Register middleware (CORS, rate limiting, logging, error handling)
    - Register routers under one or more prefixes
    - Provide health check endpoints
    """

    def __init__(
        self,
        title: str = "Document Analyzer API",
        description: str = "Upload documents and analyze them with a language model",
        version: str = "1.0.0",
        enable_docs: Optional[bool] = None
    ):
        """
        Initialize API Gateway.

        Args:
            title: API title
            description: API description
            version: API version
            enable_docs: Enable API docs (auto-detected from ENVIRONMENT if None)
        """
        self.title = title
        self.description = description
        self.version = version
        self.enable_docs = enable_docs if enable_docs is not None else (
            ENVIRONMENT != "production"
        )

        self.app = FastAPI(
            title=self.title,
            description=self.description,
            version=self.version,
            docs_url="/docs" if self.enable_docs else None,
            redoc_url="/redoc" if self.enable_docs else None
        )
        self.registered_prefixes: List[str] = []

        # Rate limiter shared with the routers' decorators
        self.limiter = limiter
        self.app.state.limiter = self.limiter
        self.app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

        # Error bodies always carry an "error" key
        self.app.add_exception_handler(StarletteHTTPException, http_exception_handler)
        self.app.add_exception_handler(RequestValidationError, validation_exception_handler)

        logger.info("API Gateway initialized")

    def setup_middleware(self):
        """Configure all middleware."""
        logger.info("Setting up middleware...")

        # Error handling (added first so it sits innermost, closest to the routes)
        self.app.add_middleware(ErrorHandlingMiddleware)
        logger.debug("  → Error handling middleware added")

        # Request logging
        self.app.add_middleware(RequestLoggingMiddleware)
        logger.debug("  → Request logging middleware added")

        # Request ID (for tracing); runs before logging so the id is available
        self.app.add_middleware(RequestIDMiddleware)
        logger.debug("  → Request ID middleware added")

        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["Content-Disposition", "X-Request-ID"]
        )
        logger.debug(f"  → CORS middleware added (origins: {', '.join(CORS_ORIGINS)})")

        logger.info("All middleware configured")

    def register_router(
        self,
        router: APIRouter,
        prefixes: Optional[List[str]] = None,
        tags: Optional[List[str]] = None
    ):
        """
        Register a router with the gateway.

        Args:
            router: FastAPI router instance
            prefixes: URL prefixes to mount the router under ("" mounts at root)
            tags: OpenAPI tags for documentation
        """
        for prefix in prefixes or [""]:
            # Only the root mount is listed in the OpenAPI schema
            self.app.include_router(router, prefix=prefix, tags=tags or [], include_in_schema=not prefix)
            if prefix not in self.registered_prefixes:
                self.registered_prefixes.append(prefix)
            logger.info(f"Registered router {tags or ''} at prefix '{prefix or '/'}'")

    def register_health_endpoints(self):
        """Register health check endpoints."""

        @self.app.get("/")
        async def root():
            """Root endpoint - API information."""
            return {
                "message": f"{self.title} is running",
                "version": self.version,
                "status": "healthy"
            }

        @self.app.get("/health")
        async def health_check():
            """
            Health check endpoint for container orchestration.

            Returns 200 if services are initialized, 503 otherwise.
            """
            from ..routers.dependencies import services_ready
            if not services_ready():
                logger.warning("Health check failed: Services not initialized")
                return JSONResponse(
                    status_code=503,
                    content={"status": "unhealthy", "reason": "Services not initialized"}
                )
            return {"status": "healthy", "services": "initialized"}

        logger.info("Health check endpoints registered")

    def get_app(self) -> FastAPI:
        """Get the FastAPI application instance."""
        return self.app

    def get_route_summary(self) -> dict:
        """Summarize registered API routes by method."""
        routes_by_method = {}
        total = 0
        for route in self.app.routes:
            methods = getattr(route, "methods", None)
            if not methods or not getattr(route, "include_in_schema", True):
                continue
            total += 1
            for method in methods:
                routes_by_method[method] = routes_by_method.get(method, 0) + 1
        return {
            "total_routes": total,
            "routes_by_method": routes_by_method,
            "prefixes": self.registered_prefixes
        }
