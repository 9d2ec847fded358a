"""
Learning Center Document Extraction API Server
Main application entry point for the learning-center administration portal's
document pipeline. This API converts uploaded PDF, Word, Excel and PowerPoint
files into plain text, cleans and chunks that text for the AI assistant, and
tracks training files through their extraction lifecycle.
"""

import os
import time
import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Import application modules
from app.api.routes import extraction, training_files
from app.core.config import settings
from app.core.exceptions import BaseAPIException
from app.services.text_extraction_service import SUPPORTED_EXTENSIONS
from app.utils.logger import setup_logging

# Application version and metadata
__version__ = "1.0.0"
API_PREFIX = "/api"

setup_logging(settings.LOG_LEVEL, settings.ENABLE_JSON_LOGS)
logger = logging.getLogger("app.main")

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log application startup and shutdown"""
    logger.info(f"Starting {settings.PROJECT_NAME} v{__version__} in {settings.ENV} environment")
    logger.info(
        f"PDF extraction enabled: {settings.PDF_EXTRACTION_ENABLED}, "
        f"slide order: {settings.PPTX_SLIDE_ORDER}, chunk size: {settings.CHUNK_SIZE}"
    )

    yield  # Server is running and processing requests

    logger.info("Application shutdown completed")

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="""
# Learning Center Document Extraction API

Converts uploaded course documents into text the AI assistant can learn from.

## Features

- **Text extraction**: PDF, Word (.doc/.docx), Excel (.xls/.xlsx) and PowerPoint (.ppt/.pptx)
- **Text preparation**: whitespace cleaning and sentence-bounded chunking
- **Training files**: upload, background extraction, reprocessing and status tracking

Extraction of PDF and PowerPoint files is best effort: when text cannot be
recovered the response carries placeholder content and a `note` explaining why.
    """,
    version=__version__,
    openapi_url=f"{API_PREFIX}/openapi.json",
    docs_url=f"{API_PREFIX}/docs",
    redoc_url=f"{API_PREFIX}/redoc",
    lifespan=lifespan,
)

@app.middleware("http")
async def request_monitor(request: Request, call_next):
    """Log and monitor request information"""
    # Generate a unique request ID for tracking
    request_id = str(uuid.uuid4())
    request_path = request.url.path
    request_method = request.method

    request.state.request_id = request_id

    # Skip detailed logging for health check endpoints to reduce noise
    is_health_check = request_path.endswith("/health")

    if not is_health_check:
        logger.info(f"Request started: {request_method} {request_path}", extra={"request_id": request_id})

    start_time = time.time()

    try:
        response = await call_next(request)
    except Exception as e:
        logger.exception(f"Request failed: {request_method} {request_path} - Error: {str(e)}", extra={"request_id": request_id})
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error", "request_id": request_id}
        )

    process_time = time.time() - start_time
    response.headers["X-Request-ID"] = request_id
    response.headers["X-Process-Time"] = str(process_time)

    if not is_health_check:
        logger.info(
            f"Request completed: {request_method} {request_path} "
            f"- Status: {response.status_code} - Time: {process_time:.4f}s",
            extra={"request_id": request_id}
        )

    return response

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["Authorization", "Content-Type", "Accept", "Origin", "X-Requested-With"],
    expose_headers=["X-Request-ID", "X-Process-Time"],
    max_age=600,  # Cache preflight requests for 10 minutes
)

# Include API routes with versioned prefix
app.include_router(extraction, prefix=f"{API_PREFIX}/v1", tags=["Text Extraction"])
app.include_router(training_files, prefix=f"{API_PREFIX}/v1", tags=["Training Files"])

# Global exception handler
@app.exception_handler(BaseAPIException)
async def base_exception_handler(request: Request, exc: BaseAPIException):
    """Handle custom API exceptions"""
    request_id = getattr(request.state, "request_id", "unknown")
    logger.warning(
        f"API Exception: {exc.detail} - Code: {exc.error_code} ({exc.status_code}) - "
        f"Request: {request.method} {request.url.path}",
        extra={"request_id": request_id}
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.detail,
            "code": exc.error_code,
            "request_id": request_id,
        },
    )

# Health check endpoint for monitoring
@app.get(f"{API_PREFIX}/health", tags=["Health"])
async def health_check():
    """Basic health check endpoint for uptime monitoring"""
    return {
        "status": "ok",
        "version": __version__,
        "environment": settings.ENV,
        "timestamp": int(time.time()),
        "api_url": settings.API_URL
    }

# Root endpoint with API information
@app.get("/", tags=["Root"])
async def root(request: Request):
    """API root with information and documentation links"""
    base_url = str(request.base_url).rstrip('/')

    return {
        "name": settings.PROJECT_NAME,
        "version": __version__,
        "documentation": f"{base_url}{API_PREFIX}/docs",
        "redoc": f"{base_url}{API_PREFIX}/redoc",
        "openapi": f"{base_url}{API_PREFIX}/openapi.json",
        "health": f"{base_url}{API_PREFIX}/health",
        "supported_extensions": list(SUPPORTED_EXTENSIONS),
        "environment": settings.ENV,
    }

# Run the application using uvicorn if executed directly
if __name__ == "__main__":
    import uvicorn

    port = int(os.environ.get("PORT", 8000))
    log_level = os.environ.get("LOG_LEVEL", "info").lower()

    logger.info(f"Starting uvicorn server on port {port} with {settings.WORKERS} workers")

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=port,
        log_level=log_level,
        reload=settings.ENV == "development",
        workers=settings.WORKERS,
        proxy_headers=True,
        forwarded_allow_ips="*",
    )
