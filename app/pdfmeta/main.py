"""
FastAPI application for PDF metadata extraction.

Provides endpoints for:
- Uploading a PDF and extracting structured metadata with AI
- Health checks
- OpenAPI description and Swagger UI (/openapi.json, /docs)
"""

import logging

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .config import get_settings
from .exceptions import PipelineError
from .models import HealthResponse
from .routers import extract
from .services.pipeline import ExtractionPipeline

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

ENDPOINTS = {
    "POST /extract": "Upload a PDF to extract metadata",
    "GET /docs": "Swagger UI documentation",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info("Starting PDF Metadata Extraction Service...")
    app.state.pipeline = ExtractionPipeline.from_settings(get_settings())
    logger.info("Services initialized successfully")
    yield
    logger.info("Shutting down PDF Metadata Extraction Service...")


# Create FastAPI application
app = FastAPI(
    title="PDF Metadata Extraction API",
    description="API that extracts structured metadata from PDF documents using AI",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Health Endpoints
# =============================================================================


@app.get("/", response_model=HealthResponse)
async def root() -> HealthResponse:
    """Root endpoint - health check."""
    return HealthResponse(
        status="ok",
        message="PDF Metadata Extraction API",
        version=__version__,
        endpoints=ENDPOINTS,
    )


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="ok",
        message="Service is healthy",
        version=__version__,
        endpoints=ENDPOINTS,
    )


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(extract.router)


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(PipelineError)
async def pipeline_error_handler(request: Request, exc: PipelineError):
    """Render pipeline errors as {"error": ...} with their status code."""
    if exc.status_code >= 500:
        logger.error("Error processing PDF: %s", exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Render framework HTTP errors (e.g. a malformed multipart body) as {"error": ...}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    """Handle anything the pipeline did not map itself."""
    logger.exception("Unexpected error processing request")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": f"Failed to process PDF: {exc}"},
    )
