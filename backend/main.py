"""
Lexora - Plain-English Legal Document Assistant
===============================================
Main FastAPI application entry point.

This application provides:
- Document upload and validation
- Legal document detection and type classification
- Clause-by-clause risk breakdown
- Keyword-matched chat about the analyzed document

Author: Lexora Team
Version: 1.0.0
"""

import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime

import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api import analyze_router, chat_router, upload_router
from core import LexoraError
from core.config import get_settings
from schemas import HealthCheckResponse

# === Configuration ===
settings = get_settings()


# === Logging Setup ===
def setup_logging():
    """Configure structured logging."""
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    # Configure structlog
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer() if settings.debug else structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Configure root logger
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )


setup_logging()
logger = structlog.get_logger(__name__)


# === Lifespan Management ===
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan management.

    Sessions and chat history live in memory, so there is nothing to open
    or flush; startup and shutdown are logged only.
    """
    logger.info(
        "Starting Lexora API",
        version=settings.app_version,
        max_file_size_mb=settings.max_file_size_mb,
        accepted_types=settings.accepted_content_types,
    )

    yield

    logger.info("Shutting down Lexora API")


# === Application Setup ===
app = FastAPI(
    title=f"{settings.app_name} API",
    description="""
    ## Plain-English Legal Document Assistant

    Lexora helps people understand legal documents:

    - **Accepts** PDF, Word (.docx) and plain text documents up to 10MB
    - **Detects** whether a document is a legal document
    - **Classifies** the document type with a confidence score
    - **Explains** each clause in plain English with a risk level
    - **Answers** common questions about the document

    ### API Flow

    1. `POST /upload` - Upload a document
    2. `POST /analyze/{documentId}` - Analyze the document
    3. `GET /analyze/{documentId}` - Retrieve the analysis
    4. `POST /chat` - Ask questions about it

    `POST /analyze` performs upload and analysis in one request.

    **This is not legal advice.** Consult a lawyer for binding advice.
    """,
    version=settings.app_version,
    license_info={
        "name": "MIT License",
        "url": "https://opensource.org/licenses/MIT"
    },
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)


# === CORS Middleware ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# === Exception Handlers ===
@app.exception_handler(LexoraError)
async def lexora_exception_handler(request: Request, exc: LexoraError):
    """Render domain errors as ErrorResponse bodies."""
    logger.warning(
        "Request rejected",
        path=request.url.path,
        error=exc.error,
        message=exc.message,
    )

    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle uncaught exceptions."""
    logger.exception("Unhandled exception", path=request.url.path, error=str(exc))

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "InternalServerError",
            "message": "An unexpected error occurred. Please try again.",
            "details": {"path": request.url.path} if settings.debug else None
        }
    )


# === Health Check ===
@app.get(
    "/health",
    response_model=HealthCheckResponse,
    tags=["Health"],
    summary="Health check",
    description="Check if the API is running."
)
async def health_check() -> HealthCheckResponse:
    """
    Health check endpoint.

    Returns the status of the API and its in-process services.
    """
    services = {
        "api": "healthy",
        "classifier": "healthy",
        "chat": "healthy"
    }

    return HealthCheckResponse(
        status="healthy",
        version=settings.app_version,
        timestamp=datetime.utcnow(),
        services=services
    )


@app.get(
    "/",
    tags=["Health"],
    summary="Root endpoint",
    description="Welcome message and API information."
)
async def root():
    """Root endpoint with welcome message."""
    return {
        "name": f"{settings.app_name} API",
        "version": settings.app_version,
        "description": "Plain-English Legal Document Assistant",
        "docs": "/docs",
        "health": "/health"
    }


# === Register Routers ===
app.include_router(upload_router)
app.include_router(analyze_router)
app.include_router(chat_router)


# === Main Entry Point ===
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
