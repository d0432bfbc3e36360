"""
Recognition Hub Detector API - Main Entry Point

Exposes the detector adapters over HTTP.
Uses core/ for configuration, exceptions, and logging.
"""

from dotenv import load_dotenv
load_dotenv()

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import uvicorn

from core.config import settings, VERSION
from core.exceptions import AppException
from core.responses import ApiResponse
from core.logging import setup_logging, get_logger, log_error

# Setup logging first
setup_logging(level="INFO" if not settings.debug else "DEBUG")
logger = get_logger(__name__)

from routers import detectors
from services.detectors import reset_detectors


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    reset_detectors()


# ============================================================
# Application Setup
# ============================================================

app = FastAPI(
    title="Recognition Hub Detector API",
    description="Detector adapters for the face recognition hub",
    version=VERSION,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    lifespan=lifespan,
)

app.include_router(detectors.router)

# ============================================================
# Global Exception Handlers
# ============================================================

@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    """
    Handle all custom AppException and subclasses.
    Returns unified ApiResponse format.
    """
    logger.warning(f"AppException: {exc.code} - {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=ApiResponse.from_exception(exc).model_dump()
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """
    Handle unexpected exceptions.
    Logs full traceback and returns generic error.
    """
    log_error(logger, exc, context="unhandled")
    return JSONResponse(
        status_code=500,
        content=ApiResponse.fail(
            message="Internal server error",
            code="INTERNAL_ERROR"
        ).model_dump()
    )


# ============================================================
# Root Endpoints
# ============================================================

@app.get("/api/health")
async def health_check():
    """
    Health check endpoint.
    Returns service status and enabled detectors.
    """
    return ApiResponse.ok({
        "status": "healthy",
        "service": "recognition-hub-detectors",
        "version": VERSION,
        "detectors": settings.enabled_detectors,
    })


if __name__ == "__main__":
    logger.info(f"Starting Recognition Hub Detector API v{VERSION}")
    uvicorn.run(app, host=settings.server_host, port=settings.server_port)
