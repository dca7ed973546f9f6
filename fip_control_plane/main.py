# fip_control_plane/main.py
"""
Floating IP Control Plane - Main Application
FastAPI application entry point
"""

import uvicorn
import logging
from datetime import datetime
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from .api.v1 import floating_ips
from .database.session import init_db, db_manager
from .config import settings
from .core.errors import (
    ConvergenceCancelled,
    ConvergenceTimeout,
    FloatingIPPermissionError,
    TransportError,
)
from .schemas.base import HealthResponse

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Track startup time
startup_time = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan events
    - Startup: Initialize database
    - Shutdown: Cleanup resources
    """
    global startup_time

    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENV}")

    init_db()
    startup_time = datetime.utcnow()

    logger.info("Application started successfully")

    yield

    logger.info("Shutting down application")


app = FastAPI(
    title=settings.APP_NAME,
    description="""
    Floating IP Control Plane API

    Manages the lifecycle of floating IPs on the cloud networking service:
    - Idempotent get-or-create by address
    - Port association with convergence wait
    - Idempotent release by address

    ## Authentication

    All floating IP endpoints require the X-Admin-Token header
    """,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)


# === Exception Handlers ===

def _error_response(status_code: int, error: str, error_code: str, details: dict = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": error,
            "error_code": error_code,
            "details": details,
            "timestamp": datetime.utcnow().isoformat()
        }
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle Pydantic validation errors"""
    errors = []
    for error in exc.errors():
        errors.append({
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"]
        })

    return _error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Validation error",
        "VALIDATION_ERROR",
        {"errors": errors}
    )


@app.exception_handler(FloatingIPPermissionError)
async def permission_exception_handler(request: Request, exc: FloatingIPPermissionError):
    """Address pinning refused by the networking service"""
    logger.warning(str(exc))
    return _error_response(
        status.HTTP_403_FORBIDDEN,
        str(exc),
        "FLOATING_IP_PERMISSION_DENIED",
        {"status_code": exc.status_code}
    )


@app.exception_handler(TransportError)
async def transport_exception_handler(request: Request, exc: TransportError):
    """Networking service call failed"""
    logger.error(f"Remote API error: {exc}")
    if exc.status_code == 404:
        return _error_response(
            status.HTTP_404_NOT_FOUND, str(exc), "FLOATING_IP_NOT_FOUND", {"status_code": 404}
        )
    return _error_response(
        status.HTTP_502_BAD_GATEWAY,
        str(exc),
        "REMOTE_API_ERROR",
        {"status_code": exc.status_code}
    )


@app.exception_handler(ConvergenceTimeout)
async def convergence_timeout_handler(request: Request, exc: ConvergenceTimeout):
    """Floating IP never became ACTIVE"""
    logger.error(str(exc))
    return _error_response(
        status.HTTP_504_GATEWAY_TIMEOUT,
        str(exc),
        "CONVERGENCE_TIMEOUT",
        {"floating_ip_id": exc.floating_ip_id, "attempts": exc.attempts}
    )


@app.exception_handler(ConvergenceCancelled)
async def convergence_cancelled_handler(request: Request, exc: ConvergenceCancelled):
    """Convergence wait abandoned"""
    logger.warning(str(exc))
    return _error_response(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        str(exc),
        "CONVERGENCE_CANCELLED",
        {"floating_ip_id": exc.floating_ip_id, "attempts": exc.attempts}
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions"""
    logger.exception(f"Unexpected error: {exc}")

    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
        "INTERNAL_ERROR",
        {"message": str(exc)} if settings.DEBUG else None
    )


# === Include Routers ===

app.include_router(
    floating_ips.router,
    prefix=settings.API_PREFIX,
    tags=["Floating IPs"]
)


# === Root Endpoints ===

@app.get(
    "/",
    summary="Root endpoint",
    description="Welcome message and API info"
)
async def read_root():
    """Root endpoint with API information"""
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "redoc": "/redoc",
        "health": "/health"
    }


@app.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check application and database health"
)
async def health_check():
    """Health check endpoint for monitoring"""
    db_status = "connected" if db_manager.check_connection() else "disconnected"

    uptime = None
    if startup_time:
        uptime = (datetime.utcnow() - startup_time).total_seconds()

    return HealthResponse(
        status="healthy" if db_status == "connected" else "unhealthy",
        service="fip-control-plane",
        version=settings.APP_VERSION,
        uptime_seconds=uptime,
        database=db_status
    )


def run() -> None:
    """Console entry point"""
    uvicorn.run(
        "fip_control_plane.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    run()
