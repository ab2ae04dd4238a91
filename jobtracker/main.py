"""
Job Tracker - reference persistence service.

Serves the JSON contract the tracker client talks to:
1. GET/POST /api/jobs, GET/PUT/DELETE /api/jobs/{id}
2. Correlation ID taken from X-Request-ID so client and server logs line up
3. Uniform {"success": false, "errors": [...]} error envelope
"""
import logging
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Union

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.exceptions import RequestValidationError

import jobtracker.models  # Force model registration with SQLAlchemy
from jobtracker.core.config import settings
from jobtracker.core.exceptions import AppException
from jobtracker.core.logging import setup_logging, request_id_var
from jobtracker.database import init_db, SessionLocal
from jobtracker.routers.api_router import api_router

# ============================================================================
# LOGGING SETUP
# ============================================================================
setup_logging()
logger = logging.getLogger(__name__)

# ============================================================================
# LIFESPAN MANAGEMENT
# ============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifecycle manager.
    - Startup: Initialize database once
    - Shutdown: Cleanup resources
    """
    logger.info(f"Starting {settings.app_name} v{settings.version} ({settings.environment})")

    try:
        init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise

    yield  # Application runs here

    logger.info("Gracefully shutting down...")


# ============================================================================
# FASTAPI INSTANCE
# ============================================================================
app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Persistence service for single-user job application tracking",
    docs_url="/docs",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# ============================================================================
# CORRELATION ID
# ============================================================================
@app.middleware("http")
async def correlation_id_middleware(request: Request, call_next):
    """Bind the caller's request id (or a fresh one) for the duration of the request."""
    req_id = request.headers.get(settings.request_id_header) or str(uuid.uuid4())
    token = request_id_var.set(req_id)
    try:
        response = await call_next(request)
    finally:
        request_id_var.reset(token)
    response.headers[settings.request_id_header] = req_id
    return response

# ============================================================================
# EXCEPTION HANDLERS
# ============================================================================
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle FastAPI validation errors (422) with structured format."""
    errors = []
    for error in exc.errors():
        # Clean up field name (loc is usually ('body', 'field_name'))
        field = error["loc"][-1] if len(error["loc"]) > 0 else "unknown"
        errors.append({
            "field": str(field),
            "msg": error["msg"]
        })

    logger.warning(f"Validation Error: {errors}")
    return JSONResponse(
        status_code=422,
        content={"success": False, "errors": errors}
    )


@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    """Handle domain-specific application exceptions."""
    logger.warning(f"AppException: {exc.message}", extra={"code": exc.error_code})
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "errors": [{"msg": exc.message, "code": exc.error_code}]
        }
    )


@app.exception_handler(StarletteHTTPException)
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: Union[HTTPException, StarletteHTTPException]):
    """Handle standard HTTP exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "errors": [{"msg": exc.detail if isinstance(exc.detail, str) else "Request failed"}]
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Fallback handler for unhandled server errors."""
    logger.exception("Unhandled server error", extra={"path": request.url.path})
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "errors": [{"msg": "An unexpected server error occurred."}]
        }
    )


# ============================================================================
# ROUTER INCLUSION
# ============================================================================
app.include_router(api_router, prefix=settings.api_prefix)

# ============================================================================
# OPERATIONAL ENDPOINTS (at root level)
# ============================================================================
@app.get("/", tags=["Health"])
def root():
    """API root endpoint."""
    return {
        "message": "Job Tracker API",
        "version": settings.version,
        "docs": "/docs",
    }


@app.get("/health", tags=["Health"])
def health_check():
    """Liveness probe for load balancers and orchestrators."""
    return {
        "status": "up",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.version,
        "environment": settings.environment,
    }


@app.get("/readiness", tags=["Health"])
def readiness_check():
    """Readiness probe - verifies database connectivity."""
    try:
        from sqlalchemy import text
        with SessionLocal() as session:
            session.execute(text("SELECT 1"))
        return {
            "status": "ready",
            "components": {"database": "connected"},
        }
    except Exception as e:
        logger.error(f"Readiness check failed: {e}")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Service not ready")


def run():
    """Console entry point: serve the API with uvicorn."""
    import uvicorn
    uvicorn.run("jobtracker.main:app", host="127.0.0.1", port=8000)
