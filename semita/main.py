"""
Semita Neighborhood Hub - FastAPI Application Entry Point

Residents check utility status, file and vote on complaints, receive
notifications and view community insights.

DESIGN PRINCIPLES:
- The backend is the single source of truth; every write returns the
  authoritative post-mutation state
- No authentication: any caller may read or write
- Notifications are polled, never pushed
- Insights are recomputed per request, never stored
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from semita.config.storage import initialize_store
from semita.core.errors import SemitaError
from semita.core.settings import settings
from semita.routes import complaints, health, insights, notifications, services

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


# Initialize FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Neighborhood services status, complaints, notifications and community insights",
    debug=settings.DEBUG
)


@app.exception_handler(SemitaError)
async def domain_exception_handler(request: Request, exc: SemitaError):
    """Domain errors raised by the services layer become {"error": ...}."""
    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code} {type(exc).__name__}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


# Pydantic validation error handler
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Catch Pydantic validation errors and log them."""
    errors = exc.errors()
    logger.warning(f"Validation error on {request.method} {request.url.path}: {errors}")
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = f"{location}: {first.get('msg')}" if location else str(first.get("msg", "Invalid request"))
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"error": message, "details": jsonable_errors(errors)}
    )


# Global exception handler to catch ALL exceptions
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch all unhandled exceptions and log them with full traceback."""
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"}
    )


def jsonable_errors(errors):
    """Drop non-serializable ctx values (exceptions) from pydantic errors."""
    cleaned = []
    for error in errors:
        error = dict(error)
        if "ctx" in error:
            error["ctx"] = {k: str(v) for k, v in error["ctx"].items()}
        error.pop("url", None)
        cleaned.append(error)
    return cleaned


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Application lifecycle events
@app.on_event("startup")
async def startup_event():
    """
    Initialize storage and make sure the default services exist.
    """
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    try:
        store = initialize_store()
    except Exception as e:
        logger.warning(f"Storage initialization failed: {e}")
        logger.warning("The app will start but database operations may fail.")
        return

    if settings.SEED_DEFAULT_SERVICES:
        from semita.services.service_status import ServiceStatusService
        try:
            ServiceStatusService(store).seed_default_services()
        except SemitaError as e:
            logger.warning(f"Failed to seed default services: {e}")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info(f"Shutting down {settings.APP_NAME}")


# Include routers
app.include_router(health.router)
app.include_router(services.router)
app.include_router(complaints.router)
app.include_router(notifications.router)
app.include_router(insights.router)


# Root endpoint
@app.get("/")
async def root():
    """
    Root endpoint - API information.
    """
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "health": "/health",
        "notification_poll_seconds": settings.NOTIFICATION_POLL_SECONDS,
    }
