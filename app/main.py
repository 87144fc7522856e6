"""
FastAPI application entry point.
Main application setup and configuration.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
from pydantic import ValidationError as PydanticValidationError
import logging

from app.config import settings
from app.database import test_database_connection, close_db_connection
from app.routers import (
    auth_router,
    properties_router,
    admin_router,
    facilities_router,
    media_router,
    inquiries_router,
    users_router
)
from app.utils.exceptions import APIException, ServiceUnavailableError
from app.services.error_handler import ErrorHandlerService
from app.middleware.validation import ValidationMiddleware

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    if not await test_database_connection():
        logger.error("Failed to connect to database on startup")
    if not settings.cloudinary_configured:
        logger.warning("Cloudinary is not configured; media uploads will be rejected")
    if not settings.email_configured:
        logger.warning("E-mail API is not configured; inquiry notifications are disabled")

    yield

    logger.info("Shutting down application")
    await close_db_connection()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Real-estate listings backend: public property search with nearby facilities and an
    inquiry form, plus a back office for listings, media, facilities, inquiries and users.

    ## Authentication

    Back-office endpoints under `/api/admin` require a bearer token from `/api/auth/login`.
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "Authentication", "description": "Login and token management"},
        {"name": "Properties", "description": "Public listing search and details"},
        {"name": "Facilities", "description": "Nearby facilities and radius queries"},
        {"name": "Inquiries", "description": "Contact form and inquiry handling"},
        {"name": "Media", "description": "Property images and videos"},
        {"name": "Admin", "description": "Back-office listing management"},
        {"name": "Users", "description": "Back-office accounts"},
        {"name": "Health", "description": "Service health"}
    ],
    lifespan=lifespan,
)

app.add_middleware(
    ValidationMiddleware,
    max_request_size=settings.max_request_size,
    # Room for the multipart boundaries and headers around the files
    max_upload_size=settings.max_upload_files * settings.max_upload_file_size + 1024 * 1024,
    enable_request_logging=settings.debug
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)

for router in (
    auth_router,
    properties_router,
    facilities_router,
    inquiries_router,
    admin_router,
    media_router,
    users_router,
):
    app.include_router(router, prefix=settings.api_prefix)


def _handler(handle):
    async def exception_handler(request: Request, exc: Exception):
        return handle(exc, request)
    return exception_handler


# Starlette picks the handler by the exception's MRO; all of them answer with the same envelope
EXCEPTION_HANDLERS = (
    (APIException, ErrorHandlerService.handle_api_exception),
    (RequestValidationError, ErrorHandlerService.handle_validation_error),
    (PydanticValidationError, ErrorHandlerService.handle_validation_error),
    (SQLAlchemyError, ErrorHandlerService.handle_database_error),
    (StarletteHTTPException, ErrorHandlerService.handle_http_exception),
    (Exception, ErrorHandlerService.handle_unexpected_error),
)

for exc_class, handle in EXCEPTION_HANDLERS:
    app.add_exception_handler(exc_class, _handler(handle))


@app.get("/", tags=["Health"])
async def root():
    """Basic API information."""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "environment": settings.environment,
        "documentation": {
            "swagger_ui": "/docs",
            "redoc": "/redoc",
            "openapi_json": "/openapi.json"
        },
        "api_prefix": settings.api_prefix
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint with database connectivity test.
    Used by container health checks and load balancers.
    """
    if not await test_database_connection():
        raise ServiceUnavailableError("Database connection failed")

    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "database": "connected",
        "media_storage": "configured" if settings.cloudinary_configured else "not configured",
        "email": "configured" if settings.email_configured else "not configured"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
