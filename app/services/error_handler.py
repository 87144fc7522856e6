"""
Error handling service for consistent error response formatting and logging.
Every error leaves the API as {"error": {code, message, timestamp, request_id, details?}}.
"""

from typing import Dict, Any, Optional, List, Mapping
from datetime import datetime, timezone
from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from app.utils.exceptions import APIException
import logging
import uuid

logger = logging.getLogger(__name__)

# Substring of the driver message -> client-safe description
CONSTRAINT_MESSAGES = (
    ("unique", "Duplicate value for unique field"),
    ("foreign key", "Referenced record does not exist"),
    ("not null", "Required field cannot be empty"),
    ("check constraint", "Value does not meet validation requirements"),
)


class ErrorHandlerService:
    """
    Formats errors consistently across the application.
    Internal details of database and unexpected errors are logged, never returned.
    """

    @staticmethod
    def format_error_response(
        error_code: str,
        message: str,
        details: Optional[List[Dict[str, Any]]] = None,
        request_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Build the error envelope.

        Args:
            error_code: Machine-readable code such as ``NOT_FOUND``
            message: Human-readable message
            details: Per-field problems, omitted when empty
            request_id: Correlates the response with server logs
        """
        error: Dict[str, Any] = {
            "code": error_code,
            "message": message,
            "timestamp": ErrorHandlerService._get_current_timestamp(),
        }
        if details:
            error["details"] = details
        if request_id:
            error["request_id"] = request_id
        return {"error": error}

    @staticmethod
    def _respond(
        request_id: str,
        status_code: int,
        error_code: str,
        message: str,
        details: Optional[List[Dict[str, Any]]] = None,
        headers: Optional[Mapping[str, str]] = None
    ) -> JSONResponse:
        content = ErrorHandlerService.format_error_response(error_code, message, details, request_id)
        return JSONResponse(status_code=status_code, content=jsonable_encoder(content), headers=headers)

    @staticmethod
    def _log_context(request: Optional[Request], **extra) -> Dict[str, Any]:
        return {
            "request_id": ErrorHandlerService._get_request_id(request),
            "path": request.url.path if request else None,
            **extra,
        }

    @staticmethod
    def handle_api_exception(
        exception: APIException,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """Application exceptions carry their own status and code."""
        context = ErrorHandlerService._log_context(
            request, error_code=exception.error_code, status_code=exception.status_code
        )
        logger.warning(
            f"API Exception [{context['request_id']}]: {exception.error_code} - {exception.detail}",
            extra=context
        )
        return ErrorHandlerService._respond(
            context["request_id"],
            exception.status_code,
            exception.error_code or "API_ERROR",
            exception.detail,
            details=getattr(exception, "field_errors", None),
            headers=exception.headers
        )

    @staticmethod
    def handle_validation_error(
        exception: Any,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Request or pydantic validation errors as a 422 listing every failing field.

        ``exception`` is anything with an ``errors()`` method in pydantic's format.
        """
        details = [
            {
                "field": " -> ".join(str(loc) for loc in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
                "input": error.get("input"),
            }
            for error in exception.errors()
        ]

        context = ErrorHandlerService._log_context(request, error_count=len(details))
        logger.warning(f"Validation Error [{context['request_id']}]: {len(details)} field errors", extra=context)

        return ErrorHandlerService._respond(
            context["request_id"], 422, "VALIDATION_ERROR", "Request validation failed", details=details
        )

    @staticmethod
    def handle_database_error(
        exception: SQLAlchemyError,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """Integrity violations become 409; any other database failure is a 500."""
        if isinstance(exception, IntegrityError):
            status_code, error_code = 409, "INTEGRITY_ERROR"
            constraint = ErrorHandlerService._extract_constraint_info(exception)
            message = f"Constraint violation: {constraint}" if constraint else "Data integrity constraint violation"
        else:
            status_code, error_code = 500, "DATABASE_ERROR"
            message = "Database operation failed"

        context = ErrorHandlerService._log_context(
            request, error_code=error_code, exception_type=type(exception).__name__
        )
        logger.error(
            f"Database Error [{context['request_id']}]: {error_code} - {exception}",
            extra=context,
            exc_info=True
        )
        return ErrorHandlerService._respond(context["request_id"], status_code, error_code, message)

    @staticmethod
    def handle_http_exception(
        exception: StarletteHTTPException,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """Framework HTTP errors such as unknown routes (404) or bad methods (405)."""
        context = ErrorHandlerService._log_context(request, status_code=exception.status_code)
        logger.warning(
            f"HTTP Exception [{context['request_id']}]: {exception.status_code} - {exception.detail}",
            extra=context
        )
        return ErrorHandlerService._respond(
            context["request_id"],
            exception.status_code,
            f"HTTP_{exception.status_code}",
            str(exception.detail),
            headers=getattr(exception, "headers", None)
        )

    @staticmethod
    def handle_unexpected_error(
        exception: Exception,
        request: Optional[Request] = None
    ) -> JSONResponse:
        context = ErrorHandlerService._log_context(request, exception_type=type(exception).__name__)
        logger.error(
            f"Unexpected Error [{context['request_id']}]: {type(exception).__name__} - {exception}",
            extra=context,
            exc_info=exception
        )
        return ErrorHandlerService._respond(
            context["request_id"], 500, "INTERNAL_SERVER_ERROR", "An unexpected error occurred. Please try again later."
        )

    @staticmethod
    def _get_request_id(request: Optional[Request]) -> str:
        """Request ID assigned by the middleware, or a fresh one."""
        request_id = getattr(request.state, "request_id", None) if request is not None else None
        return request_id or str(uuid.uuid4())[:8]

    @staticmethod
    def _get_current_timestamp() -> str:
        return datetime.now(timezone.utc).isoformat()

    @staticmethod
    def _extract_constraint_info(exception: IntegrityError) -> Optional[str]:
        """Client-safe description of the violated constraint, if recognisable."""
        error_msg = str(exception.orig).lower()
        for needle, description in CONSTRAINT_MESSAGES:
            if needle in error_msg:
                return description
        return None
