"""
Error response schemas for API documentation and consistent error formatting.
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Any


class ErrorDetail(BaseModel):
    """Schema for individual error detail."""

    field: Optional[str] = Field(
        None,
        description="Field name that caused the error",
        examples=["price"]
    )

    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Input should be greater than or equal to 0"]
    )

    type: Optional[str] = Field(
        None,
        description="Error type identifier",
        examples=["greater_than_equal"]
    )

    input: Optional[Any] = Field(None, description="Input value that caused the error")


class ErrorResponse(BaseModel):
    """Schema for standardized error responses."""

    code: str = Field(..., description="Error code identifier", examples=["NOT_FOUND"])
    message: str = Field(..., description="Human-readable error message")
    timestamp: str = Field(..., description="Error timestamp in ISO format")
    request_id: Optional[str] = Field(None, description="Request identifier for tracking")
    details: Optional[List[ErrorDetail]] = Field(
        None,
        description="Detailed error information for validation errors"
    )


class APIErrorResponse(BaseModel):
    """Schema for API error response wrapper."""

    error: ErrorResponse


def _error_example(description: str, code: str, message: str) -> dict:
    return {
        "description": description,
        "model": APIErrorResponse,
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": code,
                        "message": message,
                        "timestamp": "2024-01-01T00:00:00+00:00",
                        "request_id": "abc12345"
                    }
                }
            }
        }
    }


# Common error responses for route documentation
COMMON_ERROR_RESPONSES = {
    400: _error_example("Bad Request - Invalid request parameters", "BAD_REQUEST", "Invalid property ID: abc"),
    401: _error_example("Unauthorized - Authentication required", "UNAUTHORIZED", "Authentication required"),
    403: _error_example("Forbidden - Insufficient permissions", "FORBIDDEN", "Insufficient permissions to delete properties"),
    404: _error_example("Not Found - Resource does not exist", "NOT_FOUND", "Property not found with ID: 42"),
    409: _error_example("Conflict - Resource already exists", "CONFLICT", "User with identifier 'admin' already exists"),
    422: _error_example("Unprocessable Entity - Validation failed", "VALIDATION_ERROR", "Request validation failed"),
    500: _error_example("Internal Server Error", "INTERNAL_SERVER_ERROR", "An unexpected error occurred"),
}


def get_error_responses(*status_codes: int) -> dict:
    """Pick documented error responses for a route's ``responses=`` argument."""
    return {code: COMMON_ERROR_RESPONSES[code] for code in status_codes if code in COMMON_ERROR_RESPONSES}
