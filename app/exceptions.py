# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Errors should tell HOW to fix, not just WHAT failed.
#
# Every error response has the same shape:
#   {"detail": "...", "code": "...", "suggestion": "...", "details": {...}}
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class LabelApiException(Exception):
    """
    Base exception for the Barcode Label API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "LABEL_API_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}
        self.headers = headers

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Request Validation Exceptions
# =============================================================================

class MissingFieldsError(LabelApiException):
    """Raised when required body fields are absent or empty."""

    def __init__(self, fields: list[str]):
        super().__init__(
            message=f"Missing required fields: {', '.join(fields)}",
            code="MISSING_FIELDS",
            status_code=400,
            suggestion="Send productCode, salesPrice and purchasePrice in the JSON body",
            details={"missing_fields": fields}
        )


class InvalidFieldError(LabelApiException):
    """Raised when a body field has an unusable value."""

    def __init__(self, field: str, error: str):
        super().__init__(
            message=f"Invalid value for {field}: {error}",
            code="INVALID_FIELD",
            status_code=400,
            suggestion="Prices must be non-negative numbers or numeric strings like \"75.50\"",
            details={"field": field, "error": error}
        )


class InvalidBodyError(LabelApiException):
    """Raised when the request body is not a JSON object."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Request body must be a JSON object: {error}",
            code="INVALID_BODY",
            status_code=400,
            suggestion="Send Content-Type: application/json with an object body",
            details={"error": error}
        )


class PayloadTooLargeError(LabelApiException):
    """Raised when the request body exceeds the size limit."""

    def __init__(self, size_bytes: int, max_bytes: int):
        super().__init__(
            message=f"Request body too large: {size_bytes} bytes (max: {max_bytes} bytes)",
            code="PAYLOAD_TOO_LARGE",
            status_code=413,
            suggestion=f"Keep the JSON body under {max_bytes // 1024}KB",
            details={"size_bytes": size_bytes, "max_bytes": max_bytes}
        )


# =============================================================================
# Routing Exceptions
# =============================================================================

class MethodNotAllowedError(LabelApiException):
    """Raised when an endpoint is called with an unsupported HTTP method."""

    def __init__(self, method: str, allowed: list[str] | None = None):
        allowed = allowed or ["POST"]
        super().__init__(
            message="Method not allowed",
            code="METHOD_NOT_ALLOWED",
            status_code=405,
            suggestion=f"Use one of: {', '.join(allowed)}",
            details={"method": method, "allowed_methods": allowed},
            headers={"Allow": ", ".join(allowed)},
        )


class HttpError(LabelApiException):
    """Wraps framework HTTP errors (404 etc.) in the structured format."""

    def __init__(self, status_code: int, message: str, headers: dict[str, str] | None = None):
        super().__init__(
            message=message,
            code="HTTP_ERROR",
            status_code=status_code,
            headers=headers,
        )


# =============================================================================
# Rendering Exceptions
# =============================================================================

class RenderingError(LabelApiException):
    """Raised when barcode generation or label composition fails."""

    def __init__(self, error: str, code: str | None = None):
        details = {"error": error}
        if code:
            details["cause"] = code
        super().__init__(
            message="Failed to generate barcode",
            code="RENDERING_ERROR",
            status_code=500,
            suggestion="Check that productCode contains printable ASCII characters only",
            details=details
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def label_api_exception_handler(
    request: Request,
    exc: LabelApiException
) -> JSONResponse:
    """
    Convert LabelApiException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=exc.headers,
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Request validation failures are client errors, reported as 400.
    """
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": str(exc)
        }
    )
