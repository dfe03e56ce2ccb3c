"""
Standardized Error Responses - Consistent API error handling.

Every error leaves the API in the same envelope:
    {"error": true, "code": "...", "message": "...", "details": {...}, "timestamp": "..."}
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from calculator.errors import ConfigurationError, ErrorCode, InvalidInputError, TaxEngineError

logger = logging.getLogger(__name__)

# Map error codes to HTTP status codes
ERROR_STATUS_MAP = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.CONFIGURATION_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def create_error_response(
    code: str,
    message: str,
    status_code: int = status.HTTP_400_BAD_REQUEST,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    """Create a standardized error response."""
    return JSONResponse(
        status_code=status_code,
        content={
            "error": True,
            "code": code,
            "message": message,
            "details": details or {},
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )


def invalid_input_response(exc: InvalidInputError) -> JSONResponse:
    logger.info(f"Rejected calculation request: {exc.message} ({exc.details})")
    return create_error_response(
        code=exc.code.value,
        message=exc.user_message,
        status_code=ERROR_STATUS_MAP[exc.code],
        details=exc.details,
    )


def configuration_error_response(exc: ConfigurationError) -> JSONResponse:
    # Operator-facing detail goes to the log only
    logger.error(f"Tax configuration error: {exc.message} details={exc.details}")
    return create_error_response(
        code=exc.code.value,
        message=exc.user_message,
        status_code=ERROR_STATUS_MAP[exc.code],
    )


def engine_error_response(exc: TaxEngineError) -> JSONResponse:
    if isinstance(exc, ConfigurationError):
        return configuration_error_response(exc)
    if isinstance(exc, InvalidInputError):
        return invalid_input_response(exc)
    logger.error(f"Unhandled tax engine error: {exc.message}")
    return create_error_response(
        code=exc.code.value,
        message=exc.user_message,
        status_code=ERROR_STATUS_MAP.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR),
    )


def request_validation_response(exc: RequestValidationError) -> JSONResponse:
    """Pydantic validation errors with user-friendly messages."""
    errors: List[str] = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = " -> ".join(loc) or "body"
        errors.append(f"{field}: {error.get('msg', 'invalid value')}")

    return create_error_response(
        code=ErrorCode.VALIDATION_ERROR.value,
        message="Invalid request data",
        status_code=422,
        details={"errors": errors},
    )
