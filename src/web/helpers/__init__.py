"""
Web Helpers - Reusable utilities for API endpoints.

Contains:
- Standardized error responses
"""

from .error_responses import (
    create_error_response,
    engine_error_response,
    request_validation_response,
)

__all__ = [
    "create_error_response",
    "engine_error_response",
    "request_validation_response",
]
