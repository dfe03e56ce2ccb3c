"""Exceptions raised by the tax calculation engine."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Standardized error codes for consistent client handling."""
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


class TaxEngineError(Exception):
    """Base exception for tax engine errors."""

    code: ErrorCode = ErrorCode.VALIDATION_ERROR

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        user_message: Optional[str] = None
    ):
        self.message = message
        self.details = details or {}
        # User-friendly message (shown to end user)
        self.user_message = user_message or message
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": True,
            "code": self.code.value,
            "message": self.user_message,
            "details": self.details,
        }


class InvalidInputError(TaxEngineError):
    """
    The request cannot be calculated as given.

    Negative income, an unknown jurisdiction, or a filing status the
    jurisdiction has no tables for. ``details`` names the field and why.
    """

    code = ErrorCode.VALIDATION_ERROR

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = dict(details or {})
        if field is not None:
            details.setdefault("field", field)
        self.field = field
        super().__init__(message, details=details)


class ConfigurationError(TaxEngineError):
    """
    Reference data is inconsistent with the engine.

    A deduction category without a cap rule, or a bracket table that is not
    contiguous. This is a deployment defect, never a user mistake.
    """

    code = ErrorCode.CONFIGURATION_ERROR

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message,
            details=details,
            user_message="Tax calculation is temporarily unavailable.",
        )
