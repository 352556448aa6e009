"""
Unified exception hierarchy for pglocks.
Single source of exceptions and error responses for the whole package.

Only loading and exporting can fail. Lookups over the catalog never raise:
an unknown lock or command name is an empty result, not an error.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# ============================================================================
# PART 1: PYTHON EXCEPTIONS (for raise/catch)
# ============================================================================


class PgLocksError(Exception):
    """
    Base error for pglocks.

    Features:
    1. Structured serialization
    2. Rich context
    3. Resolution suggestions
    4. Unique ID for tracking
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        self.id: str = uuid.uuid4().hex
        self.timestamp: datetime = datetime.now(timezone.utc)
        self.message: str = message
        self.code: str = code or self.__class__.__name__
        self.context: Dict[str, Any] = context or {}
        self.cause: Optional[Exception] = cause
        self.suggestions: List[str] = []
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize for the API and CLI.

        Returns:
            {
                "error_id": "hex32chars",
                "code": "DataIntegrityError",
                "message": "Command 'X' references unknown lock 'Y'",
                "timestamp": "2024-01-20T10:30:00+00:00",
                "context": {...}
            }
        """
        result: Dict[str, Any] = {
            "error_id": self.id,
            "code": self.code,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
            "context": self.context,
        }

        if self.cause:
            result["cause"] = {"type": type(self.cause).__name__, "message": str(self.cause)}

        if self.suggestions:
            result["suggestions"] = self.suggestions

        return result

    def add_suggestion(self, suggestion: str) -> None:
        """
        Add a resolution hint.

        Example:
            error = DataIntegrityError("Unknown lock 'SHARED'")
            error.add_suggestion("Check the spelling against the locks section")
        """
        if not suggestion or not isinstance(suggestion, str):
            return

        if suggestion not in self.suggestions:
            self.suggestions.append(suggestion)


class DataIntegrityError(PgLocksError):
    """
    The reference data is inconsistent.

    Raised at load time only: dangling lock references, duplicate names,
    malformed files. Fatal, the process must not serve partial data.
    """

    pass


class ConfigurationError(PgLocksError):
    """Invalid settings or unreadable configuration file."""

    pass


class NotFoundError(PgLocksError):
    """
    A lock or command was requested by slug and does not exist.

    Only the HTTP layer raises this; the engine returns None instead.
    """

    pass


class ExportError(PgLocksError):
    """Writing the static API tree failed."""

    pass


# ============================================================================
# PART 2: HTTP RESPONSE MODELS (for API responses)
# ============================================================================


class ErrorType(str, Enum):
    """Error kinds the API can return."""

    VALIDATION = "validation_error"
    NOT_FOUND = "not_found"
    INTERNAL = "internal_error"
    CONFIGURATION = "configuration_error"
    DATA_INTEGRITY = "data_integrity_error"


class ErrorResponse(BaseModel):
    """Structured API error body."""

    error_type: ErrorType = Field(..., description="Error kind")
    message: str = Field(..., description="Main error message")
    error_id: Optional[str] = Field(default=None, description="Unique ID for tracking")
    context: Optional[Dict[str, Any]] = Field(default=None, description="Extra context")
    suggestions: Optional[List[str]] = Field(default=None, description="How to resolve")
    code: Optional[str] = Field(default=None, description="Error code")


# ============================================================================
# PART 3: HELPERS (bridge between exceptions and responses)
# ============================================================================


def not_found_error(
    resource: str, identifier: str, suggestions: Optional[List[str]] = None
) -> ErrorResponse:
    """
    Build the body for an unknown lock or command.

    Args:
        resource: Resource kind ("command", "lock")
        identifier: Slug or name that was requested
        suggestions: Optional hints

    Returns:
        ErrorResponse for a 404
    """
    return ErrorResponse(
        error_type=ErrorType.NOT_FOUND,
        message=f"{resource.capitalize()} not found: {identifier}",
        context={"resource": resource, "identifier": identifier},
        suggestions=suggestions or [f"List available {resource}s at /api/{resource}s"],
        code="not_found",
    )


def internal_error(
    message: str = "An internal error occurred",
    error_id: Optional[str] = None,
    context: Optional[Dict[str, Any]] = None,
) -> ErrorResponse:
    """
    Build the body for an unexpected failure.

    Args:
        message: Error message
        error_id: Tracking ID (generated when missing)
        context: Extra context

    Returns:
        ErrorResponse for a 500
    """
    return ErrorResponse(
        error_type=ErrorType.INTERNAL,
        message=message,
        error_id=error_id or uuid.uuid4().hex,
        context=context,
        suggestions=["Check the server logs"],
        code="internal_server_error",
    )


def from_exception(exc: PgLocksError) -> ErrorResponse:
    """
    Convert a PgLocksError into an API error body.

    Args:
        exc: Exception to convert

    Returns:
        ErrorResponse ready to serialize
    """
    error_type_map = {
        "NotFoundError": ErrorType.NOT_FOUND,
        "ConfigurationError": ErrorType.CONFIGURATION,
        "DataIntegrityError": ErrorType.DATA_INTEGRITY,
        "ExportError": ErrorType.INTERNAL,
    }

    error_type = error_type_map.get(exc.code, ErrorType.INTERNAL)

    return ErrorResponse(
        error_type=error_type,
        message=exc.message,
        error_id=exc.id,
        context=exc.context,
        suggestions=exc.suggestions or None,
        code=error_type.value,
    )


__all__ = [
    # Python exceptions
    "PgLocksError",
    "DataIntegrityError",
    "ConfigurationError",
    "NotFoundError",
    "ExportError",
    # Response models
    "ErrorType",
    "ErrorResponse",
    # Helpers
    "not_found_error",
    "internal_error",
    "from_exception",
]
