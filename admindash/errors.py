"""
Error types for the admin dashboard service.

This module defines the exceptions raised above the record stores:
- AdminDashError: Base exception
- ValidationError: Request payload failed validation (400)
- NotFoundError: Requested record does not exist (404)
- ConflictError: A unique field is already taken (409)

Invariants:
    - All errors inherit from AdminDashError
    - Each error carries the HTTP status it maps to
    - Messages are short and safe to show to end users
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class AdminDashError(Exception):
    """Base exception for all service errors.

    Attributes:
        message: Human-readable error message
        code: Error code for programmatic handling
        details: Additional error context
        status_code: HTTP status reported for this error
    """

    status_code = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or "ADMINDASH_ERROR"
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Structured error payload for HTTP responses."""
        return {"error": self.message, "code": self.code, "details": self.details}


class ValidationError(AdminDashError):
    """Request payload validation failed.

    Raised when:
    - Required field is missing or blank
    - Field value has wrong type or is out of range
    - Enum value is not recognized
    """

    status_code = 400

    def __init__(
        self,
        message: str,
        errors: Optional[Dict[str, str]] = None,
    ) -> None:
        super().__init__(
            message,
            code="VALIDATION_ERROR",
            details={"errors": errors or {}},
        )
        self.errors = errors or {}


class NotFoundError(AdminDashError):
    """Record with the given id does not exist."""

    status_code = 404

    def __init__(self, kind: str, record_id: str) -> None:
        super().__init__(
            f"{kind} not found",
            code="NOT_FOUND",
            details={"id": record_id},
        )
        self.kind = kind
        self.record_id = record_id


class ConflictError(AdminDashError):
    """Unique field value is already used by another record."""

    status_code = 409

    def __init__(self, message: str, field_name: Optional[str] = None) -> None:
        super().__init__(
            message,
            code="CONFLICT",
            details={"field": field_name},
        )
        self.field_name = field_name
