"""Domain exceptions for Storefront.

Repositories and services raise these; the API layer converts them into
JSON error responses (see ``storefront.api.helpers.errors``). Each class
carries the HTTP status and machine-readable code it maps to.
"""

from typing import Optional


class StorefrontError(Exception):
    """Base class for all handled Storefront errors."""

    status_code: int = 500
    error_code: str = "ERR_UNKNOWN"
    default_message: str = "An error occurred. Please try again."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(StorefrontError):
    """Missing or malformed required fields."""

    status_code = 400
    error_code = "ERR_VAL_001"
    default_message = "One or more fields are missing or invalid."


class UnauthenticatedError(StorefrontError):
    """Missing, malformed, expired or tampered credentials."""

    status_code = 401
    error_code = "ERR_AUTH_001"
    default_message = "Authentication required."


class ForbiddenError(StorefrontError):
    """Valid credentials without the required role."""

    status_code = 403
    error_code = "ERR_AUTH_002"
    default_message = "Admin access required."


class NotFoundError(StorefrontError):
    """A referenced entity does not exist."""

    status_code = 404
    error_code = "ERR_RES_001"
    default_message = "Resource not found."


class ConflictError(StorefrontError):
    """Uniqueness or referential-integrity violation."""

    status_code = 409
    error_code = "ERR_RES_002"
    default_message = "Resource conflicts with existing data."


class InternalError(StorefrontError):
    """Unexpected store or IO failure."""

    status_code = 500
    error_code = "ERR_SYS_001"
    default_message = "Internal server error."
