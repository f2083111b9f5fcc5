"""Shared helpers for API routes."""

from storefront.api.helpers.errors import (
    ErrorCode,
    error_body,
    error_response,
    register_exception_handlers,
)

__all__ = [
    "ErrorCode",
    "error_body",
    "error_response",
    "register_exception_handlers",
]
