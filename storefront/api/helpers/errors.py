"""Error handling for API responses.

Every failure leaves the API as ``{"error": <message>, "errorCode": <code>}``.
Domain exceptions carry their own status and code; everything else is
mapped here. Internal details are never sent to clients in production.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

import sentry_sdk
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.errors import ConflictError, InternalError, StorefrontError, ValidationError
from storefront.logging_config import get_logger

logger = get_logger(__name__)


class ErrorCode(str, Enum):
    """Machine-readable error codes.

    Format: ERR_{CATEGORY}_{NUMBER}
    """

    AUTH_UNAUTHENTICATED = "ERR_AUTH_001"
    AUTH_FORBIDDEN = "ERR_AUTH_002"
    VAL_INVALID = "ERR_VAL_001"
    RES_NOT_FOUND = "ERR_RES_001"
    RES_CONFLICT = "ERR_RES_002"
    API_BAD_REQUEST = "ERR_API_001"
    API_METHOD_NOT_ALLOWED = "ERR_API_002"
    SYS_INTERNAL_ERROR = "ERR_SYS_001"


_HTTP_STATUS_CODES: Dict[int, ErrorCode] = {
    status.HTTP_400_BAD_REQUEST: ErrorCode.API_BAD_REQUEST,
    status.HTTP_401_UNAUTHORIZED: ErrorCode.AUTH_UNAUTHENTICATED,
    status.HTTP_403_FORBIDDEN: ErrorCode.AUTH_FORBIDDEN,
    status.HTTP_404_NOT_FOUND: ErrorCode.RES_NOT_FOUND,
    status.HTTP_405_METHOD_NOT_ALLOWED: ErrorCode.API_METHOD_NOT_ALLOWED,
    status.HTTP_409_CONFLICT: ErrorCode.RES_CONFLICT,
}


def error_body(message: str, code: str | ErrorCode) -> Dict[str, Any]:
    return {"error": message, "errorCode": code.value if isinstance(code, ErrorCode) else code}


def error_response(
    status_code: int,
    message: str,
    code: str | ErrorCode,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error_body(message, code), headers=headers)


def _format_validation_errors(exc: RequestValidationError) -> str:
    """Collapse pydantic errors into one readable line.

    ``body.price: Input should be greater than or equal to 0``
    """
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        message = err.get("msg", "Invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or ValidationError.default_message


def register_exception_handlers(app: FastAPI, expose_internal_errors: bool = False) -> None:
    """Install the handlers that give every error the same JSON shape.

    Args:
        app: Application to configure
        expose_internal_errors: Include exception detail in 500 responses
            (development only)
    """

    @app.exception_handler(StorefrontError)
    async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
        else:
            logger.info(
                f"{type(exc).__name__}: {exc.message}",
                extra={"path": request.url.path, "status_code": exc.status_code},
            )
        return error_response(exc.status_code, exc.message, exc.error_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            _format_validation_errors(exc),
            ErrorCode.VAL_INVALID,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        code = _HTTP_STATUS_CODES.get(exc.status_code, ErrorCode.SYS_INTERNAL_ERROR)
        return error_response(
            exc.status_code,
            str(exc.detail),
            code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
        # Lost a uniqueness race that the repository pre-check did not catch
        logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
        return error_response(
            ConflictError.status_code,
            ConflictError.default_message,
            ConflictError.error_code,
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        sentry_sdk.capture_exception(exc)
        logger.exception(f"Unhandled exception on {request.method} {request.url.path}")

        message = InternalError.default_message
        if expose_internal_errors:
            message = f"{message} {type(exc).__name__}: {exc}"
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, message, InternalError.error_code)
