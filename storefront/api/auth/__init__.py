"""Authentication for the Storefront API.

This package provides:
- TokenService: HS256 session tokens (issue / verify)
- hash_password / verify_password: bcrypt credential hashing
- require_admin: FastAPI dependency guarding admin routes
"""

from storefront.api.auth.dependencies import (
    AuthenticatedUser,
    authenticate,
    extract_bearer_token,
    get_settings,
    get_token_service,
    require_admin,
    require_role,
)
from storefront.api.auth.passwords import hash_password, verify_password
from storefront.api.auth.tokens import TokenPayload, TokenService

__all__ = [
    "AuthenticatedUser",
    "TokenPayload",
    "TokenService",
    "authenticate",
    "extract_bearer_token",
    "get_settings",
    "get_token_service",
    "hash_password",
    "require_admin",
    "require_role",
    "verify_password",
]
