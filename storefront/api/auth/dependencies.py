"""FastAPI dependencies that authenticate admin requests.

Usage:
    @router.get("/admin/things")
    async def list_things(user: AuthenticatedUser = Depends(require_admin)):
        ...

Order of checks for a protected route:
1. ``Authorization`` header present and starts with ``Bearer `` (else 401)
2. Token verifies (else 401)
3. User exists and holds the required role (else 403)
"""

from dataclasses import dataclass
from typing import Callable, Optional
from uuid import UUID

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.auth.tokens import TokenService
from storefront.config import StorefrontConfig, get_config
from storefront.db.models import User, UserRole
from storefront.db.repositories import UserRepository
from storefront.db.session import get_db
from storefront.errors import ForbiddenError, UnauthenticatedError
from storefront.logging_config import get_logger, set_context

logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class AuthenticatedUser:
    """The caller of a protected route. Never carries the password hash."""

    id: UUID
    email: str
    name: Optional[str]
    role: UserRole

    @classmethod
    def from_model(cls, user: User) -> "AuthenticatedUser":
        return cls(id=user.id, email=user.email, name=user.name, role=user.role)


def get_settings() -> StorefrontConfig:
    """Configuration dependency; tests override it."""
    return get_config()


def get_token_service(config: StorefrontConfig = Depends(get_settings)) -> TokenService:
    return TokenService.from_config(config.auth)


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Pull the token out of an Authorization header value.

    Raises:
        UnauthenticatedError: If the header is missing or not a Bearer header
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise UnauthenticatedError("Unauthorized")
    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise UnauthenticatedError("Unauthorized")
    return token


async def authenticate(
    authorization: Optional[str],
    db: AsyncSession,
    tokens: TokenService,
    role: UserRole,
) -> AuthenticatedUser:
    """Resolve an Authorization header to a user holding ``role``."""
    token = extract_bearer_token(authorization)

    payload = tokens.verify(token)
    if payload is None:
        raise UnauthenticatedError("Invalid token")

    user = await UserRepository(db).get_by_id(payload.user_id)
    if user is None:
        logger.warning("Token for unknown user", extra={"user_id": str(payload.user_id)})
        raise ForbiddenError()
    if user.role != role:
        logger.warning(
            "Role check failed",
            extra={"user_id": str(user.id), "required_role": role.value},
        )
        raise ForbiddenError()

    set_context(user_id=str(user.id))
    return AuthenticatedUser.from_model(user)


def require_role(role: UserRole) -> Callable:
    """Build a dependency that admits only users holding ``role``."""

    async def dependency(
        authorization: Optional[str] = Header(default=None),
        db: AsyncSession = Depends(get_db),
        tokens: TokenService = Depends(get_token_service),
    ) -> AuthenticatedUser:
        return await authenticate(authorization, db, tokens, role)

    return dependency


require_admin = require_role(UserRole.ADMIN)
