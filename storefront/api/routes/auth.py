"""Admin login and session introspection."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.auth import (
    AuthenticatedUser,
    TokenService,
    get_token_service,
    require_admin,
    verify_password,
)
from storefront.api.models import ErrorResponse, LoginRequest, LoginResponse, UserResponse
from storefront.db.repositories import UserRepository
from storefront.db.session import get_db
from storefront.errors import ForbiddenError, UnauthenticatedError
from storefront.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Unknown email or wrong password"},
        403: {"model": ErrorResponse, "description": "Valid credentials without the admin role"},
    },
)
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> LoginResponse:
    """Exchange admin credentials for a bearer token.

    Unknown email and wrong password give the same 401 so the response
    does not reveal which accounts exist.
    """
    user = await UserRepository(db).get_by_email(request.email)
    if user is None or not verify_password(request.password, user.password_hash):
        logger.info("Failed login attempt")
        raise UnauthenticatedError("Invalid credentials")

    if not user.is_admin:
        logger.warning("Login by non-admin user", extra={"user_id": str(user.id)})
        raise ForbiddenError()

    token = tokens.issue(user.id)
    logger.info("Admin logged in", extra={"user_id": str(user.id)})
    return LoginResponse(token=token, user=UserResponse.model_validate(user))


@router.get("/me", response_model=UserResponse)
async def me(user: AuthenticatedUser = Depends(require_admin)) -> UserResponse:
    """The admin the bearer token belongs to."""
    return UserResponse.model_validate(user)
