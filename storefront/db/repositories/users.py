"""User repository (the credential store)."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.db.models import User, UserRole
from storefront.errors import ConflictError
from storefront.logging_config import get_logger

logger = get_logger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRepository:
    """Lookup and creation of users."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: UUID) -> User | None:
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        result = await self.session.execute(
            select(User).where(User.email == normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def create(
        self,
        email: str,
        password_hash: str,
        name: str | None = None,
        role: UserRole = UserRole.USER,
    ) -> User:
        """Create a user.

        Raises:
            ConflictError: If the email is already registered
        """
        if await self.get_by_email(email) is not None:
            raise ConflictError("A user with this email already exists")

        user = User(
            email=normalize_email(email),
            password_hash=password_hash,
            name=name,
            role=role,
        )
        self.session.add(user)
        await self.session.flush()
        logger.info("Created user", extra={"user_id": str(user.id), "role": role.value})
        return user

    async def upsert_admin(self, email: str, password_hash: str, name: str | None = None) -> User:
        """Create an admin, or promote and reset the password of an existing user."""
        user = await self.get_by_email(email)
        if user is None:
            return await self.create(email, password_hash, name=name, role=UserRole.ADMIN)

        user.password_hash = password_hash
        user.role = UserRole.ADMIN
        if name:
            user.name = name
        await self.session.flush()
        logger.info("Updated admin user", extra={"user_id": str(user.id)})
        return user
