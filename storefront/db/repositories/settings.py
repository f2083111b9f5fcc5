"""Key/value settings persistence, used for the storefront theme."""

from typing import Mapping

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.db.models import Setting
from storefront.logging_config import get_logger

logger = get_logger(__name__)

THEME_PREFIX = "theme_"


class SettingsRepository:
    """Stores flat string settings under namespaced keys."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_prefixed(self, prefix: str) -> dict[str, str]:
        """All settings whose key starts with prefix, with the prefix removed."""
        result = await self.session.execute(
            select(Setting).where(Setting.key.startswith(prefix, autoescape=True))
        )
        return {row.key[len(prefix):]: row.value for row in result.scalars().all()}

    async def upsert_prefixed(self, prefix: str, values: Mapping[str, str]) -> None:
        """Insert or overwrite each value under ``prefix + key``.

        Keys not present in values are left untouched.
        """
        if not values:
            return

        keys = [f"{prefix}{key}" for key in values]
        result = await self.session.execute(select(Setting).where(Setting.key.in_(keys)))
        existing = {row.key: row for row in result.scalars().all()}

        for key, value in values.items():
            full_key = f"{prefix}{key}"
            if full_key in existing:
                existing[full_key].value = value
            else:
                self.session.add(Setting(key=full_key, value=value))

        await self.session.flush()
        logger.info("Saved settings", extra={"prefix": prefix, "count": len(values)})

    async def get_theme(self) -> dict[str, str]:
        return await self.get_prefixed(THEME_PREFIX)

    async def save_theme(self, values: Mapping[str, str]) -> None:
        await self.upsert_prefixed(THEME_PREFIX, values)
