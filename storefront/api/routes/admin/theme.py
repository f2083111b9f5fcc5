"""Admin API routes for storefront appearance."""

import asyncio
from typing import Dict

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.auth import AuthenticatedUser, get_settings, require_admin
from storefront.api.models import StylesheetResponse
from storefront.api.services.theme import ThemeSettings, render_theme_css, write_stylesheet
from storefront.config import StorefrontConfig
from storefront.db.repositories import SettingsRepository
from storefront.db.session import get_db
from storefront.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/admin/theme", tags=["admin", "theme"])


@router.get("", response_model=Dict[str, str])
async def get_theme(
    admin: AuthenticatedUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> Dict[str, str]:
    """Stored theme values only; keys never saved are absent."""
    return await SettingsRepository(db).get_theme()


@router.put("", response_model=Dict[str, str])
async def update_theme(
    request: ThemeSettings,
    admin: AuthenticatedUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> Dict[str, str]:
    """Upsert the theme values sent and return the full stored theme."""
    repo = SettingsRepository(db)
    values = request.to_storage()
    await repo.save_theme(values)
    await db.commit()

    logger.info(f"Admin {admin.id} updated theme", extra={"keys": sorted(values)})
    return await repo.get_theme()


@router.post("/css", response_model=StylesheetResponse)
async def generate_stylesheet(
    admin: AuthenticatedUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
    config: StorefrontConfig = Depends(get_settings),
) -> StylesheetResponse:
    """Render the stored theme (over the defaults) to the public stylesheet."""
    css = render_theme_css(await SettingsRepository(db).get_theme())
    path = await asyncio.to_thread(write_stylesheet, css, config.theme.css_path)
    return StylesheetResponse(message="CSS file generated successfully", path=str(path))
