"""Admin image upload."""

from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from storefront.api.auth import AuthenticatedUser, get_settings, require_admin
from storefront.api.models import ErrorResponse, UploadResponse
from storefront.api.services.uploads import ImageStorage
from storefront.config import StorefrontConfig
from storefront.errors import ValidationError
from storefront.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/admin/upload", tags=["admin", "uploads"])


def get_image_storage(config: StorefrontConfig = Depends(get_settings)) -> ImageStorage:
    return ImageStorage.from_config(config.uploads)


@router.post(
    "",
    response_model=UploadResponse,
    responses={400: {"model": ErrorResponse, "description": "Missing, too large or not an image"}},
)
async def upload_image(
    image: Optional[UploadFile] = File(None, description="Image file (jpeg, jpg, png, gif, webp; max 5MB)"),
    admin: AuthenticatedUser = Depends(require_admin),
    storage: ImageStorage = Depends(get_image_storage),
) -> UploadResponse:
    """Store an uploaded image and return its public URL."""
    if image is None:
        raise ValidationError("No file uploaded")

    try:
        stored = await storage.save(image)
    finally:
        await image.close()

    logger.info(f"Admin {admin.id} uploaded {stored.filename}", extra={"size": stored.size})
    return UploadResponse(url=stored.url, filename=stored.filename)
