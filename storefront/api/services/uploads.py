"""Local image storage for product uploads."""

import asyncio
import os
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterable, Optional

from fastapi import UploadFile

from storefront.config import UploadConfig
from storefront.errors import InternalError, ValidationError
from storefront.logging_config import get_logger

logger = get_logger(__name__)

CHUNK_SIZE = 64 * 1024

CONTENT_TYPES = {
    "jpeg": "image/jpeg",
    "jpg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
}


@dataclass(frozen=True)
class StoredImage:
    filename: str
    url: str
    size: int


class ImageStorage:
    """Validates uploaded images and writes them under one directory.

    Files are named ``product-<uuid><ext>`` so client-supplied names never
    reach the filesystem.
    """

    def __init__(
        self,
        directory: str | Path,
        url_prefix: str = "/uploads",
        max_size_bytes: int = 5 * 1024 * 1024,
        allowed_extensions: Optional[Iterable[str]] = None,
    ):
        self.directory = Path(directory)
        self.url_prefix = url_prefix.rstrip("/")
        self.max_size_bytes = max_size_bytes
        self.allowed_extensions = frozenset(
            ext.lower().lstrip(".") for ext in (allowed_extensions or CONTENT_TYPES)
        )

    @classmethod
    def from_config(cls, config: UploadConfig) -> "ImageStorage":
        return cls(
            directory=config.directory,
            url_prefix=config.url_prefix,
            max_size_bytes=config.max_size_bytes,
            allowed_extensions=config.allowed_extensions,
        )

    def validate_type(self, filename: Optional[str], content_type: Optional[str]) -> str:
        """Check the extension and declared content type; return the extension.

        Raises:
            ValidationError: If either is missing or not an allowed image type
        """
        extension = Path(filename or "").suffix.lower().lstrip(".")
        if not extension or extension not in self.allowed_extensions:
            allowed = ", ".join(sorted(self.allowed_extensions))
            raise ValidationError(f"Invalid file type. Allowed: {allowed}")

        expected = CONTENT_TYPES.get(extension)
        declared = (content_type or "").split(";")[0].strip().lower()
        if expected is None or declared != expected:
            raise ValidationError("File content type does not match an allowed image type")

        return extension

    async def save(self, upload: UploadFile) -> StoredImage:
        """Stream an upload to disk.

        Raises:
            ValidationError: Wrong type, empty file, or larger than the limit
            InternalError: If the file cannot be written
        """
        extension = self.validate_type(upload.filename, upload.content_type)
        filename = f"product-{uuid.uuid4()}.{extension}"
        target = self.directory / filename

        try:
            await asyncio.to_thread(self.directory.mkdir, parents=True, exist_ok=True)
        except OSError as e:
            raise InternalError("File upload failed") from e

        try:
            size = await asyncio.to_thread(self._copy, upload.file, target)
        except ValidationError:
            self._discard(target)
            raise
        except OSError as e:
            self._discard(target)
            logger.error(f"Failed to store upload {filename}: {e}")
            raise InternalError("File upload failed") from e

        if size == 0:
            self._discard(target)
            raise ValidationError("No file uploaded")

        logger.info("Stored upload", extra={"upload_file": filename, "size": size})
        return StoredImage(filename=filename, url=f"{self.url_prefix}/{filename}", size=size)

    def _copy(self, source: BinaryIO, target: Path) -> int:
        """Copy source to target in chunks; return the byte count."""
        size = 0
        with open(target, "wb") as out:
            while chunk := source.read(CHUNK_SIZE):
                size += len(chunk)
                if size > self.max_size_bytes:
                    raise ValidationError(
                        f"File too large. Maximum size is {self.max_size_bytes // (1024 * 1024)}MB"
                    )
                out.write(chunk)
        return size

    @staticmethod
    def _discard(path: Path) -> None:
        try:
            os.unlink(path)
        except FileNotFoundError:
            pass
