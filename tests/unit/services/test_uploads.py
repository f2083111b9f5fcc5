"""Tests for local image storage."""

import asyncio
from io import BytesIO

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from storefront.api.services.uploads import ImageStorage
from storefront.config import UploadConfig
from storefront.errors import ValidationError


def make_upload(data: bytes, filename: str = "photo.png", content_type: str = "image/png") -> UploadFile:
    return UploadFile(
        file=BytesIO(data),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


@pytest.fixture
def storage(tmp_path):
    return ImageStorage(tmp_path / "uploads", url_prefix="/uploads/", max_size_bytes=1024)


class TestValidateType:
    @pytest.mark.parametrize(
        ("filename", "content_type", "expected"),
        [
            ("a.png", "image/png", "png"),
            ("a.JPG", "image/jpeg", "jpg"),
            ("a.jpeg", "image/jpeg", "jpeg"),
            ("a.webp", "image/webp", "webp"),
            ("a.gif", "image/gif; charset=binary", "gif"),
        ],
    )
    def test_allowed(self, storage, filename, content_type, expected):
        assert storage.validate_type(filename, content_type) == expected

    @pytest.mark.parametrize(
        ("filename", "content_type"),
        [
            ("script.php", "image/png"),
            ("noextension", "image/png"),
            (None, "image/png"),
            ("a.png", "text/html"),
            ("a.png", None),
            ("a.png", "image/jpeg"),
        ],
    )
    def test_rejected(self, storage, filename, content_type):
        with pytest.raises(ValidationError):
            storage.validate_type(filename, content_type)

    def test_configured_extensions_restrict_types(self, tmp_path):
        storage = ImageStorage(tmp_path, allowed_extensions=[".png"])

        with pytest.raises(ValidationError, match="Allowed: png"):
            storage.validate_type("a.jpg", "image/jpeg")


class TestSave:
    async def test_writes_file_under_generated_name(self, storage, tmp_path):
        stored = await storage.save(make_upload(b"\x89PNG data", filename="../../etc/passwd.png"))

        assert stored.filename.startswith("product-")
        assert stored.filename.endswith(".png")
        assert stored.url == f"/uploads/{stored.filename}"
        assert stored.size == 9
        assert (tmp_path / "uploads" / stored.filename).read_bytes() == b"\x89PNG data"

    async def test_each_upload_gets_a_new_name(self, storage):
        first = await storage.save(make_upload(b"one"))
        second = await storage.save(make_upload(b"two"))

        assert first.filename != second.filename

    async def test_oversized_file_is_rejected_and_removed(self, storage, tmp_path):
        with pytest.raises(ValidationError, match="File too large"):
            await storage.save(make_upload(b"x" * 1025))

        assert list((tmp_path / "uploads").iterdir()) == []

    async def test_file_at_the_limit_is_accepted(self, storage):
        stored = await storage.save(make_upload(b"x" * 1024))

        assert stored.size == 1024

    async def test_empty_file_is_rejected(self, storage, tmp_path):
        with pytest.raises(ValidationError, match="No file uploaded"):
            await storage.save(make_upload(b""))

        assert list((tmp_path / "uploads").iterdir()) == []

    async def test_wrong_type_writes_nothing(self, storage, tmp_path):
        with pytest.raises(ValidationError):
            await storage.save(make_upload(b"<?php", filename="shell.php", content_type="image/png"))

        assert not (tmp_path / "uploads").exists()

    async def test_file_is_written_off_the_event_loop(self, storage, monkeypatch):
        offloaded = []
        real_to_thread = asyncio.to_thread

        async def recording_to_thread(func, *args, **kwargs):
            offloaded.append(func)
            return await real_to_thread(func, *args, **kwargs)

        monkeypatch.setattr(asyncio, "to_thread", recording_to_thread)

        stored = await storage.save(make_upload(b"data"))

        assert stored.size == 4
        assert storage._copy in offloaded


def test_from_config(tmp_path):
    config = UploadConfig(directory=str(tmp_path), url_prefix="/media", max_size_mb=1)

    storage = ImageStorage.from_config(config)

    assert storage.directory == tmp_path
    assert storage.url_prefix == "/media"
    assert storage.max_size_bytes == 1024 * 1024
