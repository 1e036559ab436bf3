from pathlib import Path

import pytest

from socialnest import storage
from socialnest.config import Settings
from socialnest.exceptions import (
    BlobStoreUnavailable,
    FileTooLarge,
    NoMediaProvided,
    UnsupportedMediaType,
)


@pytest.mark.parametrize(
    ("filename", "content_type"),
    [("a.jpg", "image/jpeg"), ("a.JPEG", "image/jpeg"), ("a.png", "image/png")],
)
def test_validate_image_accepts_jpeg_and_png(filename: str, content_type: str) -> None:
    storage.validate_image(filename, content_type)


@pytest.mark.parametrize(
    ("filename", "content_type"),
    [("a.gif", "image/gif"), ("a.png", "text/plain"), ("a.exe", "image/png"), ("noext", "image/png")],
)
def test_validate_image_rejects_others(filename: str, content_type: str) -> None:
    with pytest.raises(UnsupportedMediaType):
        storage.validate_image(filename, content_type)


def test_validate_image_requires_a_file() -> None:
    with pytest.raises(NoMediaProvided):
        storage.validate_image(None, "image/png")


@pytest.mark.asyncio
async def test_store_local(settings: Settings, png_bytes: bytes) -> None:
    reference = await storage.store(
        png_bytes, filename="x.png", content_type="image/png", field="media", settings=settings
    )
    assert reference.startswith("media-")
    assert (Path(settings.upload_dir) / reference).read_bytes() == png_bytes


@pytest.mark.asyncio
async def test_store_rejects_oversized(settings: Settings) -> None:
    data = b"\x00" * (settings.max_upload_bytes + 1)
    with pytest.raises(FileTooLarge):
        await storage.store(
            data, filename="x.png", content_type="image/png", field="media", settings=settings
        )


@pytest.mark.asyncio
async def test_store_s3_without_credentials(settings: Settings, png_bytes: bytes) -> None:
    s3_settings = settings.model_copy(update={"blob_backend": "s3", "aws_access_key_id": ""})
    with pytest.raises(BlobStoreUnavailable):
        await storage.store(
            png_bytes, filename="x.png", content_type="image/png", field="media", settings=s3_settings
        )


@pytest.mark.asyncio
async def test_store_upload_without_file(settings: Settings) -> None:
    with pytest.raises(NoMediaProvided):
        await storage.store_upload(None, field="photo", settings=settings)
