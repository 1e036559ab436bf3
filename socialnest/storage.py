"""
Blob store for uploaded media (post attachments and profile photos).

Two backends share one call: ``store(...) -> reference``.

  local:  file is written under ``settings.upload_dir``; the reference is the
          stored file name (what gets embedded in Post.media / Profile.photo).
  s3:     object is put into ``settings.s3_bucket``; the reference is the key.

Only JPEG and PNG images are accepted, matched on both the file extension and
the declared content type.
"""
from __future__ import annotations

import logging
import re
import time
import uuid
from pathlib import Path

import aioboto3
import aiofiles
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import UploadFile

from socialnest.config import Settings
from socialnest.exceptions import (
    BlobStoreUnavailable,
    FileTooLarge,
    NoMediaProvided,
    UnsupportedMediaType,
)

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS: frozenset[str] = frozenset({".jpeg", ".jpg", ".png"})
ALLOWED_CONTENT_TYPES: frozenset[str] = frozenset({"image/jpeg", "image/jpg", "image/png"})

_SAFE_FIELD = re.compile(r"[^a-zA-Z0-9_-]")


def _blob_name(field: str, original_filename: str) -> str:
    """``<field>-<millis>-<rand><ext>``, e.g. ``media-1718000000000-1a2b3c4d.png``."""
    ext = Path(original_filename).suffix.lower()
    field = _SAFE_FIELD.sub("", field) or "file"
    return f"{field}-{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}{ext}"


def validate_image(filename: str | None, content_type: str | None) -> None:
    if not filename:
        raise NoMediaProvided()
    if Path(filename).suffix.lower() not in ALLOWED_EXTENSIONS:
        raise UnsupportedMediaType()
    if (content_type or "").lower() not in ALLOWED_CONTENT_TYPES:
        raise UnsupportedMediaType()


def _s3_session(settings: Settings) -> aioboto3.Session:
    return aioboto3.Session(
        aws_access_key_id=settings.aws_access_key_id,
        aws_secret_access_key=settings.aws_secret_access_key,
        region_name=settings.aws_region,
    )


async def _store_local(data: bytes, name: str, settings: Settings) -> str:
    target_dir = Path(settings.upload_dir)
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(target_dir / name, "wb") as f:
            await f.write(data)
    except OSError:
        logger.exception("Local blob write failed for %s", name)
        raise BlobStoreUnavailable()
    return name


async def _store_s3(data: bytes, name: str, content_type: str, settings: Settings) -> str:
    if not settings.aws_access_key_id:
        raise BlobStoreUnavailable()
    key = f"uploads/{name}"
    try:
        async with _s3_session(settings).client("s3") as s3:
            await s3.put_object(
                Bucket=settings.s3_bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
    except (BotoCoreError, ClientError) as exc:
        logger.error("S3 put_object failed for key %s: %s", key, exc)
        raise BlobStoreUnavailable()
    return key


async def store(
    data: bytes,
    *,
    filename: str,
    content_type: str,
    field: str,
    settings: Settings,
) -> str:
    """Persist ``data`` and return its opaque reference."""
    if len(data) > settings.max_upload_bytes:
        raise FileTooLarge(settings.max_upload_bytes // (1024 * 1024))
    name = _blob_name(field, filename)
    if settings.blob_backend == "s3":
        return await _store_s3(data, name, content_type, settings)
    return await _store_local(data, name, settings)


async def store_upload(upload: UploadFile | None, *, field: str, settings: Settings) -> str:
    """Validate and store a multipart upload; raise NoMediaProvided if absent or empty."""
    if upload is None:
        raise NoMediaProvided()
    validate_image(upload.filename, upload.content_type)
    data = await upload.read(settings.max_upload_bytes + 1)
    if not data:
        raise NoMediaProvided()
    return await store(
        data,
        filename=upload.filename or "",
        content_type=upload.content_type or "application/octet-stream",
        field=field,
        settings=settings,
    )
