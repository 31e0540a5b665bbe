"""Local storage for uploaded icons, avatars and run proof videos."""

from __future__ import annotations

import asyncio
import secrets
import time
from pathlib import Path, PurePath

import structlog
from fastapi import UploadFile

from speedrun.config import Settings
from speedrun.errors import UploadRejectedError

logger = structlog.get_logger()

ALLOWED_MEDIA_PREFIXES = ("image/", "video/")
CHUNK_SIZE = 64 * 1024


def stored_filename(original_name: str | None, now: float | None = None) -> str:
    """Timestamped name keeping the original extension, e.g. ``1718000000000-a1b2c3d4.png``."""
    millis = int((time.time() if now is None else now) * 1000)
    suffix = PurePath(original_name or "").suffix.lower()
    return f"{millis}-{secrets.token_hex(4)}{suffix}"


def check_media_type(content_type: str | None) -> None:
    """Only image and video uploads are stored."""
    if not content_type or not content_type.startswith(ALLOWED_MEDIA_PREFIXES):
        msg = "Only image and video files are allowed"
        raise UploadRejectedError(msg)


async def _copy_limited(upload: UploadFile, target: Path, limit: int) -> int:
    """Stream ``upload`` into ``target`` chunk by chunk. Returns the byte count."""
    size = 0
    handle = await asyncio.to_thread(target.open, "wb")
    try:
        while True:
            chunk = await upload.read(CHUNK_SIZE)
            if not chunk:
                break
            size += len(chunk)
            if size > limit:
                msg = f"Uploaded file exceeds {limit} bytes"
                raise UploadRejectedError(msg)
            await asyncio.to_thread(handle.write, chunk)
    finally:
        await asyncio.to_thread(handle.close)
    if size == 0:
        msg = "Uploaded file is empty"
        raise UploadRejectedError(msg)
    return size


async def save_upload(upload: UploadFile, settings: Settings) -> str:
    """Write an upload under ``settings.upload_dir``.

    At most ``upload_max_bytes`` plus one chunk is read before an oversized
    file is refused. A refused or failed write leaves no file behind.

    Returns:
        Public relative URL of the stored file, e.g. ``/uploads/1718000000000-a1b2c3d4.mp4``.

    Raises:
        UploadRejectedError: Wrong media type, empty or oversized file.
    """
    check_media_type(upload.content_type)

    directory = Path(settings.upload_dir)
    directory.mkdir(parents=True, exist_ok=True)
    name = stored_filename(upload.filename)
    target = directory / name
    try:
        size = await _copy_limited(upload, target, settings.upload_max_bytes)
    except Exception:
        target.unlink(missing_ok=True)
        raise

    logger.info("upload_stored", filename=name, size=size, content_type=upload.content_type)
    return f"{settings.upload_url_prefix.rstrip('/')}/{name}"


def discard_upload(url: str, settings: Settings) -> None:
    """Remove a file stored by :func:`save_upload` whose owning row was never written."""
    name = PurePath(url).name
    (Path(settings.upload_dir) / name).unlink(missing_ok=True)
    logger.info("upload_discarded", filename=name)
