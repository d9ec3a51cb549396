"""
Intake rules for uploaded files and helpers that push them to the media host.
"""

from __future__ import annotations

import logging
import os
import re
from typing import Optional

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from clinic_cms.errors import APIError
from clinic_cms.media import MediaAsset, MediaClient, MediaUploadError

logger = logging.getLogger(__name__)

IMAGE_TYPES = re.compile(r"jpeg|jpg|png|gif|webp|svg")
VIDEO_EXTENSIONS = re.compile(r"mp4|avi|mov|wmv|flv|webm|mkv")

MAX_IMAGE_BYTES = 10 * 1024 * 1024
MAX_VIDEO_BYTES = 100 * 1024 * 1024
MAX_BATCH_IMAGES = 5
MAX_BATCH_VIDEOS = 3


def has_file(file: Optional[UploadFile]) -> bool:
    """Browsers submit empty file inputs as a part with no filename."""
    return file is not None and not isinstance(file, str) and bool(file.filename)


def _extension(filename: str) -> str:
    return os.path.splitext(filename or "")[1].lower()


def is_allowed_image(filename: str, content_type: str) -> bool:
    return bool(
        IMAGE_TYPES.search(_extension(filename))
        and IMAGE_TYPES.search((content_type or "").lower())
    )


def is_allowed_video(filename: str, content_type: str) -> bool:
    return bool(
        VIDEO_EXTENSIONS.search(_extension(filename))
        and (content_type or "").lower().startswith("video/")
    )


async def read_image(file: UploadFile) -> bytes:
    if not is_allowed_image(file.filename, file.content_type):
        raise APIError(400, "Only image files are allowed!")
    data = await file.read()
    if len(data) > MAX_IMAGE_BYTES:
        raise APIError(400, "File too large. Maximum size is 10MB.")
    return data


async def read_video(file: UploadFile) -> bytes:
    if not is_allowed_video(file.filename, file.content_type):
        raise APIError(400, "Only video files are allowed!")
    data = await file.read()
    if len(data) > MAX_VIDEO_BYTES:
        raise APIError(400, "File too large. Maximum size is 100MB.")
    return data


async def upload_bytes(
    media: MediaClient,
    data: bytes,
    *,
    folder: str,
    content_type: str,
    resource_type: str = "image",
) -> MediaAsset:
    try:
        return await run_in_threadpool(
            media.upload,
            data,
            folder=folder,
            content_type=content_type,
            resource_type=resource_type,
        )
    except MediaUploadError as exc:
        logger.error("Media upload to %s failed: %s", folder, exc)
        raise APIError(500, f"Failed to upload {resource_type}") from exc


async def store_image(media: MediaClient, file: UploadFile, folder: str) -> MediaAsset:
    data = await read_image(file)
    logger.info(
        "Uploading image filename=%s mimetype=%s size=%d",
        file.filename,
        file.content_type,
        len(data),
    )
    return await upload_bytes(
        media, data, folder=folder, content_type=file.content_type
    )


async def store_images(
    media: MediaClient, files: dict[str, Optional[UploadFile]], folder: str
) -> dict[str, MediaAsset]:
    """
    Upload several named image fields. Every file is checked before the first
    upload so a bad second file never leaves an orphaned first one.
    """
    pending: dict[str, tuple[bytes, str]] = {}
    for name, file in files.items():
        if has_file(file):
            pending[name] = (await read_image(file), file.content_type)
    stored: dict[str, MediaAsset] = {}
    for name, (data, content_type) in pending.items():
        stored[name] = await upload_bytes(
            media, data, folder=folder, content_type=content_type
        )
    return stored


async def store_video(media: MediaClient, file: UploadFile, folder: str) -> MediaAsset:
    data = await read_video(file)
    return await upload_bytes(
        media,
        data,
        folder=folder,
        content_type=file.content_type,
        resource_type="video",
    )


async def discard_media(
    media: MediaClient, ref: Optional[dict], *, resource_type: str = "image"
) -> None:
    """Best-effort removal of a stored asset; failures never block the caller."""
    public_id = (ref or {}).get("public_id")
    if not public_id:
        return
    try:
        await run_in_threadpool(media.destroy, public_id, resource_type=resource_type)
    except MediaUploadError as exc:
        logger.warning("Could not delete %s from media host: %s", public_id, exc)


def require_file(file: Optional[UploadFile], message: str = "No image file provided") -> UploadFile:
    if not has_file(file):
        raise APIError(400, message)
    return file
