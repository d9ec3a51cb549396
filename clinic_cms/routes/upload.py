"""
Standalone media uploads for the dashboard editor.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, File, UploadFile

from clinic_cms.auth import require_admin
from clinic_cms.dependencies import get_media_client
from clinic_cms.errors import APIError
from clinic_cms.media import MediaClient
from clinic_cms.uploads import (
    MAX_BATCH_IMAGES,
    MAX_BATCH_VIDEOS,
    has_file,
    read_image,
    read_video,
    require_file,
    store_image,
    store_video,
    upload_bytes,
)

router = APIRouter(prefix="/upload", tags=["upload"])

IMAGE_FOLDER = "images"
VIDEO_FOLDER = "videos"


def _batch(files: Optional[List[UploadFile]], limit: int, kind: str) -> list[UploadFile]:
    present = [file for file in files or [] if has_file(file)]
    if not present:
        raise APIError(400, f"No {kind} files provided")
    if len(present) > limit:
        raise APIError(400, f"Too many files. Maximum is {limit} files.")
    return present


@router.get("/test")
def upload_endpoints():
    return {
        "success": True,
        "message": "Upload endpoints are working",
        "endpoints": {
            "singleImage": "POST /api/upload/image",
            "multipleImages": "POST /api/upload/images",
            "singleVideo": "POST /api/upload/video",
            "multipleVideos": "POST /api/upload/videos",
        },
    }


@router.post("/image", dependencies=[Depends(require_admin)])
async def upload_image(
    image: Optional[UploadFile] = File(None),
    media: MediaClient = Depends(get_media_client),
):
    asset = await store_image(media, require_file(image), IMAGE_FOLDER)
    return {
        "success": True,
        "message": "Image uploaded successfully",
        "data": asset.as_dict(),
    }


@router.post("/images", dependencies=[Depends(require_admin)])
async def upload_images(
    images: Optional[List[UploadFile]] = File(None),
    media: MediaClient = Depends(get_media_client),
):
    files = _batch(images, MAX_BATCH_IMAGES, "image")
    # Reject the whole batch before anything reaches the media host.
    payloads = [(await read_image(file), file.content_type) for file in files]
    uploaded = []
    for data, ctype in payloads:
        asset = await upload_bytes(media, data, folder=IMAGE_FOLDER, content_type=ctype)
        uploaded.append(asset.as_dict())
    return {
        "success": True,
        "message": f"{len(uploaded)} images uploaded successfully",
        "data": uploaded,
    }


@router.post("/video", dependencies=[Depends(require_admin)])
async def upload_video(
    video: Optional[UploadFile] = File(None),
    media: MediaClient = Depends(get_media_client),
):
    asset = await store_video(
        media, require_file(video, "No video file provided"), VIDEO_FOLDER
    )
    return {
        "success": True,
        "message": "Video uploaded successfully",
        "data": asset.as_dict(),
    }


@router.post("/videos", dependencies=[Depends(require_admin)])
async def upload_videos(
    videos: Optional[List[UploadFile]] = File(None),
    media: MediaClient = Depends(get_media_client),
):
    files = _batch(videos, MAX_BATCH_VIDEOS, "video")
    payloads = [(await read_video(file), file.content_type) for file in files]
    uploaded = []
    for data, ctype in payloads:
        asset = await upload_bytes(
            media, data, folder=VIDEO_FOLDER, content_type=ctype, resource_type="video"
        )
        uploaded.append(asset.as_dict())
    return {
        "success": True,
        "message": f"{len(uploaded)} videos uploaded successfully",
        "data": uploaded,
    }
