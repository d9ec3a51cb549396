"""
The single homepage hero video.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from clinic_cms.auth import require_admin
from clinic_cms.content import item_response, message_response, parse_fields
from clinic_cms.db import DbClient
from clinic_cms.dependencies import get_db_client, get_media_client
from clinic_cms.errors import APIError
from clinic_cms.media import MediaClient
from clinic_cms.schemas import HeroBannerFields
from clinic_cms.uploads import discard_media, require_file, store_video

router = APIRouter(prefix="/hero-videos", tags=["hero-videos"])

COLLECTION = "herovideos"
FOLDER = "hero-videos"
ACTIVE = {"isActive": True}
NO_VIDEO = "No video file provided"


@router.get("")
def get_hero_video(db: DbClient = Depends(get_db_client)):
    hero_video = db.find_one(COLLECTION, ACTIVE)
    if hero_video is None:
        raise APIError(404, "No hero video found")
    return item_response(hero_video)


@router.post("", status_code=201, dependencies=[Depends(require_admin)])
async def create_hero_video(
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    textColor: Optional[str] = Form(None),
    video: Optional[UploadFile] = File(None),
    db: DbClient = Depends(get_db_client),
    media: MediaClient = Depends(get_media_client),
):
    fields = parse_fields(
        HeroBannerFields, title=title, description=description, textColor=textColor
    )
    if db.find_one(COLLECTION, ACTIVE) is not None:
        raise APIError(
            400,
            "Hero video limit exceeded. Only one hero video is allowed. "
            "Please delete the existing one first or use the update endpoint.",
        )

    asset = await store_video(media, require_file(video, NO_VIDEO), FOLDER)
    hero_video = db.insert(
        COLLECTION, {"video": asset.as_ref(), **fields.model_dump(), "isActive": True}
    )
    return item_response(hero_video, "Hero video created successfully")


@router.put("/update", dependencies=[Depends(require_admin)])
async def update_hero_video(
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    textColor: Optional[str] = Form(None),
    video: Optional[UploadFile] = File(None),
    db: DbClient = Depends(get_db_client),
    media: MediaClient = Depends(get_media_client),
):
    """Replace the video and all of its text in one go."""
    fields = parse_fields(
        HeroBannerFields, title=title, description=description, textColor=textColor
    )
    existing = db.find_one(COLLECTION, ACTIVE)
    if existing is None:
        raise APIError(400, "No hero video found to update. Please create one first.")

    asset = await store_video(media, require_file(video, NO_VIDEO), FOLDER)
    await discard_media(media, existing.get("video"), resource_type="video")
    updated = db.update(
        COLLECTION, existing["_id"], {"video": asset.as_ref(), **fields.model_dump()}
    )
    return item_response(updated, "Hero video updated successfully")


@router.delete("", dependencies=[Depends(require_admin)])
async def delete_hero_video(
    db: DbClient = Depends(get_db_client),
    media: MediaClient = Depends(get_media_client),
):
    hero_video = db.find_one(COLLECTION, ACTIVE)
    if hero_video is None:
        raise APIError(404, "Hero video not found")
    await discard_media(media, hero_video.get("video"), resource_type="video")
    db.delete(COLLECTION, hero_video["_id"])
    return message_response("Hero video deleted successfully")
