"""
Homepage hero banners: a desktop image, a mobile image and overlay text.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from clinic_cms.auth import require_admin
from clinic_cms.content import (
    item_response,
    list_response,
    message_response,
    parse_fields,
    require_found,
)
from clinic_cms.db import DbClient
from clinic_cms.dependencies import get_db_client, get_media_client
from clinic_cms.errors import APIError
from clinic_cms.media import MediaClient
from clinic_cms.schemas import HeroBannerFields, HeroBannerUpdate
from clinic_cms.uploads import discard_media, has_file, store_images

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/hero-images", tags=["hero-images"])

COLLECTION = "heroimages"
FOLDER = "hero-images"
NOT_FOUND = "Hero image not found"
IMAGE_FIELDS = ("image", "mobileImage")


async def _replace_images(
    media: MediaClient,
    existing: dict,
    image: Optional[UploadFile],
    mobile_image: Optional[UploadFile],
) -> dict:
    stored = await store_images(
        media, {"image": image, "mobileImage": mobile_image}, FOLDER
    )
    changes = {}
    for field_name, asset in stored.items():
        await discard_media(media, existing.get(field_name))
        changes[field_name] = asset.as_ref()
    return changes


@router.get("")
def list_hero_images(db: DbClient = Depends(get_db_client)):
    return list_response(db.find(COLLECTION, {"isActive": True}))


@router.get("/{hero_id}")
def get_hero_image(hero_id: str, db: DbClient = Depends(get_db_client)):
    return item_response(require_found(db.get(COLLECTION, hero_id), NOT_FOUND))


@router.post("", status_code=201, dependencies=[Depends(require_admin)])
async def create_hero_image(
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    textColor: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    mobileImage: Optional[UploadFile] = File(None),
    db: DbClient = Depends(get_db_client),
    media: MediaClient = Depends(get_media_client),
):
    fields = parse_fields(
        HeroBannerFields, title=title, description=description, textColor=textColor
    )
    if not (has_file(image) and has_file(mobileImage)):
        raise APIError(400, "Both image and mobileImage are required")

    stored = await store_images(
        media, {"image": image, "mobileImage": mobileImage}, FOLDER
    )
    hero = db.insert(
        COLLECTION,
        {
            "image": stored["image"].as_ref(),
            "mobileImage": stored["mobileImage"].as_ref(),
            **fields.model_dump(),
            "isActive": True,
        },
    )
    return item_response(hero)


@router.put("/{hero_id}", dependencies=[Depends(require_admin)])
async def update_hero_image(
    hero_id: str,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    textColor: Optional[str] = Form(None),
    isActive: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    mobileImage: Optional[UploadFile] = File(None),
    db: DbClient = Depends(get_db_client),
    media: MediaClient = Depends(get_media_client),
):
    """Update text and/or images; only the images sent are replaced."""
    fields = parse_fields(
        HeroBannerUpdate,
        title=title,
        description=description,
        textColor=textColor,
        isActive=isActive,
    )
    existing = require_found(db.get(COLLECTION, hero_id), NOT_FOUND)

    changes = fields.changes()
    changes.update(await _replace_images(media, existing, image, mobileImage))
    logger.info("Updating hero image %s fields=%s", hero_id, sorted(changes))
    return item_response(db.update(COLLECTION, hero_id, changes))


@router.put("/{hero_id}/images", dependencies=[Depends(require_admin)])
async def update_hero_image_files(
    hero_id: str,
    image: Optional[UploadFile] = File(None),
    mobileImage: Optional[UploadFile] = File(None),
    db: DbClient = Depends(get_db_client),
    media: MediaClient = Depends(get_media_client),
):
    """Images-only variant kept for older dashboard builds."""
    existing = require_found(db.get(COLLECTION, hero_id), NOT_FOUND)
    changes = await _replace_images(media, existing, image, mobileImage)
    if not changes:
        return item_response(existing)
    return item_response(db.update(COLLECTION, hero_id, changes))


@router.delete("/{hero_id}", dependencies=[Depends(require_admin)])
async def delete_hero_image(
    hero_id: str,
    db: DbClient = Depends(get_db_client),
    media: MediaClient = Depends(get_media_client),
):
    hero = require_found(db.get(COLLECTION, hero_id), NOT_FOUND)
    for field_name in IMAGE_FIELDS:
        await discard_media(media, hero.get(field_name))
    db.delete(COLLECTION, hero_id)
    return message_response("Hero image deleted successfully")
