"""
The single group photo of the clinic team.
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
from clinic_cms.schemas import TeamPictureFields
from clinic_cms.uploads import discard_media, require_file, store_image

router = APIRouter(prefix="/team-pictures", tags=["team-pictures"])

COLLECTION = "teampictures"
FOLDER = "images"
NOT_FOUND = "Team picture not found"
NO_IMAGE = (
    'No image file provided. Please include an image file with field name "image".'
)


async def _upload_picture(
    media: MediaClient,
    teamName: Optional[str],
    description: Optional[str],
    image: Optional[UploadFile],
) -> dict:
    fields = parse_fields(TeamPictureFields, teamName=teamName, description=description)
    asset = await store_image(media, require_file(image, NO_IMAGE), FOLDER)
    return {"picture": asset.as_ref(), **fields.model_dump(), "isActive": True}


@router.get("")
def get_team_picture(db: DbClient = Depends(get_db_client)):
    picture = db.find_one(COLLECTION, {"isActive": True})
    if picture is None:
        raise APIError(404, "No team picture found")
    return item_response(picture)


@router.post("", dependencies=[Depends(require_admin)])
async def save_team_picture(
    teamName: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: DbClient = Depends(get_db_client),
    media: MediaClient = Depends(get_media_client),
):
    """Create the team picture, or replace the existing one."""
    doc = await _upload_picture(media, teamName, description, image)
    existing = db.find_one(COLLECTION)
    if existing is None:
        return item_response(
            db.insert(COLLECTION, doc), "Team picture created successfully"
        )

    await discard_media(media, existing.get("picture"))
    return item_response(
        db.update(COLLECTION, existing["_id"], doc), "Team picture updated successfully"
    )


@router.put("", dependencies=[Depends(require_admin)])
async def update_team_picture(
    teamName: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: DbClient = Depends(get_db_client),
    media: MediaClient = Depends(get_media_client),
):
    existing = db.find_one(COLLECTION)
    if existing is None:
        raise APIError(404, NOT_FOUND)

    doc = await _upload_picture(media, teamName, description, image)
    await discard_media(media, existing.get("picture"))
    return item_response(
        db.update(COLLECTION, existing["_id"], doc), "Team picture updated successfully"
    )


@router.delete("", dependencies=[Depends(require_admin)])
async def delete_team_picture(
    db: DbClient = Depends(get_db_client),
    media: MediaClient = Depends(get_media_client),
):
    picture = db.find_one(COLLECTION)
    if picture is None:
        raise APIError(404, NOT_FOUND)
    await discard_media(media, picture.get("picture"))
    db.delete(COLLECTION, picture["_id"])
    return message_response("Team picture deleted successfully")
