"""
Team member cards.
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
from clinic_cms.media import MediaClient
from clinic_cms.schemas import TeamMemberFields, TeamMemberUpdate
from clinic_cms.uploads import discard_media, has_file, require_file, store_image

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/team", tags=["team"])

COLLECTION = "teams"
FOLDER = "images"
NOT_FOUND = "Team member not found"


@router.get("")
def list_team(db: DbClient = Depends(get_db_client)):
    return list_response(db.find(COLLECTION, {"isActive": True}))


@router.get("/{member_id}")
def get_team_member(member_id: str, db: DbClient = Depends(get_db_client)):
    return item_response(require_found(db.get(COLLECTION, member_id), NOT_FOUND))


@router.post("", status_code=201, dependencies=[Depends(require_admin)])
async def create_team_member(
    name: Optional[str] = Form(None),
    designation: Optional[str] = Form(None),
    speciality: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: DbClient = Depends(get_db_client),
    media: MediaClient = Depends(get_media_client),
):
    fields = parse_fields(
        TeamMemberFields, name=name, designation=designation, speciality=speciality
    )
    asset = await store_image(media, require_file(image), FOLDER)
    member = db.insert(
        COLLECTION, {"image": asset.as_ref(), **fields.model_dump(), "isActive": True}
    )
    return item_response(member)


@router.put("/{member_id}", dependencies=[Depends(require_admin)])
async def update_team_member(
    member_id: str,
    name: Optional[str] = Form(None),
    designation: Optional[str] = Form(None),
    speciality: Optional[str] = Form(None),
    isActive: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: DbClient = Depends(get_db_client),
    media: MediaClient = Depends(get_media_client),
):
    fields = parse_fields(
        TeamMemberUpdate,
        name=name,
        designation=designation,
        speciality=speciality,
        isActive=isActive,
    )
    member = require_found(db.get(COLLECTION, member_id), NOT_FOUND)

    changes = fields.changes()
    if has_file(image):
        asset = await store_image(media, image, FOLDER)
        await discard_media(media, member.get("image"))
        changes["image"] = asset.as_ref()
        logger.info("Replaced image for team member %s", member_id)
    return item_response(db.update(COLLECTION, member_id, changes))


@router.delete("/{member_id}", dependencies=[Depends(require_admin)])
async def delete_team_member(
    member_id: str,
    db: DbClient = Depends(get_db_client),
    media: MediaClient = Depends(get_media_client),
):
    member = require_found(db.get(COLLECTION, member_id), NOT_FOUND)
    await discard_media(media, member.get("image"))
    db.delete(COLLECTION, member_id)
    return message_response("Team member deleted successfully")
