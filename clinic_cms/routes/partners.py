"""
Partner logos shown on the homepage.
"""

from __future__ import annotations

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
from clinic_cms.schemas import PartnerFields, PartnerUpdate
from clinic_cms.uploads import discard_media, require_file, store_image

router = APIRouter(prefix="/partners", tags=["partners"])

COLLECTION = "partners"
NOT_FOUND = "Partner not found"


@router.get("")
def list_partners(db: DbClient = Depends(get_db_client)):
    return list_response(db.find(COLLECTION, {"isActive": True}))


@router.get("/{partner_id}")
def get_partner(partner_id: str, db: DbClient = Depends(get_db_client)):
    return item_response(require_found(db.get(COLLECTION, partner_id), NOT_FOUND))


@router.post("", status_code=201, dependencies=[Depends(require_admin)])
async def create_partner(
    partnerName: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: DbClient = Depends(get_db_client),
    media: MediaClient = Depends(get_media_client),
):
    fields = parse_fields(PartnerFields, partnerName=partnerName)
    asset = await store_image(media, require_file(image), "images")
    partner = db.insert(
        COLLECTION, {"image": asset.as_ref(), **fields.model_dump(), "isActive": True}
    )
    return item_response(partner)


@router.put("/{partner_id}", dependencies=[Depends(require_admin)])
def update_partner(
    partner_id: str,
    payload: PartnerUpdate,
    db: DbClient = Depends(get_db_client),
):
    require_found(db.get(COLLECTION, partner_id), NOT_FOUND)
    return item_response(db.update(COLLECTION, partner_id, payload.changes()))


@router.delete("/{partner_id}", dependencies=[Depends(require_admin)])
async def delete_partner(
    partner_id: str,
    db: DbClient = Depends(get_db_client),
    media: MediaClient = Depends(get_media_client),
):
    partner = require_found(db.get(COLLECTION, partner_id), NOT_FOUND)
    await discard_media(media, partner.get("image"))
    db.delete(COLLECTION, partner_id)
    return message_response("Partner deleted successfully")
