"""
Before/after treatment results.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from clinic_cms.auth import require_admin
from clinic_cms.content import (
    item_response,
    list_response,
    message_response,
    parse_fields,
    require_found,
)
from clinic_cms.db import DbClient, utc_now
from clinic_cms.dependencies import get_db_client, get_media_client
from clinic_cms.media import MediaClient
from clinic_cms.schemas import ResultFields
from clinic_cms.uploads import discard_media, require_file, store_images

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/results", tags=["results"])

COLLECTION = "results"
FOLDER = "results"
NOT_FOUND = "Result not found"


@router.get("/test")
def results_route_check():
    """Answers without touching the database."""
    return {
        "success": True,
        "message": "Results route is working! Router is properly registered.",
        "timestamp": utc_now().isoformat(),
        "route": "/api/results/test",
    }


@router.get("")
def list_results(
    active: Optional[str] = Query(None, description="Pass true for the public site"),
    db: DbClient = Depends(get_db_client),
):
    # The dashboard omits ``active`` and sees inactive results as well.
    query = {"isActive": True} if active == "true" else {}
    return list_response(db.find(COLLECTION, query))


@router.get("/{result_id}")
def get_result(result_id: str, db: DbClient = Depends(get_db_client)):
    return item_response(require_found(db.get(COLLECTION, result_id), NOT_FOUND))


@router.post("", status_code=201, dependencies=[Depends(require_admin)])
async def create_result(
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    beforeImage: Optional[UploadFile] = File(None),
    afterImage: Optional[UploadFile] = File(None),
    db: DbClient = Depends(get_db_client),
    media: MediaClient = Depends(get_media_client),
):
    fields = parse_fields(ResultFields, title=title, description=description)
    require_file(beforeImage, "Before image is required")
    require_file(afterImage, "After image is required")

    stored = await store_images(
        media, {"beforeImage": beforeImage, "afterImage": afterImage}, FOLDER
    )
    result = db.insert(
        COLLECTION,
        {
            **fields.model_dump(),
            "beforeImage": stored["beforeImage"].as_ref(),
            "afterImage": stored["afterImage"].as_ref(),
            "isActive": True,
        },
    )
    logger.info("Result created: %s", result["_id"])
    return item_response(result)


@router.delete("/{result_id}", dependencies=[Depends(require_admin)])
async def delete_result(
    result_id: str,
    db: DbClient = Depends(get_db_client),
    media: MediaClient = Depends(get_media_client),
):
    result = require_found(db.get(COLLECTION, result_id), NOT_FOUND)
    await discard_media(media, result.get("beforeImage"))
    await discard_media(media, result.get("afterImage"))
    db.delete(COLLECTION, result_id)
    return message_response("Result deleted successfully")
