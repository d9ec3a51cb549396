"""
Frequently asked questions.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from clinic_cms.auth import require_admin
from clinic_cms.content import (
    item_response,
    list_response,
    message_response,
    require_found,
)
from clinic_cms.db import DbClient
from clinic_cms.dependencies import get_db_client
from clinic_cms.errors import APIError
from clinic_cms.schemas import FaqCreate, FaqUpdate

router = APIRouter(prefix="/faqs", tags=["faqs"])

COLLECTION = "faqs"
NOT_FOUND = "FAQ not found"


@router.get("")
def list_faqs(db: DbClient = Depends(get_db_client)):
    return list_response(db.find(COLLECTION, {"isActive": True}))


@router.get("/{faq_id}")
def get_faq(faq_id: str, db: DbClient = Depends(get_db_client)):
    return item_response(require_found(db.get(COLLECTION, faq_id), NOT_FOUND))


@router.post("", status_code=201, dependencies=[Depends(require_admin)])
def create_faq(payload: FaqCreate, db: DbClient = Depends(get_db_client)):
    return item_response(db.insert(COLLECTION, {**payload.model_dump(), "isActive": True}))


@router.put("/{faq_id}", dependencies=[Depends(require_admin)])
def update_faq(faq_id: str, payload: FaqUpdate, db: DbClient = Depends(get_db_client)):
    require_found(db.get(COLLECTION, faq_id), NOT_FOUND)
    return item_response(db.update(COLLECTION, faq_id, payload.changes()))


@router.delete("/{faq_id}", dependencies=[Depends(require_admin)])
def delete_faq(faq_id: str, db: DbClient = Depends(get_db_client)):
    if not db.delete(COLLECTION, faq_id):
        raise APIError(404, NOT_FOUND)
    return message_response("FAQ deleted successfully")
