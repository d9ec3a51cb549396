"""
Patient feedback and ratings.
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
from clinic_cms.schemas import FeedbackCreate, FeedbackUpdate

router = APIRouter(prefix="/feedback", tags=["feedback"])

COLLECTION = "feedbacks"
NOT_FOUND = "Feedback not found"


@router.get("")
def list_feedback(db: DbClient = Depends(get_db_client)):
    return list_response(db.find(COLLECTION, {"isActive": True}))


@router.get("/{feedback_id}")
def get_feedback(feedback_id: str, db: DbClient = Depends(get_db_client)):
    return item_response(require_found(db.get(COLLECTION, feedback_id), NOT_FOUND))


@router.post("", status_code=201, dependencies=[Depends(require_admin)])
def create_feedback(payload: FeedbackCreate, db: DbClient = Depends(get_db_client)):
    return item_response(db.insert(COLLECTION, {**payload.model_dump(), "isActive": True}))


@router.put("/{feedback_id}", dependencies=[Depends(require_admin)])
def update_feedback(
    feedback_id: str, payload: FeedbackUpdate, db: DbClient = Depends(get_db_client)
):
    require_found(db.get(COLLECTION, feedback_id), NOT_FOUND)
    return item_response(db.update(COLLECTION, feedback_id, payload.changes()))


@router.delete("/{feedback_id}", dependencies=[Depends(require_admin)])
def delete_feedback(feedback_id: str, db: DbClient = Depends(get_db_client)):
    if not db.delete(COLLECTION, feedback_id):
        raise APIError(404, NOT_FOUND)
    return message_response("Feedback deleted successfully")
