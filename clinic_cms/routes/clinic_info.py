"""
Clinic contact details. Only one record may exist at a time.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from clinic_cms.auth import require_admin
from clinic_cms.content import item_response, message_response
from clinic_cms.db import DbClient
from clinic_cms.dependencies import get_db_client
from clinic_cms.errors import APIError
from clinic_cms.schemas import ClinicInfoCreate, ClinicInfoUpdate

router = APIRouter(prefix="/clinic-info", tags=["clinic-info"])

COLLECTION = "clinicinfos"
ACTIVE = {"isActive": True}
NOT_FOUND = "Clinic information not found"


@router.get("")
def get_clinic_info(db: DbClient = Depends(get_db_client)):
    info = db.find_one(COLLECTION, ACTIVE)
    if info is None:
        raise APIError(404, NOT_FOUND)
    return item_response(info)


@router.post("", status_code=201, dependencies=[Depends(require_admin)])
def create_clinic_info(payload: ClinicInfoCreate, db: DbClient = Depends(get_db_client)):
    if db.find_one(COLLECTION, ACTIVE) is not None:
        raise APIError(
            400,
            "Clinic information limit exceeded. Only one clinic information is "
            "allowed. Please delete the existing one first or use the update endpoint.",
        )
    info = db.insert(
        COLLECTION, {**payload.model_dump(exclude_none=True), "isActive": True}
    )
    return item_response(info, "Clinic information created successfully")


@router.put("/update", dependencies=[Depends(require_admin)])
def update_clinic_info(payload: ClinicInfoUpdate, db: DbClient = Depends(get_db_client)):
    existing = db.find_one(COLLECTION, ACTIVE)
    if existing is None:
        raise APIError(
            400, "No clinic information found to update. Please create one first."
        )
    updated = db.update(COLLECTION, existing["_id"], payload.changes())
    return item_response(updated, "Clinic information updated successfully")


@router.delete("", dependencies=[Depends(require_admin)])
def delete_clinic_info(db: DbClient = Depends(get_db_client)):
    info = db.find_one(COLLECTION, ACTIVE)
    if info is None:
        raise APIError(404, NOT_FOUND)
    db.delete(COLLECTION, info["_id"])
    return message_response("Clinic information deleted successfully")
