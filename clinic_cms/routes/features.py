"""
Feature highlight routes backed by the process-local feature store.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from clinic_cms.auth import require_admin
from clinic_cms.content import item_response, list_response, message_response
from clinic_cms.dependencies import get_feature_store
from clinic_cms.errors import APIError
from clinic_cms.features import FeatureLimitReached, FeatureStore
from clinic_cms.schemas import FeatureCreate

router = APIRouter(prefix="/features", tags=["features"])


@router.get("")
def list_features(store: FeatureStore = Depends(get_feature_store)):
    return list_response(store.all())


@router.post("", status_code=201, dependencies=[Depends(require_admin)])
def create_feature(
    payload: FeatureCreate, store: FeatureStore = Depends(get_feature_store)
):
    try:
        feature = store.add(payload.featureName, payload.featureDescription)
    except FeatureLimitReached:
        raise APIError(
            400,
            "Maximum of 2 features allowed. "
            "Please delete an existing feature before adding a new one.",
        )
    return item_response(feature)


@router.delete("/{feature_id}", dependencies=[Depends(require_admin)])
def delete_feature(feature_id: str, store: FeatureStore = Depends(get_feature_store)):
    removed = store.remove(int(feature_id)) if feature_id.isdigit() else None
    if removed is None:
        raise APIError(404, "Feature not found")
    return message_response("Feature deleted successfully")
