"""
Shared helpers for content routes: response envelopes and form parsing.
"""

from __future__ import annotations

from typing import Any, Optional, Type, TypeVar

from bson import ObjectId
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, ValidationError

from clinic_cms.errors import APIError, validation_failed

ModelT = TypeVar("ModelT", bound=BaseModel)


def serialize(doc: Any) -> Any:
    """Make a stored document JSON-safe (ObjectId -> str, datetimes -> ISO)."""
    return jsonable_encoder(doc, custom_encoder={ObjectId: str})


def list_response(docs: list[dict]) -> dict:
    return {"success": True, "count": len(docs), "data": serialize(docs)}


def item_response(doc: Optional[dict], message: Optional[str] = None) -> dict:
    payload: dict[str, Any] = {"success": True, "data": serialize(doc)}
    if message:
        payload["message"] = message
    return payload


def message_response(message: str) -> dict:
    return {"success": True, "message": message}


def require_found(doc: Optional[dict], message: str) -> dict:
    if doc is None:
        raise APIError(404, message)
    return doc


def parse_fields(model: Type[ModelT], **fields: Any) -> ModelT:
    """
    Validate multipart form fields with a pydantic model. Fields the client
    left out are dropped so optional fields stay unset.
    """
    values = {key: value for key, value in fields.items() if value is not None}
    try:
        return model.model_validate(values)
    except ValidationError as exc:
        raise validation_failed(exc) from exc
