"""
Long-form pages made of a listing card and an article body.

Services and blogs share one document shape and differ only in the name of
the body section, so both routers are built by ``build_article_router``.
"""

from __future__ import annotations

import json
import logging
from typing import Optional, Type

from fastapi import APIRouter, Body, Depends, File, Form, UploadFile
from pydantic import TypeAdapter, ValidationError

from clinic_cms.auth import require_admin
from clinic_cms.content import (
    item_response,
    list_response,
    message_response,
    require_found,
)
from clinic_cms.db import DbClient
from clinic_cms.dependencies import get_db_client, get_media_client
from clinic_cms.errors import APIError, validation_failed
from clinic_cms.media import MediaClient
from clinic_cms.schemas import YOUTUBE_URL, Para, PointPara, TrimmedModel
from clinic_cms.uploads import discard_media, has_file, store_images

logger = logging.getLogger(__name__)

INVALID_JSON = "Invalid JSON format for paras, pointParas, or youtubeLinks"
INVALID_YOUTUBE = "Invalid YouTube URL format"

_paras = TypeAdapter(list[Para])
_point_paras = TypeAdapter(list[PointPara])


def _load_json(raw: Optional[str]):
    if not raw:
        return []
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise APIError(400, INVALID_JSON) from exc


def parse_youtube_links(raw: Optional[str]) -> list[str]:
    """Accept either a JSON array or a comma separated list of links."""
    if not raw or not raw.strip():
        return []
    raw = raw.strip()
    if raw.startswith("["):
        links = _load_json(raw)
        if not isinstance(links, list):
            raise APIError(400, INVALID_JSON)
    else:
        links = [link.strip() for link in raw.split(",") if link.strip()]
    check_youtube_links(links)
    return links


def check_youtube_links(links: Optional[list]) -> None:
    for link in links or []:
        if not isinstance(link, str) or not YOUTUBE_URL.match(link):
            raise APIError(400, INVALID_YOUTUBE)


def _validate_list(adapter: TypeAdapter, raw: Optional[str]) -> list[dict]:
    try:
        items = adapter.validate_python(_load_json(raw))
    except ValidationError as exc:
        raise validation_failed(exc) from exc
    return [item.model_dump() for item in items]


def merge_article(existing: dict, changes: dict, body_key: str) -> dict:
    """
    Merge a partial update into the stored card and body sections. Stored
    image refs are never touched by a JSON update.
    """
    merged = {
        "cardInfo": {**existing.get("cardInfo", {}), **changes.get("cardInfo", {})},
        body_key: {**existing.get(body_key, {}), **changes.get(body_key, {})},
    }
    if "isActive" in changes:
        merged["isActive"] = changes["isActive"]
    return merged


def build_article_router(
    *,
    prefix: str,
    collection: str,
    body_key: str,
    folder: str,
    label: str,
    update_model: Type[TrimmedModel],
) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[prefix.strip("/")])
    not_found = f"{label} not found"

    @router.get("")
    def list_articles(db: DbClient = Depends(get_db_client)):
        return list_response(db.find(collection, {"isActive": True}))

    @router.get("/{article_id}")
    def get_article(article_id: str, db: DbClient = Depends(get_db_client)):
        return item_response(require_found(db.get(collection, article_id), not_found))

    @router.post("", status_code=201, dependencies=[Depends(require_admin)])
    async def create_article(
        cardTitle: Optional[str] = Form(None),
        cardDescription: Optional[str] = Form(None),
        blogTitle: Optional[str] = Form(None),
        blogDescription: Optional[str] = Form(None),
        paras: Optional[str] = Form(None),
        pointParas: Optional[str] = Form(None),
        youtubeLinks: Optional[str] = Form(None),
        cardImage: Optional[UploadFile] = File(None),
        heroImage: Optional[UploadFile] = File(None),
        db: DbClient = Depends(get_db_client),
        media: MediaClient = Depends(get_media_client),
    ):
        text = [
            (value or "").strip()
            for value in (cardTitle, cardDescription, blogTitle, blogDescription)
        ]
        if not all(text):
            raise APIError(400, "Missing required fields")
        card_title, card_description, body_title, body_description = text

        body = {
            "title": body_title,
            "description": body_description,
            "paras": _validate_list(_paras, paras),
            "pointParas": _validate_list(_point_paras, pointParas),
            "youtubeLinks": parse_youtube_links(youtubeLinks),
        }
        if not (has_file(cardImage) and has_file(heroImage)):
            raise APIError(400, "Both cardImage and heroImage are required")

        stored = await store_images(
            media, {"cardImage": cardImage, "heroImage": heroImage}, folder
        )
        article = db.insert(
            collection,
            {
                "cardInfo": {
                    "title": card_title,
                    "description": card_description,
                    "image": stored["cardImage"].as_ref(),
                },
                body_key: {"heroImage": stored["heroImage"].as_ref(), **body},
                "isActive": True,
            },
        )
        logger.info("Created %s %s", label.lower(), article["_id"])
        return item_response(article)

    @router.put("/{article_id}", dependencies=[Depends(require_admin)])
    def update_article(
        article_id: str,
        payload: dict = Body(...),
        db: DbClient = Depends(get_db_client),
    ):
        existing = require_found(db.get(collection, article_id), not_found)
        try:
            changes = update_model.model_validate(payload).changes()
        except ValidationError as exc:
            raise validation_failed(exc) from exc
        check_youtube_links(changes.get(body_key, {}).get("youtubeLinks"))
        merged = merge_article(existing, changes, body_key)
        return item_response(db.update(collection, article_id, merged))

    @router.delete("/{article_id}", dependencies=[Depends(require_admin)])
    async def delete_article(
        article_id: str,
        db: DbClient = Depends(get_db_client),
        media: MediaClient = Depends(get_media_client),
    ):
        article = require_found(db.get(collection, article_id), not_found)
        await discard_media(media, article.get("cardInfo", {}).get("image"))
        await discard_media(media, article.get(body_key, {}).get("heroImage"))
        db.delete(collection, article_id)
        return message_response(f"{label} deleted successfully")

    return router
