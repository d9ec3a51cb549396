"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

import logging

from clinic_cms.config import get_settings
from clinic_cms.db import DbClient, InMemoryDbClient, MongoDbClient
from clinic_cms.features import FeatureStore
from clinic_cms.media import CloudinaryMediaClient, InMemoryMediaClient, MediaClient

logger = logging.getLogger(__name__)

_db_client: DbClient | None = None
_media_client: MediaClient | None = None
_feature_store: FeatureStore | None = None


def get_db_client() -> DbClient:
    """
    Return a singleton DB client. On serverless platforms module state
    survives warm invocations, so the Mongo connection pool is reused.
    """
    global _db_client
    if _db_client:
        return _db_client

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.mongodb_uri:
        if not settings.use_in_memory_backends:
            logger.warning("No MongoDB URI configured; using in-memory storage")
        _db_client = InMemoryDbClient()
    else:
        _db_client = MongoDbClient(
            settings.mongodb_uri,
            settings.mongodb_db_name,
            server_selection_timeout_ms=settings.mongodb_server_selection_timeout_ms,
            connect_timeout_ms=settings.mongodb_connect_timeout_ms,
            socket_timeout_ms=settings.mongodb_socket_timeout_ms,
            max_pool_size=settings.mongodb_max_pool_size,
        )
    return _db_client


def get_media_client() -> MediaClient:
    global _media_client
    if _media_client:
        return _media_client

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.cloudinary_configured:
        if not settings.use_in_memory_backends:
            logger.warning("Cloudinary credentials missing; using in-memory media host")
        _media_client = InMemoryMediaClient()
    else:
        _media_client = CloudinaryMediaClient(
            cloud_name=settings.cloudinary_cloud_name or "",
            api_key=settings.cloudinary_api_key or "",
            api_secret=settings.cloudinary_api_secret or "",
            root_folder=settings.media_root_folder,
        )
    return _media_client


def get_feature_store() -> FeatureStore:
    global _feature_store
    if _feature_store is None:
        _feature_store = FeatureStore()
    return _feature_store
