"""
FastAPI application entry point for the clinic CMS.
"""

from __future__ import annotations

import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import PyMongoError
from starlette.middleware.base import RequestResponseEndpoint

from clinic_cms.auth import bootstrap_admin
from clinic_cms.config import Settings, get_settings
from clinic_cms.db import DbClient, utc_now
from clinic_cms.dependencies import get_db_client
from clinic_cms.errors import register_error_handlers
from clinic_cms.routes import router

logger = logging.getLogger(__name__)

STARTED_AT = time.monotonic()

ENDPOINTS = {
    "auth": "/api/auth",
    "users": "/api/users",
    "upload": "/api/upload",
    "heroImages": "/api/hero-images",
    "heroVideos": "/api/hero-videos",
    "partners": "/api/partners",
    "team": "/api/team",
    "teamPictures": "/api/team-pictures",
    "features": "/api/features",
    "faqs": "/api/faqs",
    "feedback": "/api/feedback",
    "services": "/api/services",
    "blogs": "/api/blogs",
    "results": "/api/results",
    "clinicInfo": "/api/clinic-info",
    "docs": "/api-docs",
}


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _uptime() -> float:
    return round(time.monotonic() - STARTED_AT, 3)


@asynccontextmanager
async def lifespan(app: FastAPI):
    overrides = app.dependency_overrides
    settings = overrides.get(get_settings, get_settings)()
    db = overrides.get(get_db_client, get_db_client)()
    try:
        if bootstrap_admin(db, settings):
            logger.info("Bootstrapped admin account %s", settings.admin_email)
    except PyMongoError as exc:
        # Serverless cold starts must not fail because Mongo is briefly away.
        logger.warning("Skipping admin bootstrap, database unavailable: %s", exc)
    yield


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Dentist Website API",
        version="1.0.0",
        description="Content API behind the dental clinic website and its admin dashboard.",
        docs_url="/api-docs",
        openapi_url="/api-docs/openapi.json",
        redoc_url=None,
        lifespan=lifespan,
    )

    origins = settings.allowed_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With", "X-Request-ID"],
        expose_headers=["x-request-id"],
    )

    @app.middleware("http")
    async def request_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers["x-request-id"] = request_id
            return response
        finally:
            logger.info(
                "%s %s -> %s (%.1f ms) request_id=%s",
                request.method,
                request.url.path,
                status_code,
                (time.perf_counter() - started) * 1000.0,
                request_id,
            )

    register_error_handlers(app)
    app.include_router(router, prefix=settings.api_prefix)

    @app.get("/", tags=["service"])
    def root():
        return {
            "message": "Dentist Website API is running!",
            "status": "success",
            "timestamp": utc_now().isoformat(),
            "endpoints": ENDPOINTS,
        }

    @app.get("/health", tags=["service"])
    def health(
        db: DbClient = Depends(get_db_client),
        current: Settings = Depends(get_settings),
    ):
        return {
            "status": "OK",
            "uptime": _uptime(),
            "timestamp": utc_now().isoformat(),
            "environment": current.environment,
            "database": db.connection_state(),
        }

    @app.get(f"{settings.api_prefix}/test-connection", tags=["service"])
    def test_connection():
        return {
            "success": True,
            "message": "Backend connection successful",
            "timestamp": utc_now().isoformat(),
            "uptime": _uptime(),
        }

    @app.get("/debug/db", tags=["service"])
    def debug_db(
        db: DbClient = Depends(get_db_client),
        current: Settings = Depends(get_settings),
    ):
        return {
            "mongodbUri": current.mongodb_uri_masked,
            "database": current.mongodb_db_name,
            "connectionState": db.connection_state(),
            "environment": current.environment,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "clinic_cms.app:app",
        host="0.0.0.0",
        port=get_settings().port,
        reload=get_settings().is_development,
    )
