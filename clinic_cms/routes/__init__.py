"""
HTTP routes for the content API.
"""

from __future__ import annotations

from fastapi import APIRouter

from clinic_cms.routes import (
    auth,
    blogs,
    clinic_info,
    faqs,
    features,
    feedback,
    hero_images,
    hero_videos,
    partners,
    results,
    services,
    team,
    team_pictures,
    upload,
)

router = APIRouter()

router.include_router(auth.router)
router.include_router(auth.users_router)
for module in (
    hero_images,
    hero_videos,
    partners,
    team,
    team_pictures,
    features,
    faqs,
    feedback,
    services,
    blogs,
    results,
    clinic_info,
    upload,
):
    router.include_router(module.router)
