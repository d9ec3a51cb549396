"""
Dental services: listing card plus a detailed service page.
"""

from clinic_cms.routes.articles import build_article_router
from clinic_cms.schemas import ServiceUpdate

router = build_article_router(
    prefix="/services",
    collection="services",
    body_key="serviceBlog",
    folder="services",
    label="Service",
    update_model=ServiceUpdate,
)
