"""
Blog posts, stored with the same layout as services.
"""

from clinic_cms.routes.articles import build_article_router
from clinic_cms.schemas import BlogUpdate

router = build_article_router(
    prefix="/blogs",
    collection="blogs",
    body_key="blogContent",
    folder="blogs",
    label="Blog",
    update_model=BlogUpdate,
)
