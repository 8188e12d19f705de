"""HTML page routes: home, the full post list and individual posts."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import HTMLResponse, Response
from fastapi.templating import Jinja2Templates

from portfolio.config import Settings
from portfolio.content import (
    ALL_POSTS,
    HOME_FEED,
    ContentFeedProjector,
    ContentIndex,
    DisplayItem,
    FeedOptions,
    render_body,
)
from portfolio.content.feed import DEFAULT_FEED_LIMIT
from portfolio.metrics import record_feed_render
from portfolio.site.profile import SiteProfile
from portfolio.site.theme import SITE_CSS

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter()


def _base_context(request: Request) -> Dict[str, Any]:
    settings: Settings = request.app.state.settings
    return {"site_title": settings.site_title, "css": SITE_CSS}


def home_feed(request: Request) -> List[DisplayItem]:
    """Project the home feed from the app's content snapshot."""

    settings: Settings = request.app.state.settings
    index: ContentIndex = request.app.state.content_index
    if settings.feed_limit == DEFAULT_FEED_LIMIT:
        projector = HOME_FEED.with_strict(settings.strict_content)
    else:
        projector = ContentFeedProjector(FeedOptions(limit=settings.feed_limit), strict=settings.strict_content)
    return projector(index.documents)


def render_not_found(request: Request) -> HTMLResponse:
    context = _base_context(request)
    context["path"] = request.url.path
    return templates.TemplateResponse(request, "not_found.html", context, status_code=status.HTTP_404_NOT_FOUND)


@router.get("/", response_class=HTMLResponse, summary="Home")
async def home(request: Request) -> HTMLResponse:
    profile: SiteProfile = request.app.state.profile
    items = home_feed(request)
    record_feed_render("home")

    context = _base_context(request)
    context.update({"profile": profile, "items": items, "engagements": profile.upcoming_first()})
    return templates.TemplateResponse(request, "home.html", context)


@router.head("/", summary="Home (HEAD)")
async def home_head() -> Response:
    """Return an empty response for HEAD requests to the home page."""

    return Response(status_code=200)


@router.get("/garden", response_class=HTMLResponse, summary="All posts")
async def garden(request: Request) -> HTMLResponse:
    settings: Settings = request.app.state.settings
    index: ContentIndex = request.app.state.content_index
    items = ALL_POSTS.with_strict(settings.strict_content)(index.documents)
    record_feed_render("garden")

    context = _base_context(request)
    context["items"] = items
    return templates.TemplateResponse(request, "garden.html", context)


@router.get("/{slug:path}", response_class=HTMLResponse, summary="Post")
async def post(request: Request, slug: str) -> HTMLResponse:
    if slug.startswith("api/"):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")

    index: ContentIndex = request.app.state.content_index
    document = index.find(slug)
    if document is None or document.draft or not document.title:
        logger.info({"event": "post_not_found", "slug": slug})
        return render_not_found(request)

    context = _base_context(request)
    context.update({"document": document, "body_html": render_body(document)})
    return templates.TemplateResponse(request, "post.html", context)
