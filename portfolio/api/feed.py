"""JSON view of the post feed."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Query, Request
from pydantic import BaseModel

from portfolio.config import Settings
from portfolio.content import ContentFeedProjector, ContentIndex, FeedOptions
from portfolio.content.feed import DEFAULT_FEED_LIMIT
from portfolio.metrics import record_feed_render

router = APIRouter(prefix="/api/v1", tags=["feed"])


class FeedItem(BaseModel):
    label: str
    target: str


class FeedResponse(BaseModel):
    items: List[FeedItem]
    count: int


@router.get("/feed", response_model=FeedResponse)
async def feed(request: Request, limit: int = Query(DEFAULT_FEED_LIMIT, ge=1, le=50)) -> FeedResponse:
    settings: Settings = request.app.state.settings
    index: ContentIndex = request.app.state.content_index
    projector = ContentFeedProjector(FeedOptions(limit=limit), strict=settings.strict_content)
    items = [FeedItem(**item.as_dict()) for item in projector(index.documents)]
    record_feed_render("api")
    return FeedResponse(items=items, count=len(items))
