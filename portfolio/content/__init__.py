"""Content index and feed projection."""

from .feed import ALL_POSTS, HOME_FEED, ContentFeedProjector, FeedOptions, project
from .index import (
    ContentIndex,
    ContentIndexError,
    DuplicateSlugError,
    load_content_index,
    render_body,
)
from .models import ContentDocument, DisplayItem, MalformedDocumentError

__all__ = [
    "ALL_POSTS",
    "HOME_FEED",
    "ContentDocument",
    "ContentFeedProjector",
    "ContentIndex",
    "ContentIndexError",
    "DisplayItem",
    "DuplicateSlugError",
    "FeedOptions",
    "MalformedDocumentError",
    "load_content_index",
    "project",
    "render_body",
]
