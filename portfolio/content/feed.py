"""Select, order and bound content documents into feed display items."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from time import perf_counter
from typing import Iterable, List, Optional, Sequence, Tuple

from portfolio.content.models import ContentDocument, DisplayItem, MalformedDocumentError
from portfolio.metrics import record_feed_projection, record_skipped_document

logger = logging.getLogger(__name__)

DEFAULT_FEED_LIMIT = 5


@dataclass(frozen=True)
class FeedOptions:
    """Selection rules applied by :func:`project`.

    ``limit=None`` lifts the size bound; it is only used for the full post
    listing, the home feed always runs with a positive limit.
    """

    exclude_draft: bool = True
    sort_key: str = "date"
    descending: bool = True
    limit: Optional[int] = DEFAULT_FEED_LIMIT

    def __post_init__(self) -> None:
        if self.sort_key != "date":
            raise ValueError(f"Unsupported sort key '{self.sort_key}'")
        if self.limit is not None and self.limit <= 0:
            raise ValueError(f"Feed limit must be a positive integer, got {self.limit}")


def _date_key(document: ContentDocument) -> Tuple[int, datetime]:
    # Undated documents sort after every dated one in descending order.
    if document.date is None:
        return (0, datetime.min)
    return (1, document.date)


def _published(documents: Iterable[ContentDocument], options: FeedOptions) -> List[ContentDocument]:
    if not options.exclude_draft:
        return list(documents)
    return [document for document in documents if not document.draft]


def project(
    documents: Sequence[ContentDocument],
    options: FeedOptions = FeedOptions(),
    *,
    strict: bool = False,
) -> List[DisplayItem]:
    """Return the display items for ``documents`` under ``options``.

    Drafts are dropped, the rest are stably sorted by date (newest first when
    ``options.descending``) and projected to ``DisplayItem`` until the limit is
    reached. A document without a title or slug raises
    :class:`MalformedDocumentError` when ``strict`` is set and is otherwise
    skipped without taking a slot.
    """

    start = perf_counter()
    ordered = sorted(_published(documents, options), key=_date_key, reverse=options.descending)

    items: List[DisplayItem] = []
    for document in ordered:
        if options.limit is not None and len(items) >= options.limit:
            break
        missing = document.missing_field()
        if missing is not None:
            if strict:
                raise MalformedDocumentError(missing, document.source)
            record_skipped_document(missing)
            logger.warning(
                {
                    "event": "feed_document_skipped",
                    "field": missing,
                    "source": str(document.source) if document.source else None,
                }
            )
            continue
        items.append(DisplayItem(label=document.title, target=document.slug))

    record_feed_projection(perf_counter() - start)
    return items


class ContentFeedProjector:
    """Callable carrying a fixed set of feed options."""

    def __init__(self, options: FeedOptions = FeedOptions(), *, strict: bool = False) -> None:
        self.options = options
        self.strict = strict

    def __call__(self, documents: Sequence[ContentDocument]) -> List[DisplayItem]:
        return project(documents, self.options, strict=self.strict)

    def with_strict(self, strict: bool) -> "ContentFeedProjector":
        return ContentFeedProjector(self.options, strict=strict)


HOME_FEED = ContentFeedProjector(FeedOptions(limit=DEFAULT_FEED_LIMIT))
ALL_POSTS = ContentFeedProjector(FeedOptions(limit=None))
