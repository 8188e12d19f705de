"""Load markdown posts with YAML front matter into an in-memory content index."""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

import markdown
import yaml

from portfolio.content.models import ContentDocument

logger = logging.getLogger(__name__)

POST_SUFFIXES = (".md", ".mdx")
WORDS_PER_MINUTE = 265

_FRONT_MATTER = re.compile(r"\A---[ \t]*\n(?:(.*?)\n)?---[ \t]*(?:\n|\Z)", re.DOTALL)
_WORD = re.compile(r"\w+")


class ContentIndexError(ValueError):
    """Raised when a content file cannot be turned into a document."""


class DuplicateSlugError(ContentIndexError):
    """Raised when two content files resolve to the same slug."""


def split_front_matter(text: str) -> Tuple[Dict[str, Any], str]:
    """Split ``text`` into its front-matter mapping and the markdown body."""

    text = text.lstrip("\ufeff")
    match = _FRONT_MATTER.match(text)
    if match is None:
        return {}, text
    try:
        meta = yaml.safe_load(match.group(1) or "") or {}
    except yaml.YAMLError as exc:
        raise ContentIndexError(f"Invalid front matter: {exc}") from exc
    if not isinstance(meta, dict):
        raise ContentIndexError("Front matter must be a mapping")
    return meta, text[match.end():]


def parse_date(value: Any) -> Optional[datetime]:
    """Coerce a front-matter date to a naive UTC ``datetime``."""

    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError as exc:
            raise ContentIndexError(f"Invalid date '{value}'") from exc
    else:
        raise ContentIndexError(f"Invalid date '{value!r}'")
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def estimate_read_time(body: str) -> int:
    """Return whole minutes to read ``body``, never less than one."""

    words = len(_WORD.findall(body))
    return max(1, math.floor(words / WORDS_PER_MINUTE + 0.5))


def normalize_slug(raw: str) -> str:
    cleaned = raw.strip().strip("/")
    return f"/{cleaned}/" if cleaned else "/"


def slug_for_path(path: Path, root: Path) -> str:
    """Derive a slug from the file location: ``posts/a/index.md`` is ``/a/``."""

    relative = path.relative_to(root).with_suffix("")
    parts = list(relative.parts)
    if parts and parts[-1] == "index":
        parts = parts[:-1]
    return normalize_slug("/".join(parts))


def document_from_text(text: str, *, slug: Optional[str] = None, source: Optional[Path] = None) -> ContentDocument:
    """Build a document from raw markdown with front matter."""

    meta, body = split_front_matter(text)
    title = meta.get("title")
    meta_slug = meta.get("slug")
    resolved_slug = normalize_slug(str(meta_slug)) if meta_slug else slug
    return ContentDocument(
        title=str(title).strip() if title is not None else None,
        slug=resolved_slug,
        date=parse_date(meta.get("date")),
        draft=parse_bool(meta.get("draft")),
        estimated_read_time=estimate_read_time(body),
        body=body,
        source=source,
    )


def render_body(document: ContentDocument) -> str:
    """Compile a document's markdown body to HTML."""

    return markdown.markdown(document.body, extensions=["fenced_code", "tables"])


@dataclass(frozen=True)
class ContentIndex:
    """Immutable snapshot of every loaded document, keyed by slug."""

    documents: Tuple[ContentDocument, ...] = ()
    _by_slug: Mapping[str, ContentDocument] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_documents(cls, documents: Tuple[ContentDocument, ...]) -> "ContentIndex":
        by_slug: Dict[str, ContentDocument] = {}
        for document in documents:
            if not document.slug:
                continue
            if document.slug in by_slug:
                raise DuplicateSlugError(
                    f"Slug '{document.slug}' is used by {by_slug[document.slug].source} and {document.source}"
                )
            by_slug[document.slug] = document
        return cls(documents=tuple(documents), _by_slug=by_slug)

    def __iter__(self) -> Iterator[ContentDocument]:
        return iter(self.documents)

    def __len__(self) -> int:
        return len(self.documents)

    def find(self, slug: str) -> Optional[ContentDocument]:
        return self._by_slug.get(normalize_slug(slug))


def iter_post_files(root: Path) -> Iterator[Path]:
    for path in sorted(root.rglob("*")):
        if path.is_file() and path.suffix.lower() in POST_SUFFIXES:
            yield path


def load_content_index(posts_dir: Path) -> ContentIndex:
    """Read every post under ``posts_dir`` into a :class:`ContentIndex`."""

    if not posts_dir.exists():
        logger.warning({"event": "content_dir_missing", "path": str(posts_dir)})
        return ContentIndex()

    documents = []
    for path in iter_post_files(posts_dir):
        try:
            text = path.read_text(encoding="utf-8")
            document = document_from_text(text, slug=slug_for_path(path, posts_dir), source=path)
        except ContentIndexError as exc:
            raise ContentIndexError(f"{path}: {exc}") from exc
        documents.append(document)

    index = ContentIndex.from_documents(tuple(documents))
    logger.info(
        {
            "event": "content_index_loaded",
            "path": str(posts_dir),
            "documents": len(index),
            "drafts": sum(1 for document in index if document.draft),
        }
    )
    return index
