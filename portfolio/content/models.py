"""Content records consumed by the feed and the page routes."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional


class MalformedDocumentError(ValueError):
    """Raised when a document lacks a field required to build a link."""

    def __init__(self, field: str, source: Optional[Path] = None) -> None:
        self.field = field
        self.source = source
        where = f" ({source})" if source else ""
        super().__init__(f"Content document is missing required field '{field}'{where}")


@dataclass(frozen=True)
class ContentDocument:
    """A single entry of the content index, usually one blog post."""

    title: Optional[str]
    slug: Optional[str]
    date: Optional[datetime] = None
    draft: bool = False
    estimated_read_time: int = 1
    body: str = ""
    source: Optional[Path] = None

    def missing_field(self) -> Optional[str]:
        """Return the first required field that is absent or blank."""

        if not (self.title or "").strip():
            return "title"
        if not (self.slug or "").strip():
            return "slug"
        return None


@dataclass(frozen=True)
class DisplayItem:
    """Link projection of a document: visible label plus navigation target."""

    label: str
    target: str

    def as_dict(self) -> dict[str, str]:
        return {"label": self.label, "target": self.target}
