"""Author bio, social links and speaking engagements shown on the home page."""

from __future__ import annotations

import datetime
import logging
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


class ProfileError(ValueError):
    """Raised when ``site.yaml`` exists but cannot be used."""


class Author(BaseModel):
    name: str = "Prince"
    greeting: str = "Howdy, I'm Prince!"
    bio: str = (
        "I am a full-stack web developer based in NYC. I love building things and "
        "making sure to bring people together around accessibility and security. "
        "Beyond the work I do, I love corgis."
    )


class SocialLink(BaseModel):
    label: str
    network: str
    url: str

    @field_validator("url")
    @classmethod
    def _require_absolute(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("social links must be absolute http(s) URLs")
        return value


class Engagement(BaseModel):
    title: str
    event: str
    date: Optional[datetime.date] = None
    url: Optional[str] = None


def _default_social() -> List[SocialLink]:
    return [
        SocialLink(label="Follow me on", network="Twitter", url="https://twitter.com/maxcell"),
        SocialLink(label="Connect with me on", network="LinkedIn", url="https://linkedin.com/in/maxcell"),
        SocialLink(label="See my code on", network="GitHub", url="https://github.com/maxcell"),
    ]


class SiteProfile(BaseModel):
    author: Author = Field(default_factory=Author)
    social: List[SocialLink] = Field(default_factory=_default_social)
    engagements: List[Engagement] = Field(default_factory=list)

    def upcoming_first(self) -> List[Engagement]:
        """Engagements newest first; undated entries keep their order at the end."""

        dated = [item for item in self.engagements if item.date is not None]
        undated = [item for item in self.engagements if item.date is None]
        return sorted(dated, key=lambda item: item.date, reverse=True) + undated


def load_profile(path: Path) -> SiteProfile:
    """Load the site profile from ``path``, or the defaults if it is absent."""

    if not path.exists():
        logger.info({"event": "site_profile_default", "path": str(path)})
        return SiteProfile()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        return SiteProfile.model_validate(raw)
    except (yaml.YAMLError, ValidationError) as exc:
        raise ProfileError(f"{path}: {exc}") from exc
