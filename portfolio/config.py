"""Runtime settings read from the process environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from portfolio.content.feed import DEFAULT_FEED_LIMIT

logger = logging.getLogger(__name__)

_ENVIRONMENTS = {"development", "production"}


def _resolve_feed_limit() -> int:
    """Return the configured home feed size, falling back on bad input."""

    value = os.getenv("FEED_LIMIT", str(DEFAULT_FEED_LIMIT))
    try:
        limit = int(value)
    except ValueError:
        limit = 0
    if limit <= 0:
        logger.warning(
            {"event": "invalid_feed_limit_config", "value": value, "default": DEFAULT_FEED_LIMIT},
        )
        return DEFAULT_FEED_LIMIT
    return limit


def _resolve_environment() -> str:
    value = os.getenv("SITE_ENV", "production").strip().lower()
    if value not in _ENVIRONMENTS:
        logger.warning({"event": "invalid_site_env_config", "value": value, "default": "production"})
        return "production"
    return value


@dataclass(frozen=True)
class Settings:
    content_dir: Path = Path("content")
    environment: str = "production"
    log_level: str = "INFO"
    feed_limit: int = DEFAULT_FEED_LIMIT
    site_title: str = "Prince Wilson"
    build_stamp: Optional[Path] = None

    @property
    def strict_content(self) -> bool:
        """Malformed content fails loudly outside production."""

        return self.environment == "development"

    @property
    def posts_dir(self) -> Path:
        return self.content_dir / "posts"

    @property
    def site_file(self) -> Path:
        return self.content_dir / "site.yaml"


def load_settings() -> Settings:
    """Build :class:`Settings` from environment variables."""

    return Settings(
        content_dir=Path(os.getenv("SITE_CONTENT_DIR", "content")),
        environment=_resolve_environment(),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        feed_limit=_resolve_feed_limit(),
        site_title=os.getenv("SITE_TITLE", "Prince Wilson"),
        build_stamp=Path(os.environ["BUILD_STAMP"]) if os.getenv("BUILD_STAMP") else None,
    )
