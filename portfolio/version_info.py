"""Build and content snapshot metadata served on ``/version`` and ``app_info``."""

from __future__ import annotations

import json
import logging
import os
import platform
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional

from portfolio import __version__
from portfolio.content.index import ContentIndex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildInfo:
    """What is deployed: code version plus the content snapshot it serves."""

    version: str
    git_sha: str
    build_time: str
    python: str
    documents: str
    published: str
    content_loaded_at: str

    def as_dict(self) -> Dict[str, str]:
        return asdict(self)


def read_build_stamp(path: Optional[Path]) -> Dict[str, str]:
    """Read the JSON stamp the deploy step writes next to the site, if any."""

    if path is None or not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        logger.warning({"event": "build_stamp_unreadable", "path": str(path)})
        return {}
    if not isinstance(data, dict):
        return {}
    return {str(key).lower(): str(value) for key, value in data.items()}


def describe_build(
    index: ContentIndex,
    *,
    stamp_path: Optional[Path] = None,
    loaded_at: Optional[datetime] = None,
) -> BuildInfo:
    """Combine the build stamp, ``GIT_SHA``/``BUILD_TIME`` and the loaded index."""

    stamp = read_build_stamp(stamp_path)
    loaded_at = loaded_at or datetime.now(tz=timezone.utc)
    return BuildInfo(
        version=__version__,
        git_sha=os.getenv("GIT_SHA") or stamp.get("git_sha") or "unknown",
        build_time=os.getenv("BUILD_TIME") or stamp.get("build_time") or "unknown",
        python=platform.python_version(),
        documents=str(len(index)),
        published=str(sum(1 for document in index if not document.draft)),
        content_loaded_at=loaded_at.isoformat(),
    )
