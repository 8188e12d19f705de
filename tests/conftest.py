from pathlib import Path
from typing import Callable, Optional

import pytest
from fastapi.testclient import TestClient

from portfolio.config import Settings
from portfolio.main import create_app

PostWriter = Callable[..., Path]


@pytest.fixture()
def content_dir(tmp_path) -> Path:
    root = tmp_path / "content"
    (root / "posts").mkdir(parents=True)
    return root


@pytest.fixture()
def write_post(content_dir) -> PostWriter:
    """Write a markdown post with front matter into the temporary content tree."""

    def _write(
        name: str,
        title: Optional[str] = "Untitled",
        date: Optional[str] = "2020-01-01",
        draft: Optional[bool] = None,
        body: str = "Some words.",
        extra: str = "",
    ) -> Path:
        lines = ["---"]
        if title is not None:
            lines.append(f'title: "{title}"')
        if date is not None:
            lines.append(f"date: {date}")
        if draft is not None:
            lines.append(f"draft: {'true' if draft else 'false'}")
        if extra:
            lines.append(extra)
        lines.append("---")
        path = content_dir / "posts" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(lines) + f"\n\n{body}\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def settings(content_dir) -> Settings:
    return Settings(content_dir=content_dir, environment="production")


@pytest.fixture()
def make_client(content_dir) -> Callable[..., TestClient]:
    """Build a client once posts are written; the index is loaded at app creation."""

    def _make(environment: str = "production", feed_limit: int = 5) -> TestClient:
        settings = Settings(content_dir=content_dir, environment=environment, feed_limit=feed_limit)
        return TestClient(create_app(settings))

    return _make


@pytest.fixture()
def client(make_client) -> TestClient:
    """Provide a FastAPI TestClient over an empty content tree."""
    return make_client()
