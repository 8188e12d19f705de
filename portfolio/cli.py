"""Command line helpers: preview the home feed and scaffold new draft posts."""
from __future__ import annotations

import argparse
import json
import re
import sys
from datetime import date
from pathlib import Path
from typing import List, Sequence

import yaml

from portfolio.content import ContentFeedProjector, FeedOptions, load_content_index
from portfolio.content.feed import DEFAULT_FEED_LIMIT

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def slugify(value: str) -> str:
    """Convert title to URL-friendly slug."""
    cleaned = re.sub(r"[^a-zA-Z0-9\s-]", "", value).lower()
    cleaned = re.sub(r"[\s_-]+", "-", cleaned).strip("-")
    if not cleaned:
        raise ValueError("Unable to build slug from empty title")
    if not SLUG_PATTERN.fullmatch(cleaned):
        raise ValueError(f"Slug '{cleaned}' does not match expected pattern")
    return cleaned


def build_frontmatter(title: str, published: date, draft: bool = True) -> str:
    """Create YAML front matter for a new post."""
    meta = yaml.safe_dump(
        {"title": title, "date": published, "draft": draft},
        sort_keys=False,
        allow_unicode=True,
    )
    return f"---\n{meta}---"


def write_post(title: str, posts_dir: Path, published: date, overwrite: bool = False) -> Path:
    slug = slugify(title)
    path = posts_dir / f"{slug}.md"
    if path.exists() and not overwrite:
        raise FileExistsError(f"Post already exists at {path}")
    posts_dir.mkdir(parents=True, exist_ok=True)
    path.write_text(f"{build_frontmatter(title, published)}\n\nWrite something great.\n", encoding="utf-8")
    return path


def format_feed(content_dir: Path, limit: int, as_json: bool) -> str:
    index = load_content_index(content_dir / "posts")
    items = ContentFeedProjector(FeedOptions(limit=limit))(index.documents)
    if as_json:
        return json.dumps([item.as_dict() for item in items], indent=2)
    lines: List[str] = [f"{position}. {item.label} -> {item.target}" for position, item in enumerate(items, 1)]
    return "\n".join(lines) if lines else "(no published posts)"


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    shared = argparse.ArgumentParser(add_help=False)
    shared.add_argument(
        "--content-dir",
        type=Path,
        default=Path("content"),
        help="Directory holding site.yaml and the posts/ folder",
    )

    parser = argparse.ArgumentParser(prog="portfolio", description="Portfolio site content tools")
    commands = parser.add_subparsers(dest="command", required=True)

    feed = commands.add_parser("feed", parents=[shared], help="Print the posts the home page would list")
    feed.add_argument("--limit", type=int, default=DEFAULT_FEED_LIMIT, help="Number of posts to list")
    feed.add_argument("--json", action="store_true", help="Emit JSON instead of text")

    new = commands.add_parser("new", parents=[shared], help="Create a draft post")
    new.add_argument("title", help="Title of the new post")
    new.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Publication date (YYYY-MM-DD), defaults to today",
    )
    new.add_argument(
        "--overwrite",
        action="store_true",
        help="Replace the post if it already exists",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    if args.command == "feed":
        if args.limit <= 0:
            print("--limit must be a positive integer", file=sys.stderr)
            return 2
        print(format_feed(args.content_dir, args.limit, args.json))
        return 0

    try:
        path = write_post(args.title, args.content_dir / "posts", args.date or date.today(), args.overwrite)
    except (FileExistsError, ValueError) as exc:
        print(str(exc), file=sys.stderr)
        return 1
    print(f"Created draft at {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
