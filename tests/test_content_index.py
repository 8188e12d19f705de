from datetime import datetime
from pathlib import Path

import pytest

from portfolio.content import ContentIndexError, DuplicateSlugError, load_content_index, render_body
from portfolio.content.index import (
    document_from_text,
    estimate_read_time,
    parse_date,
    slug_for_path,
    split_front_matter,
)


def test_front_matter_is_split_from_body():
    meta, body = split_front_matter("---\ntitle: Hi\ndraft: true\n---\n\n# Heading\n")

    assert meta == {"title": "Hi", "draft": True}
    assert body.strip() == "# Heading"


def test_text_without_front_matter_is_all_body():
    meta, body = split_front_matter("Just words")

    assert meta == {}
    assert body == "Just words"


def test_empty_front_matter_block_is_not_body():
    meta, body = split_front_matter("---\n---\nbody")

    assert meta == {}
    assert body == "body"


def test_empty_front_matter_leaves_title_missing():
    document = document_from_text("---\n---\n# Not a title field\n", slug="/empty/")

    assert document.title is None
    assert document.missing_field() == "title"
    assert document.body == "# Not a title field\n"


def test_front_matter_must_be_a_mapping():
    with pytest.raises(ContentIndexError):
        split_front_matter("---\n- a\n- b\n---\nbody")


def test_missing_draft_flag_loads_as_published():
    document = document_from_text("---\ntitle: Post\ndate: 2019-02-03\n---\nBody", slug="/post/")

    assert document.draft is False
    assert document.date == datetime(2019, 2, 3)


def test_front_matter_slug_wins_over_path():
    document = document_from_text("---\ntitle: Post\nslug: custom\n---\nBody", slug="/from-path/")

    assert document.slug == "/custom/"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2019-05-04", datetime(2019, 5, 4)),
        ("2019-05-04T10:30:00Z", datetime(2019, 5, 4, 10, 30)),
        ("2019-05-04T12:30:00+02:00", datetime(2019, 5, 4, 10, 30)),
        (None, None),
    ],
)
def test_dates_normalise_to_naive_utc(value, expected):
    assert parse_date(value) == expected


def test_unparseable_date_is_an_error():
    with pytest.raises(ContentIndexError):
        parse_date("next tuesday")


def test_read_time_rounds_and_has_a_floor():
    assert estimate_read_time("") == 1
    assert estimate_read_time("word " * 265) == 1
    assert estimate_read_time("word " * 700) == 3


def test_slug_follows_file_location(tmp_path):
    root = tmp_path / "posts"

    assert slug_for_path(root / "hello-world.md", root) == "/hello-world/"
    assert slug_for_path(root / "2019" / "talk" / "index.mdx", root) == "/2019/talk/"


def test_load_reads_posts_in_path_order(content_dir, write_post):
    write_post("b-post.md", title="B")
    write_post("a-post.md", title="A", draft=True)
    write_post("nested/index.md", title="Nested")
    (content_dir / "posts" / "notes.txt").write_text("ignored")

    index = load_content_index(content_dir / "posts")

    assert [document.title for document in index] == ["A", "B", "Nested"]
    assert index.find("nested").title == "Nested"
    assert index.find("/a-post/").draft is True
    assert index.find("/missing/") is None


def test_duplicate_slugs_are_rejected(write_post, content_dir):
    write_post("one.md", extra="slug: same")
    write_post("two.md", extra="slug: same")

    with pytest.raises(DuplicateSlugError):
        load_content_index(content_dir / "posts")


def test_bad_date_names_the_file(write_post, content_dir):
    write_post("broken.md", date="not-a-date")

    with pytest.raises(ContentIndexError) as excinfo:
        load_content_index(content_dir / "posts")

    assert "broken.md" in str(excinfo.value)


def test_missing_directory_is_an_empty_index(tmp_path):
    index = load_content_index(tmp_path / "nope")

    assert len(index) == 0
    assert list(index) == []


def test_render_body_produces_html():
    document = document_from_text("---\ntitle: T\n---\n## Part\n\n- one\n", slug="/t/")

    html = render_body(document)

    assert "<h2>Part</h2>" in html
    assert "<li>one</li>" in html


def test_shipped_content_loads():
    posts = Path(__file__).resolve().parents[1] / "content" / "posts"

    index = load_content_index(posts)

    assert len(index) > 5
    assert any(document.draft for document in index)
