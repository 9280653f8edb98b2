import pytest
from datetime import datetime, timezone
from pathlib import Path

from blog_feed.logics.load_collection import (
    generate_post_id,
    load_collection,
    split_front_matter,
)
from .test_utils import write_test_post

POST_FRONT_MATTER = """
title: {title}
published: 2024-01-15
description: A short summary
category: Python
tags: [FastAPI, Async]
"""

@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    (tmp_path / "posts").mkdir()
    return tmp_path

@pytest.mark.parametrize(
    "relative_path, expected_id",
    [
        ("hello-world.md", "hello-world"),
        ("Hello World.md", "hello-world"),
        ("guides/Deploying FastAPI!.mdx", "guides/deploying-fastapi"),
        ("series/index.md", "series"),
        ("index.md", "index"),
        ("snake_case_post.md", "snake_case_post"),
    ]
)
def test_generate_post_id(relative_path: str, expected_id: str):
    assert generate_post_id(Path(relative_path)) == expected_id

def test_split_front_matter():
    front_matter, body = split_front_matter("---\ntitle: Hi\ntags:\n  - a\n---\n# Heading\n\nText\n")

    assert front_matter == {"title": "Hi", "tags": ["a"]}
    assert body == "# Heading\n\nText\n"

@pytest.mark.parametrize(
    "text",
    [
        # No front matter at all
        "# Just Markdown\n",
        # Unterminated block
        "---\ntitle: Hi\n",
        # Not a mapping
        "---\n- a\n- b\n---\nbody",
        # Invalid YAML
        "---\ntitle: [unclosed\n---\nbody",
    ]
)
def test_split_front_matter_invalid(text: str):
    with pytest.raises(ValueError):
        split_front_matter(text)

def test_load_collection(content_dir: Path):
    """Posts are loaded in path order with their front matter mapped onto the record."""
    collection_dir = content_dir / "posts"
    write_test_post(collection_dir, "b-second.md", POST_FRONT_MATTER.format(title="Second"))
    write_test_post(collection_dir, "a-first.md", POST_FRONT_MATTER.format(title="First"), body="Hello\n")
    write_test_post(collection_dir, "nested/c-third.mdx", POST_FRONT_MATTER.format(title="Third"))
    (collection_dir / "notes.txt").write_text("not a post", encoding="utf-8")

    posts = load_collection(str(content_dir))

    assert [post.id for post in posts] == ["a-first", "b-second", "nested/c-third"]
    first = posts[0]
    assert first.title == "First"
    assert first.published == datetime(2024, 1, 15, tzinfo=timezone.utc)
    assert first.description == "A short summary"
    assert first.category == "Python"
    assert first.tags == ["FastAPI", "Async"]
    assert first.body == "Hello\n"

def test_load_collection_optional_fields(content_dir: Path):
    """Tags, category and author may be absent; unknown keys are ignored."""
    write_test_post(
        content_dir / "posts",
        "minimal.md",
        """
title: Minimal
published: "Sat, 25 Jan 2025 10:00:00 GMT"
description: Nothing else
cover: /cover.webp
""",
    )

    posts = load_collection(str(content_dir))

    assert len(posts) == 1
    post = posts[0]
    assert post.tags is None
    assert post.category is None
    assert post.author is None
    assert post.published == datetime(2025, 1, 25, 10, 0, tzinfo=timezone.utc)

def test_load_collection_slug_overrides_path(content_dir: Path):
    write_test_post(
        content_dir / "posts",
        "2024/some-long-file-name.md",
        POST_FRONT_MATTER.format(title="Slugged") + "slug: short\n",
    )

    posts = load_collection(str(content_dir))

    assert posts[0].id == "short"

def test_load_collection_duplicate_ids(content_dir: Path):
    """The later post wins a duplicate ID and takes the position of the earlier one."""
    collection_dir = content_dir / "posts"
    write_test_post(collection_dir, "a.md", POST_FRONT_MATTER.format(title="A") + "slug: same\n")
    write_test_post(collection_dir, "b.md", POST_FRONT_MATTER.format(title="B"))
    write_test_post(collection_dir, "c.md", POST_FRONT_MATTER.format(title="C") + "slug: same\n")

    posts = load_collection(str(content_dir))

    assert [(post.id, post.title) for post in posts] == [("same", "C"), ("b", "B")]

def test_load_collection_empty(content_dir: Path):
    assert load_collection(str(content_dir)) == []

def test_load_collection_missing_directory(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_collection(str(tmp_path), name="posts")

def test_load_collection_missing_required_field(content_dir: Path):
    """A post without a title fails with the offending file in the message."""
    write_test_post(
        content_dir / "posts",
        "untitled.md",
        "published: 2024-01-01\ndescription: No title",
    )

    with pytest.raises(ValueError, match="untitled.md"):
        load_collection(str(content_dir))

def test_load_collection_unparseable_date(content_dir: Path):
    write_test_post(
        content_dir / "posts",
        "bad-date.md",
        "title: Bad\npublished: not a date\ndescription: Broken",
    )

    with pytest.raises(ValueError, match="bad-date.md"):
        load_collection(str(content_dir))

def test_load_collection_non_string_front_matter_key(content_dir: Path):
    """Keys YAML reads as numbers are ignored like any other unknown key."""
    write_test_post(
        content_dir / "posts",
        "numeric-key.md",
        "title: A\npublished: 2024-01-01\ndescription: d\n2024: x",
    )

    posts = load_collection(str(content_dir))

    assert [(post.id, post.title) for post in posts] == [("numeric-key", "A")]

@pytest.mark.parametrize("published", ["March", "v2", "2024-03"])
def test_load_collection_partial_date(content_dir: Path, published: str):
    """A date missing its year, month or day makes the post invalid."""
    write_test_post(
        content_dir / "posts",
        "partial-date.md",
        f"title: Partial\npublished: \"{published}\"\ndescription: Broken",
    )

    with pytest.raises(ValueError, match="partial-date.md"):
        load_collection(str(content_dir))
