import re
import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml
from pydantic import ValidationError

from blog_feed.models import PostID, PostRecord

# Name of the collection holding the blog posts.
POSTS_COLLECTION = "posts"
# File extensions recognised as posts.
POST_EXTENSIONS = (".md", ".mdx")

_FRONT_MATTER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)(.*)\Z", re.DOTALL)

def slugify(segment: str) -> str:
    """
    Turn a single path segment into a URL slug.
    """
    segment = segment.strip().lower()
    segment = re.sub(r"\s+", "-", segment)
    return re.sub(r"[^\w-]", "", segment)

def generate_post_id(
    relative_path: Path, # The path of the post relative to the collection directory
) -> PostID:
    """
    Derive the ID of a post from its path: slugified segments without the extension. `foo/index.md` becomes `foo`.
    """
    segments = list(relative_path.with_suffix("").parts)
    if len(segments) > 1 and segments[-1] == "index":
        segments.pop()
    return "/".join(slugify(segment) for segment in segments)

def split_front_matter(
    text: str, # The raw content of the post file
) -> Tuple[Dict[str, Any], str]:
    """
    Split a post file into its YAML front matter and its Markdown body.

    Raises:
        ValueError: If there is no front matter block, or it is not a YAML mapping.
    """
    match = _FRONT_MATTER_RE.match(text.lstrip("\ufeff"))
    if match is None:
        raise ValueError("No front matter block found")
    front_matter_text, body = match.groups()
    try:
        front_matter = yaml.safe_load(front_matter_text)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in front matter: {e}") from e
    if front_matter is None:
        front_matter = {}
    if not isinstance(front_matter, dict):
        raise ValueError("Front matter must be a mapping")
    return front_matter, body

def load_post(
    file_path: Path, # The path of the post file
    collection_dir: Path, # The directory of the collection the post belongs to
) -> PostRecord:
    """
    Load a single post.

    Raises:
        ValueError: If the post has no valid front matter or does not match the post schema.
    """
    with open(file_path, "r", encoding="utf-8") as f:
        text = f.read()
    try:
        front_matter, body = split_front_matter(text)
    except ValueError as e:
        raise ValueError(f"{file_path}: {e}") from e

    post_id = front_matter.pop("slug", None) or generate_post_id(file_path.relative_to(collection_dir))
    try:
        # Keys that are not field names, including non-string YAML keys, are ignored.
        return PostRecord.model_validate({**front_matter, "id": str(post_id), "body": body})
    except ValidationError as e:
        raise ValueError(f"{file_path}: invalid post: {e}") from e

def load_collection(
    content_dir: str, # The directory holding the content collections
    name: str = POSTS_COLLECTION, # The name of the collection to load
) -> List[PostRecord]:
    """
    Load every post of a content collection, ordered by file path.

    Raises:
        FileNotFoundError: If the collection directory does not exist.
        ValueError: If a post cannot be loaded.
    """
    collection_dir = Path(content_dir) / name
    if not collection_dir.is_dir():
        raise FileNotFoundError(f"Collection \"{name}\" not found at \"{collection_dir}\"")

    logging.info(f"Loading collection \"{name}\" from \"{collection_dir}\"")

    file_paths = sorted(
        path for path in collection_dir.rglob("*")
        if path.is_file() and path.suffix in POST_EXTENSIONS
    )

    posts: Dict[PostID, PostRecord] = {}
    for file_path in file_paths:
        post = load_post(file_path, collection_dir)
        if post.id in posts:
            logging.warning(f"Duplicate post ID \"{post.id}\" in \"{file_path}\". Replacing the earlier post.")
        posts[post.id] = post

    logging.info(f"Loaded {len(posts)} posts from collection \"{name}\"")
    # Dicts keep first insertion order, so a replaced post keeps its original position.
    return list(posts.values())
