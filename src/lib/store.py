"""
File-backed content store

Stands in for the hosted database the site reads posts from. A store is a
directory of markdown files, each optionally opening with a YAML front
matter block:

    ---
    title: Field notes from the valley
    tags: [water, farming]
    categories: [research]
    published_at: 2024-05-02
    published: true
    excerpt: What three seasons of irrigation data showed.
    ---
    # Field notes
    ...

Posts are read once by posts_load() and queried in memory with
posts_query(), which returns them newest first like the site's listing
pages.
"""

import re
from datetime import date, datetime, time, timezone
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

import yaml

from ..config import AppSettings, appsettings
from ..models.content import Post, labels_normalize, timestamp_normalize
from .outline import slug_make
from .log import LOG


FRONT_MATTER_RE = re.compile(r'\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)', re.DOTALL)

# Slugs name output files, so they are restricted to URL-safe characters
SLUG_RE = re.compile(r'\A[a-z0-9]+(?:-[a-z0-9]+)*\Z')

PUBLISHED_WORDS = {"true": True, "yes": True, "false": False, "no": False}


class StoreError(Exception):
    """Raised when posts cannot be read or a query cannot be answered"""
    pass


def frontMatter_split(text: str) -> Tuple[Optional[str], str]:
    """
    Split a post file into its front matter text and body

    Returns:
        (front matter text or None, body)
    """
    match = FRONT_MATTER_RE.match(text)
    if not match:
        return None, text
    return match.group(1), text[match.end():]


def timestamp_parse(value: Any) -> Optional[datetime]:
    """
    Turn a front matter date value into an aware datetime

    YAML already turns unquoted ISO dates into date/datetime objects;
    quoted strings are parsed with datetime.fromisoformat().

    Raises:
        ValueError: If the value is not a recognisable date
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return timestamp_normalize(value)
    if isinstance(value, date):
        return datetime.combine(value, time(), tzinfo=timezone.utc)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return timestamp_normalize(datetime.fromisoformat(text))
    raise ValueError(f"unsupported date value {value!r}")


def published_read(value: Any) -> bool:
    """
    Read the front matter published flag

    YAML booleans are taken as they are; quoted "true"/"false" (and
    "yes"/"no") strings are accepted in any case. A missing flag means
    published.

    Raises:
        ValueError: For any other value
    """
    if value is None:
        return True
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in PUBLISHED_WORDS:
        return PUBLISHED_WORDS[value.strip().lower()]
    raise ValueError(f"expected true or false, got {value!r}")


def labels_read(value: Any) -> FrozenSet[str]:
    """Read a front matter tag/category value (list, single value or missing)"""
    if value is None:
        return frozenset()
    if isinstance(value, (list, tuple, set)):
        return labels_normalize(str(label) for label in value if label is not None)
    return labels_normalize([str(value)])


class ContentStore:
    """
    Directory of markdown posts with YAML front matter

    Responsibilities:
    - Read and validate every post file under the root
    - Answer filtered, ordered queries
    - Look posts up by slug
    """

    def __init__(self, root: Path, settings: Optional[AppSettings] = None) -> None:
        """
        Open a store

        Args:
            root: Directory holding the post files
            settings: Optional AppSettings (post_glob)

        Raises:
            StoreError: If root is not a directory
        """
        self.root = Path(root)
        self.settings = settings or appsettings
        self.posts: List[Post] = []

        if not self.root.is_dir():
            raise StoreError(f"Content store directory not found: {self.root}")

    def posts_load(self) -> List[Post]:
        """
        Read every post file under the root

        Files are read in path order. A later file with the same slug as an
        earlier one is an error.

        Returns:
            Loaded posts

        Raises:
            StoreError: On unreadable files, malformed front matter or
                        duplicate slugs
        """
        posts: List[Post] = []
        seen: Dict[str, Path] = {}

        for path in sorted(self.root.glob(self.settings.post_glob)):
            if not path.is_file():
                continue
            post = self.post_read(path)
            if post.slug in seen:
                raise StoreError(
                    f"Duplicate slug '{post.slug}' in {path} (already used by {seen[post.slug]})"
                )
            seen[post.slug] = path
            posts.append(post)
            LOG(f"Loaded from {path.name}", level=3, post=post.slug)

        self.posts = posts
        LOG(f"Loaded {len(posts)} posts from {self.root}", level=2)
        return posts

    def post_read(self, path: Path) -> Post:
        """
        Read one post file

        Args:
            path: Markdown file

        Returns:
            Post built from front matter and body

        Raises:
            StoreError: If the file cannot be read or its front matter is invalid
        """
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise StoreError(f"Failed to read {path}: {e}")

        front_matter, body = frontMatter_split(text)
        meta: Any = {}
        if front_matter is not None:
            try:
                meta = yaml.safe_load(front_matter)
            except yaml.YAMLError as e:
                raise StoreError(f"Failed to parse front matter in {path}: {e}")
            if meta is None:
                meta = {}
            if not isinstance(meta, dict):
                raise StoreError(f"Front matter in {path} must be a mapping")

        try:
            published_at = timestamp_parse(meta.get("published_at"))
        except ValueError as e:
            raise StoreError(f"Invalid published_at in {path}: {e}")

        try:
            published = published_read(meta.get("published"))
        except ValueError as e:
            raise StoreError(f"Invalid published flag in {path}: {e}")

        title = str(meta.get("title") or "")
        explicit_slug = str(meta.get("slug") or "")
        if explicit_slug and not SLUG_RE.match(explicit_slug):
            raise StoreError(
                f"Invalid slug '{explicit_slug}' in {path}: use lowercase letters, digits and hyphens"
            )
        slug = explicit_slug or slug_make(title) or path.stem

        return Post(
            slug=slug,
            title=title,
            body=body.strip("\n"),
            tags=labels_read(meta.get("tags")),
            categories=labels_read(meta.get("categories")),
            publishedAt=published_at,
            published=published,
            excerpt=str(meta.get("excerpt") or ""),
            path=str(path),
        )

    def posts_query(
        self,
        published: Optional[bool] = None,
        tag: Optional[str] = None,
        category: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Post]:
        """
        Filter and order the loaded posts

        Args:
            published: Keep only posts with this published flag (None keeps all)
            tag: Keep only posts carrying this tag
            category: Keep only posts in this category
            limit: Maximum number of posts returned

        Returns:
            Posts newest first; undated posts last; ties ordered by slug
        """
        posts = [
            post for post in self.posts
            if (published is None or post.published == published)
            and (tag is None or tag in post.tags)
            and (category is None or category in post.categories)
        ]

        posts.sort(key=lambda post: post.slug)
        posts.sort(
            key=lambda post: post.publishedAt or datetime.min.replace(tzinfo=timezone.utc),
            reverse=True,
        )
        if limit is not None:
            posts = posts[:max(0, limit)]
        return posts

    def post_get(self, slug: str) -> Post:
        """
        Look a post up by slug

        Raises:
            StoreError: If no loaded post has that slug
        """
        for post in self.posts:
            if post.slug == slug:
                return post
        raise StoreError(f"Post not found: {slug}")
