"""
Content data models

Plain dataclasses passed in and out of the renderer, the image editor
helpers, the outline helpers and the recommender. Every instance is
built for a single call and never shared between calls.
"""

from enum import Enum
from datetime import datetime, timezone
from dataclasses import dataclass, field, replace
from typing import FrozenSet, Iterable, Optional


def labels_normalize(labels: Optional[Iterable[str]]) -> FrozenSet[str]:
    """Turn a tag/category collection (or None) into a frozenset"""
    if labels is None:
        return frozenset()
    if isinstance(labels, str):
        return frozenset([labels])
    return frozenset(labels)


def timestamp_normalize(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes so ages can always be compared"""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass
class ContentBlock:
    """
    A run of source text between two blank-line boundaries

    Attributes:
        text: Trimmed block text
        start: Index in the source where the block slice begins
        end: Index in the source where the block slice ends (exclusive)

    Example:
        For "One.\\n\\nTwo." with the cursor inside "Two":
        ContentBlock(text="Two.", start=6, end=10)
    """
    text: str
    start: int
    end: int


class ImagePosition(Enum):
    """
    Layout hint carried by an image directive

    Written in source as a quoted token after the URL:
        ![alt](url "left")
    """
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"
    NONE = "none"

    @classmethod
    def token_parse(cls, token: Optional[str]) -> "ImagePosition":
        """Map a source token to a position; unknown or missing tokens are NONE"""
        if not token:
            return cls.NONE
        try:
            return cls(token)
        except ValueError:
            return cls.NONE


@dataclass
class ImageDirective:
    """
    An image reference embedded in post source

    Attributes:
        id: Synthetic identifier ("img-0", "img-1", ...), only stable within
            the parse pass that produced it
        alt: Alternative text
        src: Resolved URL (http(s) or data-URI)
        position: Layout hint, NONE when the source carries none
        width: Width used by the visual editor; never written to markdown
    """
    id: str
    alt: str
    src: str
    position: ImagePosition = ImagePosition.NONE
    width: int = 300

    def markdown_make(self) -> str:
        """Render this image back into its markdown directive"""
        if self.position is ImagePosition.NONE:
            return f"![{self.alt}]({self.src})"
        return f'![{self.alt}]({self.src} "{self.position.value}")'


@dataclass(frozen=True)
class CandidateContentItem:
    """
    A blog post or portfolio entry considered by the recommender

    Only identifier, tags, categories and publishedAt take part in scoring;
    title and slug ride along for callers that display the result.
    """
    identifier: str
    tags: FrozenSet[str] = field(default_factory=frozenset)
    categories: FrozenSet[str] = field(default_factory=frozenset)
    publishedAt: Optional[datetime] = None
    title: str = ""
    slug: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", labels_normalize(self.tags))
        object.__setattr__(self, "categories", labels_normalize(self.categories))
        object.__setattr__(self, "publishedAt", timestamp_normalize(self.publishedAt))


@dataclass(frozen=True)
class RecommendationTarget:
    """
    The item related content is computed for

    Attributes:
        tags: Target tags
        categories: Target categories
        excludeId: Identifier removed from the pool before scoring
    """
    tags: FrozenSet[str] = field(default_factory=frozenset)
    categories: FrozenSet[str] = field(default_factory=frozenset)
    excludeId: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", labels_normalize(self.tags))
        object.__setattr__(self, "categories", labels_normalize(self.categories))

    @classmethod
    def item_from(cls, item: CandidateContentItem) -> "RecommendationTarget":
        """Build a target from a candidate, excluding the candidate itself"""
        return cls(tags=item.tags, categories=item.categories, excludeId=item.identifier)


@dataclass
class ScoredCandidate:
    """A candidate paired with its score for one recommendation call"""
    item: CandidateContentItem
    score: int


@dataclass
class OutlineEntry:
    """
    One heading in a post's table of contents

    Attributes:
        anchor: Fragment identifier derived from the title
        title: Heading text as written
        level: Heading depth (number of leading #)
    """
    anchor: str
    title: str
    level: int


@dataclass
class ReadingStats:
    """Word count and estimated minutes to read"""
    words: int
    minutes: int


@dataclass
class Post:
    """
    A post record as held by the content store

    Attributes:
        slug: URL slug, unique within a store
        title: Post title
        body: Markdown source with the front matter removed
        tags: Tag labels
        categories: Category labels
        publishedAt: Publication timestamp (None for undated drafts)
        published: Whether the post is public
        excerpt: Optional summary
        path: File the post was read from
    """
    slug: str
    title: str = ""
    body: str = ""
    tags: FrozenSet[str] = field(default_factory=frozenset)
    categories: FrozenSet[str] = field(default_factory=frozenset)
    publishedAt: Optional[datetime] = None
    published: bool = True
    excerpt: str = ""
    path: Optional[str] = None

    def candidate_make(self) -> CandidateContentItem:
        """View this post as a recommender candidate"""
        return CandidateContentItem(
            identifier=self.slug,
            tags=self.tags,
            categories=self.categories,
            publishedAt=self.publishedAt,
            title=self.title,
            slug=self.slug,
        )


def image_copy(image: ImageDirective, **changes) -> ImageDirective:
    """Return a copy of an image with the given fields replaced"""
    return replace(image, **changes)
