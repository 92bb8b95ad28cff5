"""
folio - Blog and portfolio content processor

Markdown preview rendering and related-post ranking for a personal site.
"""

__version__ = "1.0.0"

from .renderer import Renderer, render, renderBlockAtCursor
from .recommender import Recommender, recommend
from .images import images_parse, images_serialize, images_strip
from .outline import outline_extract, readingStats_compute, slug_make
from .store import ContentStore, StoreError
from .log import LOG, state_connectToLogger

__all__ = [
    "Renderer",
    "render",
    "renderBlockAtCursor",
    "Recommender",
    "recommend",
    "images_parse",
    "images_serialize",
    "images_strip",
    "outline_extract",
    "readingStats_compute",
    "slug_make",
    "ContentStore",
    "StoreError",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
