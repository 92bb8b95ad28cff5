"""
folio - Blog and portfolio content processor

Markdown preview rendering and related-post ranking for a personal site.
"""

__version__ = "1.0.0"

from .lib import Renderer, Recommender, ContentStore, render, renderBlockAtCursor, recommend, LOG, state_connectToLogger

__all__ = [
    "Renderer",
    "Recommender",
    "ContentStore",
    "render",
    "renderBlockAtCursor",
    "recommend",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
