"""
Models package for folio

Contains data structures and type definitions for rendering, recommending
and the publishing pipeline.
"""

from .state import ProgramState, pipeline
from .content import (
    ContentBlock,
    ImagePosition,
    ImageDirective,
    CandidateContentItem,
    RecommendationTarget,
    ScoredCandidate,
    OutlineEntry,
    ReadingStats,
    Post,
)
from .renderer import BlockKind, LineBlock

__all__ = [
    "ProgramState",
    "pipeline",
    "ContentBlock",
    "ImagePosition",
    "ImageDirective",
    "CandidateContentItem",
    "RecommendationTarget",
    "ScoredCandidate",
    "OutlineEntry",
    "ReadingStats",
    "Post",
    "BlockKind",
    "LineBlock",
]
