"""
Renderer-specific data models

Type-safe structures for the block classification pass of the renderer.
"""

from enum import Enum
from dataclasses import dataclass


class BlockKind(Enum):
    """
    Kinds of line-level block in the markdown dialect

    Every block construct of the dialect is scoped to a single line, so
    the block pass classifies lines rather than paragraphs.
    """
    HEADING = "heading"        # # Title, ## Title, ### Title
    QUOTE = "quote"            # > quoted
    UNORDERED = "unordered"    # - item
    ORDERED = "ordered"        # 1. item
    TEXT = "text"              # anything else


@dataclass
class LineBlock:
    """
    One classified source line

    Returned by Renderer.line_classify(). The body has its block marker
    removed and is what the inline pass renders.

    Attributes:
        kind: Block kind of the line
        body: Line text without the block marker
        level: Heading level (1-3) for HEADING, 0 otherwise
        line_number: 1-based line number in the rendered source

    Example:
        For "## Setup" on line 4:
        LineBlock(kind=BlockKind.HEADING, body="Setup", level=2, line_number=4)
    """
    kind: BlockKind
    body: str
    level: int = 0
    line_number: int = 1
