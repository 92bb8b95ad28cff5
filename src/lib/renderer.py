"""
Renderer for the markdown dialect used by post previews

Transforms post source into an HTML fragment.

The renderer operates in two passes:
1. Block pass: split the source into lines and classify each one
   (heading, blockquote, list item or plain text)
2. Inline pass: tokenize each line body with InlineLexer and emit HTML
   per token (images, code, bold, italic, links)

Lines are joined with <br>, which is the "newline becomes <br>" rule
applied last. The renderer never raises on malformed markup: anything
that does not form a construct stays as literal text.

Example:
    >>> renderer = Renderer()
    >>> renderer.render("# Hi\\n**a** *b*")
    '<h1>Hi</h1><br><strong>a</strong> <em>b</em>'
"""

import re
import html
from typing import Any, List, Optional

from pygments.token import Name, String, Generic

from ..config import AppSettings, appsettings
from ..models.content import ContentBlock, ImagePosition
from ..models.renderer import BlockKind, LineBlock
from .lexer import InlineLexer, IMAGE_RE, CODE_RE, BOLD_RE, ITALIC_RE, LINK_RE
from .outline import anchor_make
from .log import LOG


HEADING_RE = re.compile(r'^(#{1,3}) (.*)$')
QUOTE_RE = re.compile(r'^> (.*)$')
UNORDERED_RE = re.compile(r'^- (.*)$')
ORDERED_RE = re.compile(r'^\d+\. (.*)$')

LINE_BREAK = '<br>'


class Renderer:
    """
    Renders dialect source to HTML fragments

    Handles:
    - Headings (levels 1-3), blockquotes, unordered and ordered list items
    - Bold, italic, inline code, links and positioned images
    - Cursor-scoped rendering of a single block for live preview

    A Renderer holds only configuration; every call is independent.
    """

    def __init__(self, settings: Optional[AppSettings] = None) -> None:
        """
        Initialize renderer

        Args:
            settings: Optional AppSettings; defaults to the shared appsettings
        """
        self.settings = settings or appsettings
        self.lexer = InlineLexer()

    def render(self, source: str) -> str:
        """
        Render a complete source string

        Args:
            source: Post source in the markdown dialect

        Returns:
            HTML fragment; empty string for empty source

        Example:
            >>> Renderer().render("- one\\n- two")
            '<li class="list-disc">one</li><br><li class="list-disc">two</li>'
        """
        blocks = self.lines_classify(source)
        LOG(f"Rendering {len(blocks)} lines", level=3)

        if self.settings.wrap_lists:
            parts = self.lists_wrap(blocks)
        else:
            parts = [self.block_render(block) for block in blocks]

        return LINE_BREAK.join(parts)

    def lines_classify(self, source: str) -> List[LineBlock]:
        """Split source into lines and classify each one"""
        lines = source.replace('\r\n', '\n').split('\n')
        return [self.line_classify(line, number) for number, line in enumerate(lines, start=1)]

    def line_classify(self, line: str, line_number: int = 1) -> LineBlock:
        """
        Classify one source line by its block marker

        Markers are checked in order: heading, blockquote, unordered item,
        ordered item. A line with no marker is TEXT. Four or more # do not
        form a heading.

        Args:
            line: Source line without its trailing newline
            line_number: 1-based line number (informational)

        Returns:
            LineBlock with the marker stripped from the body
        """
        match = HEADING_RE.match(line)
        if match:
            return LineBlock(
                kind=BlockKind.HEADING,
                body=match.group(2),
                level=len(match.group(1)),
                line_number=line_number,
            )

        match = QUOTE_RE.match(line)
        if match:
            return LineBlock(kind=BlockKind.QUOTE, body=match.group(1), line_number=line_number)

        match = UNORDERED_RE.match(line)
        if match:
            return LineBlock(kind=BlockKind.UNORDERED, body=match.group(1), line_number=line_number)

        match = ORDERED_RE.match(line)
        if match:
            return LineBlock(kind=BlockKind.ORDERED, body=match.group(1), line_number=line_number)

        return LineBlock(kind=BlockKind.TEXT, body=line, line_number=line_number)

    def block_render(self, block: LineBlock) -> str:
        """Render one classified line to HTML"""
        body = self.inline_render(block.body)

        if block.kind is BlockKind.HEADING:
            tag = f"h{block.level}"
            if self.settings.heading_anchors:
                return f'<{tag} id="{anchor_make(block.body)}">{body}</{tag}>'
            return f"<{tag}>{body}</{tag}>"

        if block.kind is BlockKind.QUOTE:
            return f"<blockquote>{body}</blockquote>"

        if block.kind is BlockKind.UNORDERED:
            return f'<li class="{self.settings.list_class_unordered}">{body}</li>'

        if block.kind is BlockKind.ORDERED:
            return f'<li class="{self.settings.list_class_ordered}">{body}</li>'

        return body

    def lists_wrap(self, blocks: List[LineBlock]) -> List[str]:
        """
        Render blocks, wrapping runs of list items in a container

        Consecutive items of the same list kind become one <ul> or <ol>
        part with no line breaks between the items. Everything else
        renders as in block_render().

        Args:
            blocks: Classified lines in source order

        Returns:
            Rendered parts, to be joined with line breaks
        """
        containers = {BlockKind.UNORDERED: "ul", BlockKind.ORDERED: "ol"}
        parts: List[str] = []
        run: List[str] = []
        run_kind: Optional[BlockKind] = None

        def run_flush() -> None:
            if run_kind is not None and run:
                tag = containers[run_kind]
                parts.append(f"<{tag}>{''.join(run)}</{tag}>")
            run.clear()

        for block in blocks:
            if block.kind in containers:
                if block.kind is not run_kind:
                    run_flush()
                    run_kind = block.kind
                run.append(self.block_render(block))
                continue

            run_flush()
            run_kind = None
            parts.append(self.block_render(block))

        run_flush()
        return parts

    def inline_render(self, text: str) -> str:
        """
        Render inline constructs in a single line body

        Args:
            text: Line body (no block marker)

        Returns:
            HTML with inline constructs replaced; everything else verbatim
        """
        if not text:
            return ""
        return ''.join(
            self.token_render(tokentype, value)
            for _, tokentype, value in self.lexer.get_tokens_unprocessed(text)
        )

    def token_render(self, tokentype: Any, value: str) -> str:
        """
        Emit HTML for one inline token

        Bold, italic and link text are rendered recursively; inline code
        content is escaped and otherwise literal.
        """
        if tokentype is Name.Entity:
            match = IMAGE_RE.fullmatch(value)
            if match:
                return self.image_render(match.group(1), match.group(2), match.group(3))

        elif tokentype is String.Backtick:
            match = CODE_RE.fullmatch(value)
            if match:
                return f"<code>{html.escape(match.group(1), quote=False)}</code>"

        elif tokentype is Generic.Strong:
            match = BOLD_RE.fullmatch(value)
            if match:
                return f"<strong>{self.inline_render(match.group(1))}</strong>"

        elif tokentype is Generic.Emph:
            match = ITALIC_RE.fullmatch(value)
            if match:
                return f"<em>{self.inline_render(match.group(1))}</em>"

        elif tokentype is Name.Label:
            match = LINK_RE.fullmatch(value)
            if match:
                href = html.escape(match.group(2), quote=True)
                target = self.settings.link_target
                return f'<a href="{href}" target="{target}">{self.inline_render(match.group(1))}</a>'

        return value

    def image_render(self, alt: str, url: str, position_token: Optional[str]) -> str:
        """
        Emit an <img> tag with the class for its position

        Args:
            alt: Alternative text
            url: Image URL
            position_token: Quoted token after the URL, if any; unknown
                            tokens select the default class

        Returns:
            Self-closing <img> tag
        """
        position = ImagePosition.token_parse(position_token)
        css_class = self.settings.imageClass_get(position.value)
        return (
            f'<img src="{html.escape(url, quote=True)}" '
            f'alt="{html.escape(alt, quote=True)}" class="{css_class}" />'
        )

    def block_locate(self, source: str, cursor: int) -> ContentBlock:
        """
        Find the block that contains the cursor

        The block starts after the last separator found at or before
        cursor - 1 and ends at the first separator at or after the cursor.
        Missing separators extend the block to the respective end of the
        source. Out-of-range cursors are clamped.

        Args:
            source: Full post source
            cursor: Cursor offset into source

        Returns:
            ContentBlock with trimmed text and slice bounds

        Example:
            >>> Renderer().block_locate("One.\\n\\nTwo.", 7).text
            'Two.'
        """
        separator = self.settings.block_separator
        cursor = max(0, min(cursor, len(source)))

        search_from = max(0, cursor - 1)
        previous = source.rfind(separator, 0, search_from + len(separator))
        start = previous + len(separator) if previous >= 0 else 0

        following = source.find(separator, cursor)
        end = following if following >= 0 else len(source)
        end = max(start, end)

        return ContentBlock(text=source[start:end].strip(), start=start, end=end)

    def blockAtCursor_render(self, source: str, cursor: int) -> str:
        """
        Render only the block that contains the cursor

        Args:
            source: Full post source
            cursor: Cursor offset into source

        Returns:
            HTML fragment for the located block
        """
        block = self.block_locate(source, cursor)
        LOG(f"Inline preview block [{block.start}:{block.end}]", level=3)
        return self.render(block.text)


def render(source: str, settings: Optional[AppSettings] = None) -> str:
    """Render a complete source string to an HTML fragment"""
    return Renderer(settings).render(source)


def renderBlockAtCursor(source: str, cursorOffset: int, settings: Optional[AppSettings] = None) -> str:
    """Render the block around cursorOffset to an HTML fragment"""
    return Renderer(settings).blockAtCursor_render(source, cursorOffset)
