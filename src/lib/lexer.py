"""
Pygments lexer for the inline constructs of the markdown dialect

The renderer classifies each line first (headings, quotes, list items) and
then hands the line body to InlineLexer, which splits it into a flat token
stream. Because the lexer consumes the text left to right, the output of
one rule is never re-matched by another: a `**` inside inline code stays
literal, and the `*` of a bold run can never open an italic run.

Token types:
- Name.Entity: Image directive (![alt](url "position"))
- String.Backtick: Inline code (`text`)
- Generic.Strong: Bold (**text**)
- Generic.Emph: Italic (*text*)
- Name.Label: Link ([text](url))
- Text: Everything else, including malformed markup
"""

import re

from pygments.lexer import RegexLexer
from pygments.token import Text, Name, String, Generic


# Group layout is relied upon by the renderer and the image helpers
IMAGE_PATTERN = r'!\[([^\]]*)\]\(([^)\s]+)(?:\s+"([^"]*)")?\)'
CODE_PATTERN = r'`([^`]+)`'
BOLD_PATTERN = r'\*\*(.+?)\*\*'
ITALIC_PATTERN = r'\*([^*]+)\*'
LINK_PATTERN = r'\[([^\]]+)\]\(([^)]+)\)'

IMAGE_RE = re.compile(IMAGE_PATTERN)
CODE_RE = re.compile(CODE_PATTERN)
BOLD_RE = re.compile(BOLD_PATTERN)
ITALIC_RE = re.compile(ITALIC_PATTERN)
LINK_RE = re.compile(LINK_PATTERN)


class InlineLexer(RegexLexer):
    """
    Lexer for inline markdown constructs

    Rule order is significant: images before links (an image is a link
    with a leading !), code before emphasis (code content is literal),
    bold before italic.

    Example:
        **a** *b*

    Tokens:
        **a** → Generic.Strong
        (space) → Text
        *b* → Generic.Emph
    """

    name = 'FolioInline'
    aliases = ['folio-inline']
    filenames = []

    tokens = {
        'root': [
            (IMAGE_PATTERN, Name.Entity),
            (CODE_PATTERN, String.Backtick),
            (BOLD_PATTERN, Generic.Strong),
            (ITALIC_PATTERN, Generic.Emph),
            (LINK_PATTERN, Name.Label),

            # Runs of characters that cannot open a construct
            (r'[^!`*\[\n]+', Text),

            # A lone opener that did not form a construct stays literal
            (r'.', Text),
            (r'\n', Text),
        ],
    }
