"""
Block-level renderer tests

Tests headings, blockquotes, list items, line breaks and the optional
list wrapping.
"""

import pytest

from folio.config import AppSettings
from folio.lib.renderer import Renderer, render
from folio.models import BlockKind


class TestEmptyAndPlain:
    """Test empty source and plain text"""

    def test_empty_source(self):
        """Empty string renders to empty string"""
        assert render("") == ""

    def test_plain_line(self):
        """A line without markup passes through unchanged"""
        assert render("Just some words.") == "Just some words."

    def test_newlines_become_breaks(self):
        """Every newline becomes a <br>"""
        assert render("line one\nline two") == "line one<br>line two"

    def test_blank_line_gives_two_breaks(self):
        """A blank line between paragraphs yields two breaks"""
        assert render("a\n\nb") == "a<br><br>b"

    def test_crlf_line_endings(self):
        """Windows line endings render like plain newlines"""
        assert render("a\r\nb") == "a<br>b"

    def test_raw_html_passes_through(self):
        """Authored HTML is left alone"""
        assert render("<span>hi</span>") == "<span>hi</span>"


class TestHeadings:
    """Test heading levels 1-3"""

    @pytest.mark.parametrize("source,expected", [
        ("# Title", "<h1>Title</h1>"),
        ("## Section", "<h2>Section</h2>"),
        ("### Detail", "<h3>Detail</h3>"),
    ])
    def test_heading_levels(self, source, expected):
        """One to three # produce h1-h3"""
        assert render(source) == expected

    def test_four_hashes_are_literal(self):
        """Level 4 is not part of the dialect"""
        assert render("#### Too deep") == "#### Too deep"

    def test_hash_without_space_is_literal(self):
        """The marker needs a trailing space"""
        assert render("#hashtag") == "#hashtag"

    def test_heading_body_gets_inline_markup(self):
        """Heading text is inline-rendered"""
        assert render("# **Big** idea") == "<h1><strong>Big</strong> idea</h1>"

    def test_heading_followed_by_text(self):
        """Heading and the next line are separated by a break"""
        assert render("# Title\nBody") == "<h1>Title</h1><br>Body"

    def test_heading_anchor_option(self):
        """Headings carry an id when anchors are enabled"""
        renderer = Renderer(AppSettings(heading_anchors=True))
        assert renderer.render("## Getting Started") == '<h2 id="getting-started">Getting Started</h2>'


class TestQuotesAndLists:
    """Test blockquotes and list items"""

    def test_blockquote(self):
        """> marks a blockquote"""
        assert render("> quoted") == "<blockquote>quoted</blockquote>"

    def test_blockquote_needs_space(self):
        """>without space stays literal"""
        assert render(">nope") == ">nope"

    def test_unordered_item(self):
        """- marks a disc list item"""
        assert render("- item") == '<li class="list-disc">item</li>'

    def test_ordered_item(self):
        """Any number followed by '. ' marks a decimal list item"""
        assert render("3. third") == '<li class="list-decimal">third</li>'

    def test_decimal_number_is_not_a_list(self):
        """1.5 kg is plain text"""
        assert render("1.5 kg") == "1.5 kg"

    def test_items_are_not_wrapped_by_default(self):
        """Runs of items stay bare, separated by breaks"""
        assert render("- one\n- two") == (
            '<li class="list-disc">one</li><br><li class="list-disc">two</li>'
        )

    def test_item_body_gets_inline_markup(self):
        """List item text is inline-rendered"""
        assert render("- *soft* item") == '<li class="list-disc"><em>soft</em> item</li>'

    def test_custom_list_classes(self):
        """List classes come from settings"""
        renderer = Renderer(AppSettings(list_class_unordered="bullet"))
        assert renderer.render("- x") == '<li class="bullet">x</li>'


class TestListWrapping:
    """Test the opt-in <ul>/<ol> wrapping"""

    def test_runs_are_wrapped(self):
        """Consecutive items of one kind share a container"""
        renderer = Renderer(AppSettings(wrap_lists=True))
        html = renderer.render("- one\n- two\n1. first\ntext")

        assert html == (
            '<ul><li class="list-disc">one</li><li class="list-disc">two</li></ul>'
            '<br><ol><li class="list-decimal">first</li></ol>'
            '<br>text'
        )

    def test_text_splits_runs(self):
        """A non-list line closes the container"""
        renderer = Renderer(AppSettings(wrap_lists=True))
        html = renderer.render("- a\nbreak\n- b")

        assert html.count("<ul>") == 2
        assert html.count("</ul>") == 2


class TestLineClassification:
    """Test the block pass directly"""

    def test_classify_heading(self):
        """Heading level and body are extracted"""
        block = Renderer().line_classify("## Setup", line_number=4)

        assert block.kind is BlockKind.HEADING
        assert block.level == 2
        assert block.body == "Setup"
        assert block.line_number == 4

    def test_classify_text(self):
        """Unmarked lines are TEXT with the full line as body"""
        block = Renderer().line_classify("plain")

        assert block.kind is BlockKind.TEXT
        assert block.body == "plain"

    def test_lines_numbered_in_order(self):
        """Every line gets a block, numbered from 1"""
        blocks = Renderer().lines_classify("a\n- b\n> c")

        assert [block.kind for block in blocks] == [BlockKind.TEXT, BlockKind.UNORDERED, BlockKind.QUOTE]
        assert [block.line_number for block in blocks] == [1, 2, 3]
