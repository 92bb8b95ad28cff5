"""
Cursor-scoped preview tests

Tests that renderBlockAtCursor() renders only the blank-line delimited
block around the cursor.
"""

import pytest

from folio.lib.renderer import Renderer, renderBlockAtCursor
from folio.models import ContentBlock


SOURCE = "Para one.\n\nPara two cursor here.\n\nPara three."


class TestBlockIsolation:
    """Only the block around the cursor is rendered"""

    def test_middle_block(self):
        """Cursor inside the second paragraph"""
        html = renderBlockAtCursor(SOURCE, SOURCE.index("two"))

        assert html == "Para two cursor here."
        assert "Para one" not in html
        assert "Para three" not in html

    def test_first_block(self):
        """Cursor at the very start"""
        assert renderBlockAtCursor(SOURCE, 0) == "Para one."

    def test_last_block(self):
        """Cursor at the very end"""
        assert renderBlockAtCursor(SOURCE, len(SOURCE)) == "Para three."

    @pytest.mark.parametrize("cursor,expected", [
        (-5, "Para one."),
        (10_000, "Para three."),
    ])
    def test_out_of_range_cursor_is_clamped(self, cursor, expected):
        """Offsets outside the source snap to its ends"""
        assert renderBlockAtCursor(SOURCE, cursor) == expected

    def test_no_separators(self):
        """Without blank lines the whole source is one block"""
        assert renderBlockAtCursor("Only\nlines", 3) == "Only<br>lines"

    def test_block_markup_is_rendered(self):
        """The located block goes through the full renderer"""
        source = "# Title\n\n**bold** text"
        assert renderBlockAtCursor(source, len(source)) == "<strong>bold</strong> text"

    def test_empty_source(self):
        """Nothing to preview"""
        assert renderBlockAtCursor("", 0) == ""


class TestBlockLocate:
    """Test the block bounds"""

    def test_bounds(self):
        """Block after the separator"""
        block = Renderer().block_locate("One.\n\nTwo.", 7)
        assert block == ContentBlock(text="Two.", start=6, end=10)

    def test_cursor_right_after_separator(self):
        """A cursor at the first character of a block belongs to it"""
        assert Renderer().block_locate("One.\n\nTwo.", 6).text == "Two."

    def test_cursor_at_end_of_block(self):
        """A cursor just before the separator belongs to the earlier block"""
        block = Renderer().block_locate("One.\n\nTwo.", 4)
        assert block == ContentBlock(text="One.", start=0, end=4)

    def test_cursor_between_separator_newlines(self):
        """The separator itself counts towards the following block"""
        assert Renderer().block_locate("One.\n\nTwo.", 5).text == "Two."

    def test_text_is_trimmed(self):
        """Whitespace around the block is dropped"""
        block = Renderer().block_locate("a\n\n   padded  \n\nb", 6)
        assert block.text == "padded"
