"""Tests for the parameter list parser."""

import pytest

from structdoc.blocks import Block, BlockKind
from structdoc.params import (
    ParameterEntry,
    ParameterForm,
    ParameterListError,
    bullet_text,
    parse_parameter_list,
)


@pytest.fixture
def parameters_block(source_lines):
    """Build a parameters block from plain contents."""

    def build(*contents: str) -> Block:
        return Block(BlockKind.PARAMETER_SECTION, source_lines(*contents))

    return build


class TestNestedForm:
    """Tests for the ``- Parameters:`` nested list."""

    def test_entries(self, parameters_block):
        """Test that nested items become entries in order."""
        block = parameters_block("- Parameters:", "  - a: The a.", "  - b: The b.")

        result = parse_parameter_list(block)

        assert result.form == ParameterForm.NESTED
        assert result.names == ["a", "b"]
        assert result.entries[0].text == "a: The a."
        assert result.entries[1].offset == 200

    def test_continuation_lines(self, parameters_block):
        """Test that deeper lines continue the previous item."""
        block = parameters_block(
            "- Parameters:",
            "  - a: The a,",
            "    which wraps.",
            "  - b: The b.",
        )

        assert parse_parameter_list(block).names == ["a", "b"]

    def test_ends_at_header_level(self, parameters_block):
        """Test that a line at the header's indentation ends the list."""
        block = parameters_block("- Parameters:", "  - a: The a.", "- Returns: Something.")

        assert parse_parameter_list(block).names == ["a"]

    def test_ends_at_blank_line(self, parameters_block):
        """Test that the list ends at the next blank line."""
        block = parameters_block("- Parameters:", "  - a: The a.", "", "  - b: The b.")

        assert parse_parameter_list(block).names == ["a"]

    def test_empty_nested_list(self, parameters_block):
        """Test a header without items."""
        result = parse_parameter_list(parameters_block("- Parameters:"))

        assert result.form == ParameterForm.NESTED
        assert result.entries == ()

    def test_inconsistent_indentation(self, parameters_block):
        """Test that items between header and item indentation are rejected."""
        block = parameters_block("- Parameters:", "    - a: The a.", "  - b: The b.")

        with pytest.raises(ParameterListError, match="Inconsistent indentation"):
            parse_parameter_list(block)

    def test_item_without_colon(self, parameters_block):
        """Test that an item without colon is rejected."""
        block = parameters_block("- Parameters:", "  - a The a.")

        with pytest.raises(ParameterListError, match="without a colon") as exc_info:
            parse_parameter_list(block)

        assert exc_info.value.line.offset == 100

    def test_non_bullet_item(self, parameters_block):
        """Test that plain text at item indentation is rejected."""
        block = parameters_block("- Parameters:", "  - a: The a.", "  b: The b.")

        with pytest.raises(ParameterListError, match="Expected a list item"):
            parse_parameter_list(block)


class TestFlatForm:
    """Tests for repeated ``- Parameter name:`` bullets."""

    def test_parameter_keyword(self, parameters_block):
        """Test bullets with the Parameter keyword."""
        block = parameters_block("- Parameter a: The a.", "- Parameter b: The b.")

        result = parse_parameter_list(block)

        assert result.form == ParameterForm.FLAT
        assert result.names == ["a", "b"]
        assert result.entries[0].text == "a: The a."

    def test_bare_names(self, parameters_block):
        """Test bullets without the Parameter keyword."""
        block = parameters_block("- a: The a.", "- Parameter b: The b.")

        assert parse_parameter_list(block).names == ["a", "b"]

    def test_alternative_bullets(self, parameters_block):
        """Test ``*`` and ``+`` bullet markers."""
        block = parameters_block("* Parameter a: The a.", "+ Parameter b: The b.")

        assert parse_parameter_list(block).names == ["a", "b"]

    def test_stops_at_callout(self, parameters_block):
        """Test that other markup callouts end the list."""
        block = parameters_block(
            "- Parameter a: The a.",
            "- Returns: The result.",
            "- Throws: An error.",
        )

        assert parse_parameter_list(block).names == ["a"]

    def test_skips_leading_blank_lines(self, parameters_block):
        """Test that blank lines before the list are ignored."""
        block = parameters_block("", "", "- Parameter a: The a.")

        assert parse_parameter_list(block).names == ["a"]

    def test_continuation_lines(self, parameters_block):
        """Test that indented lines continue the previous bullet."""
        block = parameters_block("- Parameter a: The a,", "  continued.", "- Parameter b: x")

        assert parse_parameter_list(block).names == ["a", "b"]

    def test_text_instead_of_bullet(self, parameters_block):
        """Test that a paragraph is not a parameter list."""
        block = parameters_block("Discussion paragraph.", "- Parameter a: The a.")

        with pytest.raises(ParameterListError, match="Expected a list item"):
            parse_parameter_list(block)

    def test_less_indented_line(self, parameters_block):
        """Test that outdented bullets are rejected."""
        block = parameters_block("  - Parameter a: The a.", "- Parameter b: The b.")

        with pytest.raises(ParameterListError, match="Inconsistent indentation"):
            parse_parameter_list(block)

    def test_bullet_without_colon(self, parameters_block):
        """Test that a bullet without colon is rejected."""
        block = parameters_block("- Parameter a: The a.", "- Parameter b")

        with pytest.raises(ParameterListError, match="without a colon"):
            parse_parameter_list(block)

    def test_bullet_without_name(self, parameters_block):
        """Test that a bullet with an empty name is rejected."""
        with pytest.raises(ParameterListError, match="without a name"):
            parse_parameter_list(parameters_block("- : The a."))

    def test_empty_block(self, parameters_block):
        """Test that an empty block yields no entries."""
        assert parse_parameter_list(parameters_block()).entries == ()


class TestParameterEntry:
    """Tests for ParameterEntry matching."""

    def test_documents_uses_literal_prefix(self, source_lines):
        """Test the ``name:`` prefix comparison."""
        line = source_lines("- ab: x")[0]
        entry = ParameterEntry(name="ab", text="ab: x", line=line)

        assert entry.documents("ab")
        assert not entry.documents("a")
        assert not entry.documents("AB")


class TestBulletText:
    """Tests for bullet_text."""

    @pytest.mark.parametrize(
        "content, expected",
        [
            ("- a: x", "a: x"),
            ("  *  a: x", "a: x"),
            ("-a: x", None),
            ("a: x", None),
            ("", None),
        ],
    )
    def test_bullet_text(self, content, expected):
        assert bullet_text(content) == expected
