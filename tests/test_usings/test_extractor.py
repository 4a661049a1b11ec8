"""
Tests for usingtidy.usings.extractor and usingtidy.usings.block modules.

Coverage targets:
- detect_line_ending()
- UsingBlockExtractor.extract(): block boundaries, leading content, indentation,
  end-of-file detection, multiple blocks
- UsingBlockExtractor.replace(): splicing rewritten blocks
- UsingBlock: line mapping and serialization trailer rules
"""
from __future__ import annotations

import textwrap

from usingtidy.usings.block import UsingBlock
from usingtidy.usings.extractor import UsingBlockExtractor, detect_line_ending
from usingtidy.usings.statement import UsingStatement


# =============================================================================
# Line Ending Tests
# =============================================================================

class TestDetectLineEnding:
    """Tests for detect_line_ending()."""

    def test_lf(self):
        assert detect_line_ending("using A;\nusing B;\n") == "\n"

    def test_crlf(self):
        assert detect_line_ending("using A;\r\nusing B;\r\n") == "\r\n"

    def test_no_newline(self):
        assert detect_line_ending("using A;") == "\n"


# =============================================================================
# Extraction Tests
# =============================================================================

class TestExtract:
    """Tests for UsingBlockExtractor.extract()."""

    def test_no_usings(self):
        """A file without usings has no blocks."""
        text = "// just a comment\n\nclass A {}\n"

        assert UsingBlockExtractor().extract(text) == []

    def test_simple_block(self):
        """A block spans the usings plus the blank lines after them."""
        text = "using System;\nusing Foo;\n\nnamespace X;"

        blocks = UsingBlockExtractor().extract(text)

        assert len(blocks) == 1
        block = blocks[0]
        assert block.start_line == 0
        assert block.end_line == 2
        assert block.leading_content == ()
        assert [s.to_string() for s in block.statements] == ["using System;", "using Foo;", ""]
        assert block.at_end_of_file is False
        assert block.trailing_blank_count == 1

    def test_header_comment_is_leading_content(self):
        """Lines before the first using are kept as leading content."""
        text = "// Copyright\n\nusing System;\n\nnamespace X;"

        block = UsingBlockExtractor().extract(text)[0]

        assert block.leading_content == ("// Copyright", "")
        assert block.statements_start_line == 2
        assert block.end_line == 3

    def test_comment_after_last_using_is_excluded(self):
        """A doc comment before the namespace belongs to the namespace."""
        text = "using System;\n\n// doc\nnamespace X;"

        block = UsingBlockExtractor().extract(text)[0]

        assert block.end_line == 1
        assert len(block.statements) == 2

    def test_block_ends_at_code(self):
        """The first OTHER line terminates the block."""
        text = "using A;\n#pragma warning disable\nusing B;\n"

        blocks = UsingBlockExtractor().extract(text)

        assert len(blocks) == 2
        assert blocks[0].end_line == 0
        assert blocks[1].start_line == 2

    def test_nested_block_indentation(self, sample_nested_namespace_code):
        """Usings inside a namespace body record their indentation."""
        block = UsingBlockExtractor().extract(sample_nested_namespace_code)[0]

        assert block.start_line == 2
        assert block.end_line == 4
        assert block.indent == "    "

    def test_multiple_blocks(self):
        """Usings at file level and inside a namespace form separate blocks."""
        text = textwrap.dedent('''\
            using A;

            namespace X
            {
                using B;

                class C {}
            }
        ''')

        blocks = UsingBlockExtractor().extract(text)

        assert [b.start_line for b in blocks] == [0, 4]
        assert blocks[1].indent == "    "

    def test_end_of_file(self):
        """A block that reaches the last line is at end of file."""
        block = UsingBlockExtractor().extract("using A;\n")[0]

        assert block.at_end_of_file is True
        assert block.trailing_blank_count == 1

    def test_crlf_split(self):
        """CRLF text is split on the given line ending."""
        text = "using B;\r\nusing A;\r\n\r\nnamespace X;"

        block = UsingBlockExtractor().extract(text, "\r\n")[0]

        assert [s.to_string() for s in block.statements] == ["using B;", "using A;", ""]

    def test_byte_order_mark_ignored(self):
        """A file saved with a UTF-8 BOM still starts with a using."""
        blocks = UsingBlockExtractor().extract("\ufeffusing B;\nusing A;\n")

        assert len(blocks) == 1
        assert blocks[0].start_line == 0
        assert blocks[0].statements[0].namespace == "B"


# =============================================================================
# Replacement Tests
# =============================================================================

class TestReplace:
    """Tests for UsingBlockExtractor.replace()."""

    def test_replace_single_block(self):
        text = "using B;\nusing A;\n\nnamespace X;"
        extractor = UsingBlockExtractor()
        block = extractor.extract(text)[0]

        result = extractor.replace(text, "\n", [(block, ["using A;", "using B;", ""])])

        assert result == "using A;\nusing B;\n\nnamespace X;"

    def test_byte_order_mark_kept(self):
        text = "\ufeffusing B;\nusing A;\n"
        extractor = UsingBlockExtractor()
        block = extractor.extract(text)[0]

        result = extractor.replace(text, "\n", [(block, ["using A;", "using B;", ""])])

        assert result == "\ufeffusing A;\nusing B;\n"

    def test_replace_multiple_blocks_keeps_positions(self):
        """Blocks are spliced from the bottom so earlier spans stay valid."""
        text = "using B;\nusing A;\n\nnamespace X\n{\n    using D;\n    using C;\n\n}"
        extractor = UsingBlockExtractor()
        first, second = extractor.extract(text)

        result = extractor.replace(
            text,
            "\n",
            [(first, ["using A;"]), (second, ["    using C;", "    using D;", ""])],
        )

        assert result == "using A;\nnamespace X\n{\n    using C;\n    using D;\n\n}"


# =============================================================================
# UsingBlock Tests
# =============================================================================

class TestUsingBlock:
    """Tests for UsingBlock line mapping and serialization."""

    def _block(self, lines, leading=(), start_line=0, at_end_of_file=False):
        statements = tuple(UsingStatement.parse(line) for line in lines)
        return UsingBlock(
            start_line=start_line,
            end_line=start_line + len(leading) + len(statements) - 1,
            leading_content=tuple(leading),
            statements=statements,
            at_end_of_file=at_end_of_file,
        )

    def test_line_mapping(self):
        """File lines and block-local indices map onto each other."""
        block = self._block(["using A;", "using B;"], leading=["// header", ""], start_line=5)

        assert block.statements_start_line == 7
        assert block.file_line_of(1) == 8
        assert block.index_of(8) == 1

    def test_using_count(self):
        block = self._block(["// c", "using A;", "#if X", "using B;", "#endif", ""])

        assert block.using_count() == 2

    def test_trailer_is_normalized_to_one_blank(self):
        """Several trailing blanks become one when code follows."""
        block = self._block(["using A;", "", "", ""])

        assert block.to_lines() == ["using A;", ""]

    def test_trailer_added_when_missing(self):
        """A blank line is added between the usings and following code."""
        block = self._block(["using A;"])

        assert block.to_lines() == ["using A;", ""]

    def test_end_of_file_without_final_newline(self):
        """No blank line is invented at end of file."""
        block = self._block(["using A;"], at_end_of_file=True)

        assert block.to_lines() == ["using A;"]

    def test_leading_content_is_verbatim(self):
        block = self._block(["using A;"], leading=["  // Header  ", ""])

        assert block.to_lines() == ["  // Header  ", "", "using A;", ""]

    def test_empty_body_drops_trailer(self):
        """When every using is removed nothing but leading content remains."""
        block = self._block(["using A;", ""])

        assert block.to_lines([]) == []

    def test_with_statements(self):
        block = self._block(["using A;", ""])

        updated = block.with_statements([UsingStatement.parse("using B;")])

        assert updated.trailing_blank_count == 0
        assert updated.start_line == block.start_line
