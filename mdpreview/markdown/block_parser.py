"""
Block Parser for mdpreview Markdown Parser

This module splits the input into lines and turns them into a flat
sequence of block tokens: headings, paragraphs, code blocks, block quotes,
tables, lists and horizontal rules. Nested lists are kept as trees inside
list tokens.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from .inline_parser import InlineParser
from .tokens import (
    ListType,
    MDBlockQuote,
    MDCodeBlock,
    MDEmpty,
    MDHeading,
    MDHorizontalRule,
    MDList,
    MDListItem,
    MDParagraph,
    MDTable,
    MDToken,
)

logger = logging.getLogger(__name__)

CODE_FENCE = "```"
QUOTE_MARKER = ">"
TABLE_MARKER = "|"

HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.+)$")
UNORDERED_MARKER_PATTERN = re.compile(r"^[-*+]\s")
ORDERED_MARKER_PATTERN = re.compile(r"^\d+\.\s")
HORIZONTAL_RULE_PATTERN = re.compile(r"^[-*_]{3,}$")
TABLE_SEPARATOR_PATTERN = re.compile(r"^\|[-:\s|]+\|$")
LEADING_WHITESPACE_PATTERN = re.compile(r"^(\s*)")

# Applied to the untrimmed line, group 1 is the indentation
NESTED_UNORDERED_PATTERN = re.compile(r"^(\s+)([-*+]\s.+)$")
NESTED_ORDERED_PATTERN = re.compile(r"^(\s+)(\d+\.\s.+)$")


class BlockParser:
    """
    Parser for block-level Markdown elements.

    Holds the lines of one document and a cursor over them. Every
    sub-parser leaves the cursor on the first line it did not consume.
    Create a new instance per document.
    """

    def __init__(
        self,
        text: str,
        options: Optional[Dict[str, Any]] = None,
        inline_parser: Optional[InlineParser] = None,
    ):
        self.lines = text.split("\n")
        self.pos = 0
        self.options = options or {}
        self.inline_parser = inline_parser or InlineParser()

        # Parser options
        self.default_code_language = self.options.get("default_code_language", "plain")

    def parse(self) -> List[MDToken]:
        """
        Parse all lines into block tokens.

        Returns:
            List of tokens in source order
        """
        tokens: List[MDToken] = []
        self.pos = 0

        while not self._is_at_end():
            tokens.append(self._parse_block())

        logger.debug(f"Parsed {len(self.lines)} lines into {len(tokens)} block tokens")
        return tokens

    def _parse_block(self) -> MDToken:
        """Parse a single block starting at the cursor."""
        line = self._current_line()
        stripped = line.strip()

        # Blank lines are kept, they render as line breaks
        if not stripped:
            self._advance()
            return MDEmpty()

        if stripped.startswith(CODE_FENCE):
            return self._parse_code_block()

        if stripped.startswith(QUOTE_MARKER):
            return self._parse_block_quote()

        heading_match = HEADING_PATTERN.match(stripped)
        if heading_match:
            self._advance()
            return MDHeading(len(heading_match.group(1)), heading_match.group(2))

        if stripped.startswith(TABLE_MARKER):
            table = self._parse_table()
            if table is not None:
                return table

        if UNORDERED_MARKER_PATTERN.match(stripped):
            return self._parse_list(ListType.UNORDERED, self._get_indentation(line))

        if ORDERED_MARKER_PATTERN.match(stripped):
            return self._parse_list(ListType.ORDERED, self._get_indentation(line))

        if HORIZONTAL_RULE_PATTERN.match(stripped):
            self._advance()
            return MDHorizontalRule()

        self._advance()
        return MDParagraph(line)

    def _parse_code_block(self) -> MDCodeBlock:
        """Parse a fenced code block. An unclosed fence runs to the end of input."""
        opening = self._current_line().strip()
        language = opening[len(CODE_FENCE) :].strip() or self.default_code_language
        self._advance()

        code_lines: List[str] = []
        while not self._is_at_end():
            line = self._current_line()
            self._advance()
            if line.strip() == CODE_FENCE:
                return MDCodeBlock("\n".join(code_lines), language)
            code_lines.append(line)

        logger.debug("Code fence not closed, consumed the rest of the input")
        return MDCodeBlock("\n".join(code_lines), language)

    def _parse_block_quote(self) -> MDBlockQuote:
        """
        Parse consecutive quoted lines.

        A line holding only the marker keeps an empty string, which the
        renderer treats as a paragraph break. An unquoted line, blank or
        not, ends the quote and is left for the next block. A blank line
        between two quoted lines therefore splits them into two quotes.
        """
        quote_lines: List[str] = []

        while not self._is_at_end():
            stripped = self._current_line().strip()
            if not stripped.startswith(QUOTE_MARKER):
                break
            quote_lines.append(stripped[len(QUOTE_MARKER) :].strip())
            self._advance()

        return MDBlockQuote("\n".join(quote_lines))

    def _parse_table(self) -> Optional[MDTable]:
        """
        Try to parse a table at the cursor.

        Returns:
            MDTable, or None (with the cursor restored) when no data row
            follows the header row
        """
        start = self.pos
        rows: List[List[str]] = []

        while not self._is_at_end():
            stripped = self._current_line().strip()
            if not stripped.startswith(TABLE_MARKER):
                break

            if not TABLE_SEPARATOR_PATTERN.match(stripped):
                cells = self._split_table_row(stripped)
                if cells:
                    rows.append(cells)

            self._advance()

        if len(rows) < 2:
            self.pos = start
            return None

        headers = rows[0]
        return MDTable(headers, rows[1:], len(headers))

    def _split_table_row(self, row: str) -> List[str]:
        """Split a row on pipes, dropping the empty cells outside the outer pipes."""
        cells = [cell.strip() for cell in row.split(TABLE_MARKER)]
        if cells and not cells[0]:
            cells = cells[1:]
        if cells and not cells[-1]:
            cells = cells[:-1]
        return cells

    def _parse_list(self, list_type: ListType, base_indent: int = 0) -> MDList:
        """
        Parse a list whose items sit at exactly base_indent.

        Deeper lines start a nested list keyed to their own indentation,
        which is attached to the last item. Blank lines are skipped.
        """
        md_list = MDList(list_type)
        marker_pattern = ORDERED_MARKER_PATTERN if list_type == ListType.ORDERED else UNORDERED_MARKER_PATTERN

        while not self._is_at_end():
            line = self._current_line()
            stripped = line.strip()

            if not stripped:
                self._advance()
                continue

            current_indent = self._get_indentation(line)

            # Back to a parent level
            if current_indent < base_indent:
                break

            if current_indent == base_indent:
                if not marker_pattern.match(stripped):
                    break
                inline = self.inline_parser.parse_inline(marker_pattern.sub("", stripped, count=1))
                md_list.items.append(MDListItem(inline.content, inline.raw, current_indent))
                self._advance()
                continue

            unordered_match = NESTED_UNORDERED_PATTERN.match(line)
            nested_match = unordered_match or NESTED_ORDERED_PATTERN.match(line)
            if nested_match is None or not md_list.items:
                break

            nested_type = ListType.UNORDERED if unordered_match else ListType.ORDERED
            start = self.pos
            nested_list = self._parse_list(nested_type, len(nested_match.group(1)))
            # A marker with nothing after it yields no items; leave the line for the next block
            if self.pos == start:
                break
            md_list.items[-1].add_child(nested_list)

        return md_list

    # Helper methods

    def _current_line(self) -> str:
        """Get the line under the cursor."""
        return self.lines[self.pos]

    def _advance(self) -> None:
        """Move to the next line."""
        self.pos += 1

    def _is_at_end(self) -> bool:
        """Check if all lines are consumed."""
        return self.pos >= len(self.lines)

    def _get_indentation(self, line: str) -> int:
        """Count leading whitespace characters; tabs count as one."""
        match = LEADING_WHITESPACE_PATTERN.match(line)
        return len(match.group(1)) if match else 0
