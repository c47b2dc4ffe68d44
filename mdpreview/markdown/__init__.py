"""
mdpreview Markdown Parser

A small line-oriented Markdown to HTML converter for live preview.

This module provides:
- Block parsing of Markdown text into a flat token sequence
- Inline formatting (code, images, strikethrough, emphasis, links)
- HTML rendering with copyable code blocks and diagram containers

Usage:
    from mdpreview.markdown import MarkdownParser, markdown_to_html

    parser = MarkdownParser()
    tokens = parser.parse("# Hello World\n\nThis is **bold** text.")
    html = parser.render(tokens)

    # Convenience function
    html = markdown_to_html("- a\n  - b\n- c")

Every call parses the whole document again; nothing is cached between
calls.
"""

from .block_parser import BlockParser
from .inline_parser import InlineParser
from .parser import (
    MarkdownParseError,
    MarkdownParser,
    markdown_to_html,
    parse_inline,
    parse_markdown,
    render_tokens,
)
from .renderer import HTMLRenderer
from .tokens import (
    InlineResult,
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
    TokenType,
)

__version__ = "1.0.0"
__all__ = [
    "MarkdownParser",
    "MarkdownParseError",
    "parse_markdown",
    "render_tokens",
    "markdown_to_html",
    "parse_inline",
    "BlockParser",
    "InlineParser",
    "HTMLRenderer",
    # Tokens
    "TokenType",
    "ListType",
    "InlineResult",
    "MDToken",
    "MDEmpty",
    "MDHorizontalRule",
    "MDHeading",
    "MDParagraph",
    "MDCodeBlock",
    "MDBlockQuote",
    "MDTable",
    "MDList",
    "MDListItem",
]
