"""
Main Markdown Parser for mdpreview

This module provides the MarkdownParser class that ties block parsing,
inline formatting and HTML rendering together, plus convenience functions
for one-off conversions.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from .block_parser import BlockParser
from .inline_parser import InlineParser
from .renderer import HTMLRenderer
from .tokens import InlineResult, MDParagraph, MDToken

logger = logging.getLogger(__name__)


class MarkdownParseError(Exception):
    """Exception raised when Markdown parsing fails in strict mode."""

    def __init__(self, message: str, line: Optional[int] = None):
        """
        Initialize parse error.

        Args:
            message: Error message
            line: Zero-based line index where parsing stopped
        """
        self.message = message
        self.line = line

        location = ""
        if line is not None:
            location = f" at line {line + 1}"

        super().__init__(f"{message}{location}")


class MarkdownParser:
    """
    Main Markdown parser that coordinates all processing stages.

    1. Block parsing: split input into lines and build block tokens
       (list item text is inline-formatted here)
    2. Rendering: turn tokens into HTML, inline-formatting the remaining
       text runs

    Every call starts from scratch; nothing from a previous document is
    kept between calls.
    """

    def __init__(self, options: Optional[Dict[str, Any]] = None):
        """
        Initialize the Markdown parser.

        Args:
            options: Optional parser configuration. Renderer settings go
                     under the 'html_options' key.
        """
        self.options = options or {}

        # Parser options
        self.strict_mode = self.options.get("strict_mode", False)

        # Initialize components
        self.inline_parser = InlineParser()
        self.html_renderer = HTMLRenderer(self.options.get("html_options", {}), self.inline_parser)

    def parse(self, markdown_text: str) -> List[MDToken]:
        """
        Parse Markdown text into block tokens.

        Args:
            markdown_text: The Markdown text to parse

        Returns:
            List of tokens in source order

        Raises:
            ValueError: If input is not a string
            MarkdownParseError: If parsing fails in strict mode
        """
        if not isinstance(markdown_text, str):
            raise ValueError("Input must be a string")

        block_parser = BlockParser(markdown_text, self.options, self.inline_parser)
        try:
            return block_parser.parse()
        except Exception as e:
            if self.strict_mode:
                raise MarkdownParseError(f"Parsing failed: {e}", block_parser.pos) from e
            logger.error(f"Parsing failed at line {block_parser.pos + 1}, rendering as plain text: {e}")
            return [MDParagraph(markdown_text)]

    def render(self, tokens: Iterable[MDToken]) -> str:
        """
        Render block tokens to HTML.

        Args:
            tokens: Tokens returned by parse()

        Returns:
            HTML string
        """
        return self.html_renderer.render(tokens)

    def parse_to_html(self, markdown_text: str) -> str:
        """
        Parse Markdown text and render to HTML.

        Args:
            markdown_text: The Markdown text to parse

        Returns:
            HTML string representation
        """
        return self.render(self.parse(markdown_text))

    def parse_inline(self, text: str) -> InlineResult:
        """Apply inline formatting to a single text run."""
        return self.inline_parser.parse_inline(text)

    def get_tokens_json(self, markdown_text: str) -> List[Dict[str, Any]]:
        """
        Parse Markdown text and return tokens as JSON-serializable dictionaries.

        Args:
            markdown_text: The Markdown text to parse

        Returns:
            List of token dictionaries
        """
        return [token.to_dict() for token in self.parse(markdown_text)]

    def get_option(self, key: str, default: Any = None) -> Any:
        """
        Get a parser option.

        Args:
            key: Option name
            default: Default value if option not found

        Returns:
            Option value or default
        """
        return self.options.get(key, default)


# Convenience functions for quick parsing


def parse_markdown(text: str, **options) -> List[MDToken]:
    """
    Parse Markdown text into block tokens.

    Args:
        text: Markdown text to parse
        **options: Parser options

    Returns:
        List of tokens
    """
    parser = MarkdownParser(options)
    return parser.parse(text)


def render_tokens(tokens: Iterable[MDToken], **options) -> str:
    """
    Render block tokens to HTML.

    Args:
        tokens: Tokens to render
        **options: Renderer options

    Returns:
        HTML string
    """
    return HTMLRenderer(options).render(tokens)


def markdown_to_html(text: str, **options) -> str:
    """
    Convert Markdown text to HTML.

    Args:
        text: Markdown text to convert
        **options: Parser options, renderer options under 'html_options'

    Returns:
        HTML string
    """
    parser = MarkdownParser(options)
    return parser.parse_to_html(text)


def parse_inline(text: str) -> InlineResult:
    """Apply inline formatting to a single text run."""
    return InlineParser().parse_inline(text)
