"""
Inline Parser for mdpreview Markdown Parser

This module turns a run of text into an HTML fragment by applying a fixed,
ordered sequence of substitutions: code spans, images, strikethrough,
bold-italic, bold, italic and links.

Each step scans the output of the previous one, so HTML inserted by an
earlier step is visible to later ones. In particular text inside a code
span is not protected from emphasis and link substitution. No escaping is
performed.
"""

import re
from typing import Callable, List, Tuple, Union

from .tokens import InlineResult

Replacement = Union[str, Callable[[re.Match], str]]


class InlineParser:
    """
    Parser for inline Markdown elements.

    Stateless apart from its compiled patterns, so one instance can be
    shared by the block parser and the renderer.
    """

    def __init__(self):
        self._compile_patterns()

    def _compile_patterns(self) -> None:
        """Compile regex patterns used for inline parsing."""
        self.code_span_pattern = re.compile(r"`([^`\n]+)`")
        self.image_pattern = re.compile(r'!\[([^\]\n]*)\]\(([^)\n]+?)(?:[ \t]+"([^"\n]+)")?\)')
        self.strikethrough_pattern = re.compile(r"~~(.+?)~~")
        self.bold_italic_pattern = re.compile(r"\*\*\*(.+?)\*\*\*")
        self.bold_pattern = re.compile(r"\*\*(.+?)\*\*")
        self.italic_pattern = re.compile(r"\*(.+?)\*")
        self.link_pattern = re.compile(r'\[([^\]\n]+)\]\(([^)\n]+?)(?:[ \t]+"([^"\n]+)")?\)')

        # Order matters: every step sees the output of the ones before it
        self.substitutions: List[Tuple[re.Pattern, Replacement]] = [
            (self.code_span_pattern, r"<code>\1</code>"),
            (self.image_pattern, self._render_image),
            (self.strikethrough_pattern, r"<del>\1</del>"),
            (self.bold_italic_pattern, r"<strong><em>\1</em></strong>"),
            (self.bold_pattern, r"<strong>\1</strong>"),
            (self.italic_pattern, r"<em>\1</em>"),
            (self.link_pattern, self._render_link),
        ]

    def parse_inline(self, text: str) -> InlineResult:
        """
        Apply all inline substitutions to a text run.

        Args:
            text: Raw text of a paragraph, heading, list item, quote
                  paragraph or table cell

        Returns:
            InlineResult with the resulting HTML fragment
        """
        for pattern, replacement in self.substitutions:
            text = pattern.sub(replacement, text)
        return InlineResult(text, text)

    def _render_image(self, match: re.Match) -> str:
        """Build an <img> tag from an image match."""
        alt, url, title = match.group(1), match.group(2), match.group(3)
        if title:
            return f'<img src="{url}" alt="{alt}" title="{title}">'
        return f'<img src="{url}" alt="{alt}">'

    def _render_link(self, match: re.Match) -> str:
        """Build an <a> tag from a link match."""
        text, url, title = match.group(1), match.group(2), match.group(3)
        if title:
            return f'<a href="{url}" title="{title}">{text}</a>'
        return f'<a href="{url}">{text}</a>'
