"""
HTML Renderer for mdpreview Markdown Parser

This module converts the block token sequence into a single HTML string.
Text runs go through the inline parser; only code block bodies are
HTML-escaped.

Code blocks render as a figure with a copy button. The original source is
stored percent-encoded in the figure's data-code attribute so a copy
handler can recover it exactly. Diagram blocks are emitted raw inside a
container the diagram library picks up after rendering.
"""

import html
import logging
from typing import Any, Dict, Iterable, List, Optional
from urllib.parse import quote

from .inline_parser import InlineParser
from .tokens import (
    ListType,
    MDBlockQuote,
    MDCodeBlock,
    MDEmpty,
    MDHeading,
    MDHorizontalRule,
    MDList,
    MDParagraph,
    MDTable,
    MDToken,
)

logger = logging.getLogger(__name__)

# Characters JavaScript's encodeURIComponent leaves alone
DATA_ATTR_SAFE_CHARS = "-_.!~*'()"

COPY_ICON_SVG = (
    '<svg width="16" height="16" viewBox="0 0 16 16" fill="none" xmlns="http://www.w3.org/2000/svg">'
    '<path d="M4 2C4 0.9 4.9 0 6 0H10C11.1 0 12 0.9 12 2V4H14C15.1 4 16 4.9 16 6V14C16 15.1 15.1 16 14 16H8'
    'C6.9 16 6 15.1 6 14V12H4C2.9 12 2 11.1 2 10V2Z" fill="currentColor"/>'
    "</svg>"
)


class HTMLRenderer:
    """
    Renderer that converts block tokens to HTML.

    Holds only options fixed at construction, so rendering the same tokens
    twice gives identical output.
    """

    def __init__(self, options: Optional[Dict[str, Any]] = None, inline_parser: Optional[InlineParser] = None):
        """
        Initialize the HTML renderer.

        Args:
            options: Optional rendering configuration
            inline_parser: Inline parser to reuse, a new one is created if omitted
        """
        self.options = options or {}
        self.inline_parser = inline_parser or InlineParser()

        # Default rendering options
        self.diagram_language = str(self.options.get("diagram_language", "mermaid")).lower()
        self.code_class_prefix = self.options.get("code_class_prefix", "language-")
        self.copy_button_title = self.options.get("copy_button_title", "Copy code")

    def render(self, tokens: Iterable[MDToken]) -> str:
        """
        Render a token sequence to HTML.

        Args:
            tokens: Tokens produced by the block parser

        Returns:
            Concatenated HTML of all tokens
        """
        html_parts = [self._render_token(token) for token in tokens]
        return "".join(html_parts)

    def _render_token(self, token: MDToken) -> str:
        """Render a single token. Unknown kinds render as an empty string."""
        if isinstance(token, MDHeading):
            return self._render_heading(token)
        elif isinstance(token, MDParagraph):
            return self._render_paragraph(token)
        elif isinstance(token, MDCodeBlock):
            return self._render_code_block(token)
        elif isinstance(token, MDList):
            return self._render_list(token)
        elif isinstance(token, MDBlockQuote):
            return self._render_block_quote(token)
        elif isinstance(token, MDTable):
            return self._render_table(token)
        elif isinstance(token, MDHorizontalRule):
            return "<hr>"
        elif isinstance(token, MDEmpty):
            return "<br>"
        else:
            logger.debug(f"Skipping unknown token {token!r}")
            return ""

    def _render_heading(self, token: MDHeading) -> str:
        """Render heading token."""
        content = self._inline(token.content)
        return f"<h{token.level}>{content}</h{token.level}>"

    def _render_paragraph(self, token: MDParagraph) -> str:
        """Render paragraph token."""
        return f"<p>{self._inline(token.content)}</p>"

    def _render_code_block(self, token: MDCodeBlock) -> str:
        """Render code block token as a diagram container or a copyable figure."""
        if token.language.lower() == self.diagram_language:
            return f'<div class="{self.diagram_language}">{token.content}</div>'

        language = self._escape_html(token.language or "text")
        escaped = self._escape_html(token.content)
        encoded = self._encode_for_data_attr(token.content)
        title = self._escape_html(self.copy_button_title)

        return (
            f'<figure class="code-block" data-code="{encoded}">'
            f'<div class="code-header">'
            f'<span class="code-lang">{language}</span>'
            f'<button class="code-copy-btn" title="{title}" aria-label="{title}">{COPY_ICON_SVG}</button>'
            f"</div>"
            f'<pre><code class="{self.code_class_prefix}{language}">{escaped}</code></pre>'
            f"</figure>"
        )

    def _render_list(self, token: MDList) -> str:
        """Render list token, nested lists go straight inside their parent <li>."""
        tag = "ol" if token.list_type == ListType.ORDERED else "ul"

        items: List[str] = []
        for item in token.items:
            content = item.content
            if item.children:
                content += "".join(self._render_list(child) for child in item.children)
            items.append(f"<li>{content}</li>")

        return f"<{tag}>{''.join(items)}</{tag}>"

    def _render_block_quote(self, token: MDBlockQuote) -> str:
        """Render block quote token, empty lines separate paragraphs."""
        paragraphs: List[str] = []
        buffer: List[str] = []

        for line in token.content.split("\n"):
            if line.strip():
                buffer.append(line)
            elif buffer:
                paragraphs.append(self._render_quote_paragraph(buffer))
                buffer = []

        if buffer:
            paragraphs.append(self._render_quote_paragraph(buffer))

        return f"<blockquote>{''.join(paragraphs)}</blockquote>"

    def _render_quote_paragraph(self, lines: List[str]) -> str:
        text = "\n".join(lines)
        return f"<p>{self._inline(text)}</p>"

    def _render_table(self, token: MDTable) -> str:
        """Render table token. Rows are rendered with whatever cells they have."""
        header_cells = "".join(f"<th>{self._inline(cell)}</th>" for cell in token.headers)

        body_rows: List[str] = []
        for row in token.rows:
            cells = "".join(f"<td>{self._inline(cell)}</td>" for cell in row)
            body_rows.append(f"<tr>{cells}</tr>")

        return f"<table><thead><tr>{header_cells}</tr></thead><tbody>{''.join(body_rows)}</tbody></table>"

    def _inline(self, text: str) -> str:
        """Run text through the inline parser."""
        return self.inline_parser.parse_inline(text).content

    def _escape_html(self, text: str) -> str:
        """Escape HTML special characters."""
        return html.escape(text, quote=True)

    def _encode_for_data_attr(self, text: str) -> str:
        """Percent-encode text the way encodeURIComponent does."""
        return quote(text, safe=DATA_ATTR_SAFE_CHARS, errors="surrogatepass")
