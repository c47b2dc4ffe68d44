"""
Tests for the HTML renderer.
"""

import html
import re
import unittest
from urllib.parse import unquote

from mdpreview.markdown import BlockParser, HTMLRenderer
from mdpreview.markdown.tokens import (
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
)


class UnknownToken:
    """Token kind the renderer does not know about."""

    token_type = "footnote"


class TestHTMLRenderer(unittest.TestCase):
    """Test rendering of each token kind."""

    def setUp(self):
        """Set up test fixtures."""
        self.renderer = HTMLRenderer()

    def render_text(self, text: str) -> str:
        return self.renderer.render(BlockParser(text).parse())

    def test_heading(self):
        self.assertEqual(self.renderer.render([MDHeading(3, "Title")]), "<h3>Title</h3>")
        self.assertEqual(self.render_text("### Title"), "<h3>Title</h3>")

    def test_heading_inline(self):
        self.assertEqual(self.render_text("# Hello *world*"), "<h1>Hello <em>world</em></h1>")

    def test_paragraph(self):
        self.assertEqual(self.renderer.render([MDParagraph("This is **bold**")]), "<p>This is <strong>bold</strong></p>")

    def test_rule_and_empty(self):
        self.assertEqual(self.renderer.render([MDHorizontalRule(), MDEmpty()]), "<hr><br>")

    def test_paragraphs_with_blank_line(self):
        self.assertEqual(self.render_text("a\n\nb"), "<p>a</p><br><p>b</p>")

    def test_nested_list(self):
        self.assertEqual(self.render_text("- a\n  - b\n- c"), "<ul><li>a<ul><li>b</li></ul></li><li>c</li></ul>")

    def test_ordered_list_with_nested_unordered(self):
        self.assertEqual(
            self.render_text("1. one\n   - x\n   - y\n2. two"),
            "<ol><li>one<ul><li>x</li><li>y</li></ul></li><li>two</li></ol>",
        )

    def test_list_item_with_several_nested_lists(self):
        item = MDListItem("a")
        item.add_child(MDList(ListType.UNORDERED, [MDListItem("b", indent=4)]))
        item.add_child(MDList(ListType.ORDERED, [MDListItem("c", indent=2)]))
        md_list = MDList(ListType.UNORDERED, [item])
        self.assertEqual(
            self.renderer.render([md_list]),
            "<ul><li>a<ul><li>b</li></ul><ol><li>c</li></ol></li></ul>",
        )

    def test_list_item_content_is_not_reprocessed(self):
        """Item content is already HTML and goes out as-is."""
        md_list = MDList(ListType.UNORDERED, [MDListItem("*literal*")])
        self.assertEqual(self.renderer.render([md_list]), "<ul><li>*literal*</li></ul>")

    def test_block_quote_paragraphs(self):
        self.assertEqual(
            self.render_text("> line1\n>\n> line2"),
            "<blockquote><p>line1</p><p>line2</p></blockquote>",
        )

    def test_block_quote_single_paragraph(self):
        self.assertEqual(self.render_text("> a\n> b"), "<blockquote><p>a\nb</p></blockquote>")

    def test_block_quote_inline(self):
        self.assertEqual(
            self.render_text("> **bold** and *italic*"),
            "<blockquote><p><strong>bold</strong> and <em>italic</em></p></blockquote>",
        )

    def test_block_quote_extra_blank_lines(self):
        token = MDBlockQuote("\n\na\n\n\nb\n")
        self.assertEqual(self.renderer.render([token]), "<blockquote><p>a</p><p>b</p></blockquote>")

    def test_empty_block_quote(self):
        self.assertEqual(self.render_text(">"), "<blockquote></blockquote>")

    def test_table(self):
        token = MDTable(["Name", "**Status**"], [["a", "`ok`"], ["b"], ["c", "d", "e"]], 2)
        self.assertEqual(
            self.renderer.render([token]),
            "<table><thead><tr><th>Name</th><th><strong>Status</strong></th></tr></thead>"
            "<tbody><tr><td>a</td><td><code>ok</code></td></tr>"
            "<tr><td>b</td></tr>"
            "<tr><td>c</td><td>d</td><td>e</td></tr></tbody></table>",
        )

    def test_table_from_text(self):
        self.assertEqual(
            self.render_text("| a | b |\n|---|---|\n| 1 | 2 |"),
            "<table><thead><tr><th>a</th><th>b</th></tr></thead><tbody><tr><td>1</td><td>2</td></tr></tbody></table>",
        )

    def test_code_block_round_trip(self):
        code = "if a < b && c > \"d\":\n    print('x & y')\n\n100% done"
        result = self.renderer.render([MDCodeBlock(code, "python")])

        data_code = re.search(r'data-code="([^"]*)"', result)
        self.assertIsNotNone(data_code)
        self.assertEqual(unquote(data_code.group(1)), code)  # type: ignore

        body = re.search(r'<pre><code class="language-python">(.*?)</code></pre>', result, re.DOTALL)
        self.assertIsNotNone(body)
        self.assertEqual(body.group(1), html.escape(code, quote=True))  # type: ignore

    def test_code_block_structure(self):
        result = self.renderer.render([MDCodeBlock("x", "js")])
        self.assertTrue(result.startswith('<figure class="code-block" data-code="x">'))
        self.assertIn('<span class="code-lang">js</span>', result)
        self.assertIn('<button class="code-copy-btn" title="Copy code" aria-label="Copy code">', result)
        self.assertTrue(result.endswith("</figure>"))

    def test_code_block_content_is_not_inline_processed(self):
        result = self.render_text("```\n**not bold**\n```")
        self.assertIn(">**not bold**</code>", result)
        self.assertNotIn("<strong>", result)

    def test_data_attribute_matches_encode_uri_component(self):
        result = self.renderer.render([MDCodeBlock("a b/c?d=é!'()*-._~", "text")])
        self.assertIn("data-code=\"a%20b%2Fc%3Fd%3D%C3%A9!'()*-._~\"", result)

    def test_diagram_block_is_raw(self):
        for language in ["mermaid", "Mermaid", "MERMAID"]:
            result = self.renderer.render([MDCodeBlock("graph TD;\n  A-->B", language)])
            self.assertEqual(result, '<div class="mermaid">graph TD;\n  A-->B</div>')

    def test_renderer_options(self):
        renderer = HTMLRenderer(
            {"code_class_prefix": "lang-", "copy_button_title": "Copy", "diagram_language": "dot"}
        )
        result = renderer.render([MDCodeBlock("x", "js")])
        self.assertIn('<code class="lang-js">', result)
        self.assertIn('title="Copy"', result)

        self.assertEqual(renderer.render([MDCodeBlock("a -> b", "DOT")]), '<div class="dot">a -> b</div>')
        self.assertIn("<figure", renderer.render([MDCodeBlock("x", "mermaid")]))

    def test_unknown_tokens_render_empty(self):
        self.assertEqual(self.renderer.render([UnknownToken(), object()]), "")  # type: ignore
        self.assertEqual(self.renderer.render([MDHorizontalRule(), UnknownToken()]), "<hr>")  # type: ignore

    def test_render_empty_sequence(self):
        self.assertEqual(self.renderer.render([]), "")

    def test_render_is_idempotent(self):
        tokens = BlockParser("# T\n\n- a\n  - b\n\n```py\nx < 1\n```\n> q\n>\n> r\n| h |\n| d |").parse()
        self.assertEqual(self.renderer.render(tokens), self.renderer.render(tokens))


if __name__ == "__main__":
    unittest.main()
