"""
Tests for the inline substitution pipeline.
"""

import unittest

from mdpreview.markdown import BlockParser, HTMLRenderer, InlineParser, parse_inline


class TestInlineParser(unittest.TestCase):
    """Test each inline rule and their ordering."""

    def setUp(self):
        """Set up test fixtures."""
        self.parser = InlineParser()

    def inline(self, text: str) -> str:
        return self.parser.parse_inline(text).content

    def test_plain_text_unchanged(self):
        self.assertEqual(self.inline("just text"), "just text")

    def test_code_span(self):
        self.assertEqual(self.inline("use `pip install`"), "use <code>pip install</code>")

    def test_image(self):
        self.assertEqual(self.inline("![alt text](img.png)"), '<img src="img.png" alt="alt text">')

    def test_image_with_title(self):
        self.assertEqual(
            self.inline('![logo](https://x.org/a.png "The logo")'),
            '<img src="https://x.org/a.png" alt="logo" title="The logo">',
        )

    def test_image_with_empty_alt(self):
        self.assertEqual(self.inline("![](a.png)"), '<img src="a.png" alt="">')

    def test_strikethrough(self):
        self.assertEqual(self.inline("~~gone~~"), "<del>gone</del>")

    def test_bold_italic(self):
        self.assertEqual(self.inline("***both***"), "<strong><em>both</em></strong>")

    def test_bold(self):
        self.assertEqual(self.inline("**bold**"), "<strong>bold</strong>")

    def test_italic(self):
        self.assertEqual(self.inline("*italic*"), "<em>italic</em>")

    def test_non_greedy_matches(self):
        self.assertEqual(self.inline("*a* and *b*"), "<em>a</em> and <em>b</em>")
        self.assertEqual(self.inline("**a** **b**"), "<strong>a</strong> <strong>b</strong>")

    def test_link(self):
        self.assertEqual(self.inline("[site](https://example.com)"), '<a href="https://example.com">site</a>')

    def test_link_with_title(self):
        self.assertEqual(
            self.inline('[GitHub](https://github.com "Visit GitHub")'),
            '<a href="https://github.com" title="Visit GitHub">GitHub</a>',
        )

    def test_formatted_link_text(self):
        self.assertEqual(self.inline("[**b**](u)"), '<a href="u"><strong>b</strong></a>')

    def test_image_inside_link(self):
        self.assertEqual(
            self.inline("[![badge](b.svg)](https://ci)"),
            '<a href="https://ci"><img src="b.svg" alt="badge"></a>',
        )

    def test_unmatched_markers_stay_literal(self):
        for text in ["a * b", "**open", "~~half", "`tick", "[text](", "![alt]"]:
            self.assertEqual(self.inline(text), text)

    def test_matches_do_not_cross_newlines(self):
        """Every inline construct must open and close on the same line."""
        for text in [
            "*a\nb*",
            "`a\nb`",
            "![a\nb](u.png)",
            "![a](u\nv.png)",
            "[a\nb](https://x.org)",
            "[a](https://x.org\n/b)",
            '[a](https://x.org\n"title")',
        ]:
            with self.subTest(text=text):
                self.assertEqual(self.inline(text), text)

    def test_quote_lines_do_not_join_code_span(self):
        renderer = HTMLRenderer()
        html = renderer.render(BlockParser("> `a\n> b`").parse())
        self.assertEqual(html, "<blockquote><p>`a\nb`</p></blockquote>")

    def test_no_html_escaping(self):
        self.assertEqual(self.inline("a < b & <i>c</i>"), "a < b & <i>c</i>")

    def test_code_span_content_is_not_protected(self):
        """Emphasis still applies inside code spans."""
        self.assertEqual(self.inline("`a*b*c`"), "<code>a<em>b</em>c</code>")

    def test_raw_duplicates_content(self):
        result = self.parser.parse_inline("**x**")
        self.assertEqual(result.raw, result.content)

    def test_module_level_helper(self):
        self.assertEqual(parse_inline("~~x~~").content, "<del>x</del>")

    def test_parser_is_reusable(self):
        self.assertEqual(self.inline("*a*"), self.inline("*a*"))


if __name__ == "__main__":
    unittest.main()
