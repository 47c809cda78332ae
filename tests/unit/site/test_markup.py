#!/usr/bin/env python3
"""
test_markup.py
--------------
Tests for the markdown-it-py body parser and the heading anchor plugin.

Covers block and inline constructs, fence opacity, literal fallback for
unterminated markup, raw HTML handling and table-of-contents extraction.
"""
# --- Annotations ---
from __future__ import annotations

# --- Third-party imports ---
import pytest
from markdown_it.tree import SyntaxTreeNode

# --- Local imports ---
from folio.site.markup import Markup


@pytest.fixture
def markup() -> Markup:
    return Markup()


# ==================== Block Constructs ====================

class TestBlocks:
    """Tests for block-level rendering."""

    def test_heading(self, markup: Markup) -> None:
        assert markup.render("# Hi") == '<h1 id="hi">Hi</h1>\n'

    def test_heading_levels(self, markup: Markup) -> None:
        html = markup.render("## Two\n\n###### Six\n")
        assert '<h2 id="two">Two</h2>' in html
        assert '<h6 id="six">Six</h6>' in html

    def test_paragraph(self, markup: Markup) -> None:
        assert markup.render("Just text.") == "<p>Just text.</p>\n"

    def test_fenced_code_with_info(self, markup: Markup) -> None:
        html = markup.render("```python\n# not a heading\n```\n")
        assert '<pre><code class="language-python"># not a heading\n</code></pre>' in html
        assert "<h1" not in html

    def test_fence_is_opaque(self, markup: Markup) -> None:
        """Delimiter and rule lines inside a fence stay literal."""
        html = markup.render("```\n---\n***\n```\n")
        assert "<hr" not in html
        assert "---\n***" in html

    def test_code_is_escaped(self, markup: Markup) -> None:
        html = markup.render("```csharp\nif (a < b && c) {}\n```\n")
        assert "if (a &lt; b &amp;&amp; c) {}" in html

    def test_blockquote(self, markup: Markup) -> None:
        assert markup.render("> quoted") == "<blockquote>\n<p>quoted</p>\n</blockquote>\n"

    def test_lists(self, markup: Markup) -> None:
        html = markup.render("- one\n- two\n\n1. first\n2. second\n")
        assert "<ul>\n<li>one</li>\n<li>two</li>\n</ul>" in html
        assert "<ol>\n<li>first</li>\n<li>second</li>\n</ol>" in html

    def test_horizontal_rule(self, markup: Markup) -> None:
        assert markup.render("para\n\n---\n") == "<p>para</p>\n<hr />\n"

    def test_table(self, markup: Markup) -> None:
        html = markup.render("| a | b |\n|---|---|\n| 1 | 2 |\n")
        assert "<table>" in html
        assert "<th>a</th>" in html
        assert "<td>2</td>" in html


# ==================== Inline Constructs ====================

class TestInline:
    """Tests for inline rendering."""

    def test_emphasis(self, markup: Markup) -> None:
        assert markup.render("*em* and **strong**") == (
            "<p><em>em</em> and <strong>strong</strong></p>\n"
        )

    def test_inline_code(self, markup: Markup) -> None:
        assert markup.render("Use `x < y`") == "<p>Use <code>x &lt; y</code></p>\n"

    def test_link(self, markup: Markup) -> None:
        html = markup.render("[SpecFlow](https://specflow.org)")
        assert '<a href="https://specflow.org">SpecFlow</a>' in html

    def test_image(self, markup: Markup) -> None:
        html = markup.render("![logo](logo.png)")
        assert '<img src="logo.png" alt="logo" />' in html

    def test_strikethrough(self, markup: Markup) -> None:
        assert "<s>old</s>" in markup.render("~~old~~")

    def test_unterminated_emphasis_literal(self, markup: Markup) -> None:
        assert markup.render("*oops") == "<p>*oops</p>\n"

    def test_unterminated_code_literal(self, markup: Markup) -> None:
        assert markup.render("`oops") == "<p>`oops</p>\n"

    def test_unterminated_fence_runs_to_end(self, markup: Markup) -> None:
        """An unclosed fence does not fail rendering."""
        html = markup.render("```\ncode\n# still code\n")
        assert "<pre><code>" in html
        assert "<h1" not in html


# ==================== Raw HTML ====================

class TestRawHtml:
    """Tests for the allow_html switch."""

    def test_escaped_by_default(self, markup: Markup) -> None:
        html = markup.render("<script>alert(1)</script>")
        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_passed_through_when_allowed(self) -> None:
        html = Markup(allow_html=True).render("<div class=\"x\">hi</div>\n")
        assert '<div class="x">hi</div>' in html


# ==================== Tree and Headings ====================

class TestTree:
    """Tests for the parse/flatten split."""

    def test_parse_tree(self, markup: Markup) -> None:
        tree = markup.parse_tree("# Hi\n\ntext\n")
        assert isinstance(tree, SyntaxTreeNode)
        assert [child.type for child in tree.children] == ["heading", "paragraph"]

    def test_render_tree_matches_render(self, markup: Markup, specflow_source: str) -> None:
        body = specflow_source.split("---\n", 2)[2]
        assert markup.render_tree(markup.parse_tree(body)) == markup.render(body)

    def test_deterministic(self, markup: Markup, specflow_source: str) -> None:
        assert markup.render(specflow_source) == markup.render(specflow_source)


class TestHeadingAnchors:
    """Tests for heading ids and extract_headings."""

    def test_duplicate_headings_unique(self, markup: Markup) -> None:
        html = markup.render("## Setup\n\n## Setup\n\n## Setup\n")
        assert 'id="setup"' in html
        assert 'id="setup-1"' in html
        assert 'id="setup-2"' in html

    def test_symbol_heading_fallback(self, markup: Markup) -> None:
        assert markup.render("# !!!") == '<h1 id="section">!!!</h1>\n'

    def test_code_in_heading(self, markup: Markup) -> None:
        html = markup.render("# Using `async` calls")
        assert 'id="using-async-calls"' in html

    def test_extract_headings(self, markup: Markup) -> None:
        headings = markup.extract_headings("# Intro\n## Setup\n## Setup\n")
        assert headings == [
            {"level": 1, "title": "Intro", "anchor": "intro"},
            {"level": 2, "title": "Setup", "anchor": "setup"},
            {"level": 2, "title": "Setup", "anchor": "setup-1"},
        ]

    def test_extract_headings_skips_fences(self, markup: Markup) -> None:
        assert markup.extract_headings("```\n# nope\n```\n") == []
