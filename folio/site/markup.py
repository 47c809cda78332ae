#!/usr/bin/env python3
"""
markup.py
---------
Markdown body parsing and HTML flattening with markdown-it-py.

Bodies are parsed into a syntax tree (``SyntaxTreeNode``) and then
flattened to HTML. The parser is the CommonMark preset plus pipe tables
and strikethrough, which covers headings, emphasis, inline code, fenced
code, links, images, block quotes and lists.

Key Features:
    - Fenced code is opaque: nothing inside a fence is parsed as
      document structure, so ``# not a heading`` or ``---`` inside a
      fence renders literally
    - Unterminated inline markup falls back to literal text, so
      rendering never fails on body content
    - Fence info strings are preserved as ``class="language-<info>"``
    - Headings get unique slugified ``id`` anchors (heading_anchor_plugin)

Usage:
    from folio.site.markup import Markup

    markup = Markup()
    tree = markup.parse_tree("# Hi\\n\\nSome *text*")
    html = markup.render_tree(tree)
    toc = markup.extract_headings("# Hi\\n## Details")

Dependencies:
    - markdown-it-py >= 3.0.0
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Any, Dict, List, Set

# --- Third-party imports ---
from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from markdown_it.tree import SyntaxTreeNode

# --- Local imports ---
from folio.utils.slugify import slugify

_TITLE_TOKENS = ("text", "code_inline")


def heading_anchor_plugin(md: MarkdownIt) -> None:
    """
    Register the heading anchor core rule with a MarkdownIt instance.

    After block and inline parsing, every ``heading_open`` token gets an
    ``id`` attribute derived from its text, made unique within the
    document by numeric suffixes. The anchor and plain title are also
    stored on ``token.meta`` for table-of-contents extraction.

    Args:
        md: MarkdownIt instance to extend
    """
    md.core.ruler.push("heading_anchors", _heading_anchor_rule)


def _heading_anchor_rule(state: StateCore) -> None:
    """
    Core rule assigning ids to headings.

    Args:
        state: Core parser state holding the full token stream
    """
    used: Set[str] = set()
    tokens = state.tokens

    for idx, token in enumerate(tokens):
        if token.type != "heading_open":
            continue

        inline = tokens[idx + 1] if idx + 1 < len(tokens) else None
        children = inline.children if inline is not None and inline.children else []
        title = "".join(c.content for c in children if c.type in _TITLE_TOKENS)

        base = slugify(title) or "section"
        anchor = base
        n = 1
        while anchor in used:
            anchor = f"{base}-{n}"
            n += 1
        used.add(anchor)

        token.attrSet("id", anchor)
        token.meta["anchor"] = anchor
        token.meta["title"] = title


class Markup:
    """
    Configured Markdown parser and HTML flattener.

    Instances hold no per-document state, so one instance can serve
    concurrent renders.

    Attributes:
        md: The configured MarkdownIt instance
    """

    def __init__(self, allow_html: bool = False) -> None:
        """
        Initialize the parser.

        Args:
            allow_html: Pass raw HTML in bodies through instead of
                escaping it
        """
        self.allow_html = allow_html
        self.md = (
            MarkdownIt("commonmark", {"html": allow_html})
            .enable(["table", "strikethrough"])
            .use(heading_anchor_plugin)
        )

    def parse_tree(self, text: str) -> SyntaxTreeNode:
        """Parse a body into its structural tree."""
        return SyntaxTreeNode(self.md.parse(text))

    def render_tree(self, tree: SyntaxTreeNode) -> str:
        """Flatten a syntax tree to HTML."""
        return self.md.renderer.render(tree.to_tokens(), self.md.options, {})

    def render(self, text: str) -> str:
        """Parse and flatten a body in one step."""
        return self.render_tree(self.parse_tree(text))

    def extract_headings(self, text: str) -> List[Dict[str, Any]]:
        """
        Table of contents for a body.

        Returns:
            List of dicts with keys: level, title, anchor

        Usage:
            Markup().extract_headings("# Intro\\n## Setup\\n## Setup")
            # [{"level": 1, "title": "Intro", "anchor": "intro"},
            #  {"level": 2, "title": "Setup", "anchor": "setup"},
            #  {"level": 2, "title": "Setup", "anchor": "setup-1"}]
        """
        headings: List[Dict[str, Any]] = []
        for token in self.md.parse(text):
            if token.type == "heading_open":
                headings.append({
                    "level": int(token.tag[1]),
                    "title": token.meta.get("title", ""),
                    "anchor": token.meta.get("anchor", ""),
                })
        return headings
