"""Tests for attribute sourcing and the block grammar."""

from __future__ import annotations

import logging

from composer.parser import get_block_attributes, parse_with_grammar
from composer.registry import BlockType

FIGURE_TYPE = BlockType(
    name="test/figure",
    attributes={
        "url": {"type": "string", "source": "attribute", "selector": "img", "attribute": "src"},
        "width": {"type": "number", "source": "attribute", "selector": "img", "attribute": "width"},
        "caption": {"type": "string", "source": "html", "selector": "figcaption"},
        "plain": {"type": "string", "source": "text", "selector": "figcaption"},
        "kind": {"type": "string", "source": "tag", "selector": "figure"},
        "linked": {"type": "boolean", "source": "attribute", "selector": "a", "attribute": "href"},
        "label": {"type": "string", "default": "none"},
    },
)

FIGURE_HTML = '<figure><img src="a.jpg" width="300"><figcaption>A <em>cap</em></figcaption></figure>'


def _summary(blocks):
    return [(block.name, block.attributes) for block in blocks]


class TestGetBlockAttributes:
    """Sourcing attributes from HTML."""

    def test_sources(self) -> None:
        """Attribute, html, text and tag sources with coercion."""
        assert get_block_attributes(FIGURE_TYPE, FIGURE_HTML) == {
            "url": "a.jpg",
            "width": 300,
            "caption": "A <em>cap</em>",
            "plain": "A cap",
            "kind": "figure",
            "label": "none",
        }

    def test_boolean_attribute(self) -> None:
        """Boolean attributes tell whether the HTML attribute is present."""
        html = '<figure><a href="#"><img src="a.jpg"></a></figure>'
        assert get_block_attributes(FIGURE_TYPE, html)["linked"] is True

    def test_comment_attributes(self) -> None:
        """Attributes without a source come from the delimiter comment."""
        attributes = get_block_attributes(FIGURE_TYPE, FIGURE_HTML, {"label": "hero"})
        assert attributes["label"] == "hero"

    def test_missing_source_falls_back(self) -> None:
        """Sourced attributes with nothing to read take the given value, or are left out."""
        attributes = get_block_attributes(FIGURE_TYPE, "<figure></figure>", {"url": "b.jpg"})
        assert attributes["url"] == "b.jpg"
        assert "caption" not in attributes

    def test_query(self, registry) -> None:
        """Table rows and cells are queried."""
        html = (
            "<table><thead><tr><th>H</th></tr></thead>"
            "<tbody><tr><td>a</td><td><strong>b</strong></td></tr></tbody></table>"
        )
        attributes = get_block_attributes(registry.get_block_type("core/table"), html)
        assert attributes == {
            "head": [{"cells": [{"content": "H", "tag": "th"}]}],
            "body": [
                {"cells": [{"content": "a", "tag": "td"}, {"content": "<strong>b</strong>", "tag": "td"}]},
            ],
            "foot": [],
        }


class TestParseWithGrammar:
    """Parsing serialized blocks."""

    def test_blocks_and_void_blocks(self, registry) -> None:
        """Whitespace between blocks is ignored."""
        content = "<!-- wp:paragraph --><p>One</p><!-- /wp:paragraph -->\n\n<!-- wp:separator /-->"
        assert _summary(parse_with_grammar(content, registry)) == [
            ("core/paragraph", {"content": "One"}),
            ("core/separator", {}),
        ]

    def test_nested_blocks(self, registry) -> None:
        """Blocks inside blocks become inner blocks."""
        content = (
            "<!-- wp:quote --><blockquote>"
            "<!-- wp:paragraph --><p>In</p><!-- /wp:paragraph -->"
            "</blockquote><!-- /wp:quote -->"
        )
        (quote,) = parse_with_grammar(content, registry)
        assert quote.name == "core/quote"
        assert _summary(quote.inner_blocks) == [("core/paragraph", {"content": "In"})]

    def test_freeform_content(self, registry) -> None:
        """Markup outside delimiters becomes freeform blocks."""
        content = "Hello <!-- wp:separator /--> bye"
        assert _summary(parse_with_grammar(content, registry)) == [
            ("core/freeform", {"content": "Hello "}),
            ("core/separator", {}),
            ("core/freeform", {"content": " bye"}),
        ]

    def test_unregistered_block(self, registry, caplog) -> None:
        """Unknown blocks keep their markup as freeform content."""
        content = '<!-- wp:acme/widget {"a":1} --><div>w</div><!-- /wp:acme/widget -->'
        with caplog.at_level(logging.WARNING, logger="composer.parser"):
            blocks = parse_with_grammar(content, registry)

        assert _summary(blocks) == [("core/freeform", {"content": "<div>w</div>"})]
        assert "acme/widget" in caplog.text

    def test_invalid_json_attributes(self, registry) -> None:
        """Broken comment attributes are ignored."""
        content = '<!-- wp:heading {"level":} --><h2>x</h2><!-- /wp:heading -->'
        assert _summary(parse_with_grammar(content, registry)) == [
            ("core/heading", {"content": "x", "level": 2}),
        ]

    def test_unclosed_block(self, registry) -> None:
        """An unclosed block takes the rest of the content."""
        content = "<!-- wp:paragraph --><p>x</p>"
        assert _summary(parse_with_grammar(content, registry)) == [
            ("core/paragraph", {"content": "x"}),
        ]

    def test_html_block(self, registry) -> None:
        """Custom HTML keeps all of its markup."""
        content = "<!-- wp:html --><div>a</div><p>b</p><!-- /wp:html -->"
        assert _summary(parse_with_grammar(content, registry)) == [
            ("core/html", {"content": "<div>a</div><p>b</p>"}),
        ]
