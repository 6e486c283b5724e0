# composer/raw/filters/blockquote_normaliser.py
"""Filter that wraps loose content inside a blockquote into paragraphs."""

from bs4 import Tag

from ..normalise_blocks import normalise_blocks
from ..utils import parse_html, soup_to_html


def blockquote_normaliser(node, doc, schema) -> None:
    if not isinstance(node, Tag) or node.name != "blockquote":
        return

    normalised = parse_html(normalise_blocks(soup_to_html(node)))
    node.clear()
    for child in list(normalised.contents):
        node.append(child.extract())
