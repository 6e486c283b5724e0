# composer/raw/filters/phrasing_content_reducer.py
"""
Filter that reduces presentational inline markup to semantic phrasing content.

- <b> becomes <strong>, <i> becomes <em>
- <span> elements styled bold, italic, struck through, superscript or
  subscript are wrapped in <strong>, <em>, <del>, <sup> or <sub>
- Links opening a new window get rel="noreferrer noopener"
"""

import re
from typing import Dict

from bs4 import Tag

_STYLE_DECLARATION = re.compile(r"\s*([a-zA-Z-]+)\s*:\s*([^;]+)")


def parse_style(style: str) -> Dict[str, str]:
    """Parse an inline style attribute into a property → value mapping."""
    declarations = {}
    for match in _STYLE_DECLARATION.finditer(style or ""):
        declarations[match.group(1).lower()] = match.group(2).strip().lower()
    return declarations


def _wrap(doc, tag_name: str, node: Tag) -> None:
    node.wrap(doc.new_tag(tag_name))


def phrasing_content_reducer(node, doc, schema) -> None:
    if not isinstance(node, Tag):
        return

    if node.name == "span":
        style = parse_style(node.get("style", ""))
        font_weight = style.get("font-weight")
        decoration = style.get("text-decoration-line") or style.get("text-decoration", "")
        vertical_align = style.get("vertical-align")

        if font_weight in ("bold", "700"):
            _wrap(doc, "strong", node)

        if style.get("font-style") == "italic":
            _wrap(doc, "em", node)

        if "line-through" in decoration:
            _wrap(doc, "del", node)

        if vertical_align == "super":
            _wrap(doc, "sup", node)
        elif vertical_align == "sub":
            _wrap(doc, "sub", node)
    elif node.name == "b":
        node.name = "strong"
    elif node.name == "i":
        node.name = "em"
    elif node.name == "a":
        if node.get("target", "").lower() == "_blank":
            node["rel"] = "noreferrer noopener"
