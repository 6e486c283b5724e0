# composer/raw/is_inline_content.py
"""
Decide whether pasted HTML should replace inline content or become blocks.

Content is inline when every element is phrasing content, or shares a tag
group with the tag it is pasted into (list items into a list, a heading into
a heading). Two line breaks in a row always mean blocks.
"""

from typing import List, Optional

from bs4 import Tag

from .schema import is_phrasing_content, node_name
from .utils import element_children, parse_html

# If the tag name and the node name are in the same group, the node is inline.
INLINE_WHITELIST_TAG_GROUPS = [
    ("ul", "li", "ol"),
    ("h1", "h2", "h3", "h4", "h5", "h6"),
]


def is_inline_for_tag(name: str, tag_name: Optional[str]) -> bool:
    """Whether ``name`` is inline when inserted into ``tag_name``."""
    if not tag_name or not name:
        return False
    tag_name = tag_name.lower()
    return any(name in group and tag_name in group for group in INLINE_WHITELIST_TAG_GROUPS)


def is_inline(node: Tag, tag_name: Optional[str]) -> bool:
    return is_phrasing_content(node) or is_inline_for_tag(node_name(node), tag_name)


def deep_check(nodes: List[Tag], tag_name: Optional[str]) -> bool:
    return all(
        is_inline(node, tag_name) and deep_check(element_children(node), tag_name)
        for node in nodes
    )


def is_double_br(node: Tag) -> bool:
    previous = node.previous_sibling
    return node.name == "br" and isinstance(previous, Tag) and previous.name == "br"


def is_inline_content(html: str, tag_name: Optional[str] = None) -> bool:
    doc = parse_html(html)
    nodes = element_children(doc)
    return not any(is_double_br(node) for node in nodes) and deep_check(nodes, tag_name)
