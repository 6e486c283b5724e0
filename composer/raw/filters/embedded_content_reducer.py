# composer/raw/filters/embedded_content_reducer.py
"""
Filter that takes embedded content out of paragraphs.

Embedded content (images, videos, ...) allowed inside a <figure> is moved
into a new <figure> placed right before the paragraph that contained it:

    <p>Text<img src="a.jpg"></p>  →  <figure><img src="a.jpg"></figure><p>Text</p>

An image that is the only child of a link keeps its link. Must run before
the sanitizer, which would otherwise unwrap the media into the paragraph.
"""

from bs4 import Tag

from ..schema import is_phrasing_content, node_name


def is_embedded(node, schema) -> bool:
    """
    Whether the given node is embedded content.

    See https://developer.mozilla.org/en-US/docs/Web/Guide/HTML/Content_categories#Embedded_content
    """
    tag = node_name(node)
    figure = (schema or {}).get("figure")

    if not figure or tag == "figcaption" or is_phrasing_content(node):
        return False

    return tag in (figure.get("children") or {})


def embedded_content_reducer(node, doc, schema) -> None:
    if not isinstance(node, Tag):
        return

    if not is_embedded(node, schema):
        return

    node_to_insert = node
    parent = node.parent

    # An image alone in an anchor takes the anchor with it.
    if (
        node.name == "img"
        and isinstance(parent, Tag)
        and parent.name == "a"
        and len(parent.contents) == 1
    ):
        node_to_insert = parent

    wrapper = node_to_insert
    while wrapper is not None and getattr(wrapper, "name", None) != "p":
        wrapper = wrapper.parent

    figure = doc.new_tag("figure")

    if isinstance(wrapper, Tag):
        wrapper.insert_before(figure)
    else:
        node_to_insert.insert_before(figure)

    figure.append(node_to_insert.extract())
