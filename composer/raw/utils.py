# composer/raw/utils.py
"""Tree helpers, the deep filter engine and the schema sanitizer."""

from __future__ import annotations

import re
from typing import Callable, Iterable, List, Optional

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

from .schema import TEXT_NODE, is_phrasing_content, node_name

# Void elements are written as <br>, not <br/>, and only &, < and > are escaped.
HTML_FORMATTER = HTMLFormatter(
    entity_substitution=EntitySubstitution.substitute_xml,
    void_element_close_prefix=None,
)

NodeFilter = Callable[..., None]


def parse_html(html: str) -> BeautifulSoup:
    """Parse an HTML fragment into a fresh document owning its own tree."""
    return BeautifulSoup(html or "", "html.parser")


def soup_to_html(soup: BeautifulSoup | Tag) -> str:
    """Serialise the children of a document or tag back to HTML."""
    return soup.decode_contents(formatter=HTML_FORMATTER)


def outer_html(node) -> str:
    if isinstance(node, Tag):
        return node.decode(formatter=HTML_FORMATTER)
    return str(node)


def contains(doc: BeautifulSoup, node) -> bool:
    """Whether ``node`` is still attached somewhere below ``doc``."""
    parent = node.parent
    while parent is not None:
        if parent is doc:
            return True
        parent = parent.parent
    return False


def unwrap(node) -> None:
    """Replace the node by its children, keeping their order."""
    if isinstance(node, Tag):
        node.unwrap()
    else:
        node.extract()


def insert_after(new_node, reference) -> None:
    reference.insert_after(new_node)


def remove(node) -> None:
    node.extract()


def next_element_sibling(node) -> Optional[Tag]:
    return node.find_next_sibling()


def previous_element_sibling(node) -> Optional[Tag]:
    return node.find_previous_sibling()


def element_children(node) -> List[Tag]:
    return [child for child in node.children if isinstance(child, Tag)]


def get_classes(node: Tag) -> List[str]:
    classes = node.get("class", [])
    if isinstance(classes, str):
        classes = classes.split()
    return [name for name in classes if name]


def is_empty(element: Tag) -> bool:
    """
    Whether an element has no meaningful content.

    Whitespace-only text, line breaks and comments are not meaningful. A child
    element with attributes (an image, an anchor) always is.
    """
    if not element.contents:
        return True

    for node in element.contents:
        name = node_name(node)
        if name == TEXT_NODE:
            if str(node).strip():
                return False
        elif isinstance(node, Tag):
            if name == "br":
                continue
            if node.attrs:
                return False
            if not is_empty(node):
                return False

    return True


def is_plain(html: str) -> bool:
    """
    Whether the HTML collapses to a single text node.

    Line breaks count as plain newlines.
    """
    soup = parse_html(html)

    for br in soup.find_all("br"):
        br.replace_with(NavigableString("\n"))

    # Merge all adjacent text nodes.
    soup.smooth()

    return len(soup.contents) == 1 and node_name(soup.contents[0]) == TEXT_NODE


def deep_filter_node_list(
    node_list: Iterable, filters: List[NodeFilter], doc: BeautifulSoup, schema=None
) -> None:
    """
    Apply every filter to every node, deepest nodes first.

    A filter may detach the node it is given, or other nodes of the tree, so
    each node is checked for being attached to ``doc`` before each filter.
    """
    for node in list(node_list):
        if isinstance(node, Tag):
            deep_filter_node_list(node.contents, filters, doc, schema)

        for node_filter in filters:
            # Make sure the node is still attached to the document.
            if not contains(doc, node):
                break

            node_filter(node, doc, schema)


def deep_filter_html(html: str, filters: Optional[List[NodeFilter]] = None, schema=None) -> str:
    """
    Deeply filter an HTML string with node filters, from the deepest nodes up.

    Args:
        html: The HTML to filter
        filters: Functions taking (node, doc, schema) that may mutate the tree
        schema: The schema handed to every filter

    Returns:
        The filtered HTML
    """
    doc = parse_html(html)
    deep_filter_node_list(doc.contents, filters or [], doc, schema)
    return soup_to_html(doc)


def _class_allowed(name: str, allowed: List) -> bool:
    for pattern in allowed:
        if isinstance(pattern, re.Pattern):
            if pattern.fullmatch(name):
                return True
        elif pattern == name:
            return True
    return False


def _has_required(node: Tag, require: List[str]) -> bool:
    return node.select_one(", ".join(require)) is not None


def clean_node_list(node_list: Iterable, doc: BeautifulSoup, schema: dict, inline: bool) -> None:
    """
    Unwrap or remove nodes, attributes and classes the schema does not allow.

    Invalid nodes are unwrapped after their children are cleaned against the
    same schema level, so valid descendants survive one level up.
    """
    for node in list(node_list):
        tag = node_name(node)

        # Invalid child. Continue with the schema at the same place and unwrap.
        if tag not in schema:
            if isinstance(node, Tag):
                clean_node_list(node.contents, doc, schema, inline)

                # Keep separated runs apart when flattening to inline content.
                if (
                    inline
                    and not is_phrasing_content(node)
                    and next_element_sibling(node) is not None
                ):
                    insert_after(doc.new_tag("br"), node)

            unwrap(node)
            continue

        if not isinstance(node, Tag):
            continue

        entry = schema[tag]
        attributes = entry.get("attributes", [])
        classes = entry.get("classes", [])
        children = entry.get("children")
        require = entry.get("require", [])

        # If the node is empty and it's supposed to have children, remove it.
        if children is not None and is_empty(node):
            remove(node)
            continue

        for name in list(node.attrs):
            if name == "class" or name in attributes:
                continue
            del node[name]

        kept_classes = [name for name in get_classes(node) if _class_allowed(name, classes)]
        if kept_classes:
            node["class"] = kept_classes
        elif "class" in node.attrs:
            del node["class"]

        if not node.contents:
            continue

        if children is None:
            node.clear()
            continue

        # A node missing its required descendants is dropped, but its content
        # is first cleaned at this level so it can take the node's place.
        if require and not _has_required(node, require):
            clean_node_list(node.contents, doc, schema, inline)
            unwrap(node)
            continue

        clean_node_list(node.contents, doc, children, inline)

        # Cleaning may have stripped everything that made it non-empty.
        if is_empty(node):
            remove(node)


def remove_invalid_html(html: str, schema: dict, inline: bool = False) -> str:
    """
    Clean up HTML against a schema.

    Args:
        html: The HTML to clean up
        schema: Schema for the HTML
        inline: Whether to clean for inline mode

    Returns:
        The cleaned up HTML
    """
    doc = parse_html(html)
    clean_node_list(doc.contents, doc, schema, inline)
    return soup_to_html(doc)
