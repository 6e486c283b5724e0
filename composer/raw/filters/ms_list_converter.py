# composer/raw/filters/ms_list_converter.py
"""
Filter that converts MS Word list paragraphs into real lists.

Word pastes list items as paragraphs with an inline style such as
``mso-list:l0 level2 lfo1`` and a leading span holding the bullet or number.
Consecutive list paragraphs are collected into one <ol> or <ul>, nested by
their level.
"""

import re
from typing import Optional

from bs4 import Tag

from ..utils import element_children, previous_element_sibling
from .list_reducer import is_list

_MSO_LIST_LEVEL = re.compile(r"mso-list\s*:[^;]+level([0-9]+)", re.IGNORECASE)

# See https://html.spec.whatwg.org/multipage/grouping-content.html#attr-ol-type
_ORDERED_TYPES = re.compile(r"[1iIaA]")


def _list_level(node: Tag) -> Optional[int]:
    style = node.get("style", "")
    if "mso-list" not in style:
        return None

    match = _MSO_LIST_LEVEL.search(style)
    if not match:
        return None

    return max(int(match.group(1)) - 1, 0)


def ms_list_converter(node, doc, schema) -> None:
    if not isinstance(node, Tag) or node.name != "p":
        return

    level = _list_level(node)
    if level is None:
        return

    prev_node = previous_element_sibling(node)

    # Add a new list if there is no previous one.
    if not is_list(prev_node):
        marker = node.get_text().strip()[:1]
        if marker and _ORDERED_TYPES.match(marker):
            new_list = doc.new_tag("ol")
            new_list["type"] = marker
        else:
            new_list = doc.new_tag("ul")
        node.insert_before(new_list)

    current_list = previous_element_sibling(node)
    list_type = current_list.name
    list_item = doc.new_tag("li")
    receiving_node = current_list

    # Remove the first span with list info.
    first_element = next(iter(element_children(node)), None)
    if first_element is not None:
        first_element.decompose()

    for child in list(node.contents):
        list_item.append(child.extract())

    # Move the pointer down by indentation level.
    while level > 0:
        level -= 1
        items = element_children(receiving_node)
        receiving_node = items[-1] if items else receiving_node

        # If it's a list, move the pointer to the last item.
        if is_list(receiving_node):
            items = element_children(receiving_node)
            receiving_node = items[-1] if items else receiving_node

    # Make sure we append to a list.
    if not is_list(receiving_node):
        nested = doc.new_tag(list_type)
        receiving_node.append(nested)
        receiving_node = nested

    receiving_node.append(list_item)

    # Remove the wrapper paragraph.
    node.decompose()
