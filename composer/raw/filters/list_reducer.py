# composer/raw/filters/list_reducer.py
"""
Filter that normalises list structure.

- A single-item list following a list of the same type is merged into it
- A list alone in an otherwise empty list item replaces that item
- A list nested directly in a list moves into the previous list item
"""

from bs4 import NavigableString, Tag

from ..utils import element_children, previous_element_sibling, unwrap

LIST_TAGS = ("ol", "ul")


def is_list(node) -> bool:
    return isinstance(node, Tag) and node.name in LIST_TAGS


def shallow_text_content(element: Tag) -> str:
    return "".join(
        str(child) for child in element.children if isinstance(child, NavigableString)
    )


def list_reducer(node, doc, schema) -> None:
    if not is_list(node):
        return

    prev_element = previous_element_sibling(node)

    # Merge with the previous list if it has the same type and this list has
    # only one item.
    if (
        prev_element is not None
        and prev_element.name == node.name
        and len(element_children(node)) == 1
    ):
        # Move all child nodes, including any text nodes.
        for child in list(node.contents):
            prev_element.append(child.extract())
        node.extract()
        return

    parent = node.parent

    # Nested list with an empty parent item.
    if (
        isinstance(parent, Tag)
        and parent.name == "li"
        and len(element_children(parent)) == 1
        and not shallow_text_content(parent).strip()
    ):
        prev_list_item = previous_element_sibling(parent)
        parent_list = parent.parent

        if prev_list_item is not None:
            prev_list_item.append(node.extract())
            parent.extract()
        elif parent_list is not None and parent_list.parent is not None:
            parent_list.insert_before(node.extract())
            parent.extract()
            if not element_children(parent_list):
                parent_list.extract()
        return

    # Invalid: OL/UL > OL/UL.
    if is_list(parent):
        prev_list_item = previous_element_sibling(node)

        if prev_list_item is not None:
            prev_list_item.append(node.extract())
        else:
            unwrap(node)
