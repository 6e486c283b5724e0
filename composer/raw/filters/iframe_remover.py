# composer/raw/filters/iframe_remover.py
"""Filter that unwraps iframes for users who may not post unfiltered HTML."""

from bs4 import Tag


def iframe_remover(node, doc, schema) -> None:
    if isinstance(node, Tag) and node.name == "iframe":
        node.unwrap()
