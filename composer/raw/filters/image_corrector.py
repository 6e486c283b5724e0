# composer/raw/filters/image_corrector.py
"""
Filter that corrects pasted images.

- Local file references (file:...) cannot be loaded, the source is cleared
- 1px wide or high images are trackers and are removed
"""

from bs4 import Tag


def _dimension(value):
    try:
        return int(str(value).strip().rstrip("px"))
    except (TypeError, ValueError):
        return None


def image_corrector(node, doc, schema) -> None:
    if not isinstance(node, Tag) or node.name != "img":
        return

    if node.get("src", "").startswith("file:"):
        node["src"] = ""

    # Remove trackers and hardly visible images.
    if _dimension(node.get("width")) == 1 or _dimension(node.get("height")) == 1:
        node.decompose()
