# composer/blocks/freeform.py
"""Blocks holding markup as is: custom HTML and classic (freeform) content."""

from composer.registry import BlockType

html = BlockType(
    name="core/html",
    title="Custom HTML",
    attributes={
        "content": {"type": "string", "source": "html"},
    },
)

freeform = BlockType(
    name="core/freeform",
    title="Classic",
    attributes={
        "content": {"type": "string", "source": "html"},
    },
)
