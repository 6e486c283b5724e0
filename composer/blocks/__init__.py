# composer/blocks/__init__.py
"""
Core block types.

Importing this package registers them with the default registry, which the
app does when it is ready.
"""

from composer.registry import registry as default_registry

from .freeform import freeform, html
from .layout import more, nextpage, separator, table
from .media import gallery, image
from .text import code, heading, list_block, paragraph, preformatted, quote

CORE_BLOCK_TYPES = [
    paragraph,
    heading,
    list_block,
    quote,
    image,
    gallery,
    code,  # Before preformatted, both match <pre>
    preformatted,
    separator,
    table,
    more,
    nextpage,
    html,
    freeform,
    # Order matters - the first matching raw transform wins
]


def register_core_blocks(registry=None):
    """Register every core block type the registry doesn't have yet."""
    registry = registry or default_registry
    for block_type in CORE_BLOCK_TYPES:
        if registry.get_block_type(block_type.name) is None:
            registry.register(block_type)
    return registry


register_core_blocks()
