# composer/raw/handler.py
"""
Converts pasted HTML and plain text into blocks or inline content.

Pipeline:
1. Serialized blocks are parsed with the block grammar
2. Plain text is converted from Markdown
3. Shortcodes become blocks
4. Inline content is filtered against the phrasing schema and returned
5. Block content is filtered, sanitized, normalised and matched against the
   raw transforms of the registered block types
"""

import logging
import re

from django.core.exceptions import ImproperlyConfigured

from composer.conf import get_block_delimiter, get_fallback_block
from composer.markdown import convert_markdown
from composer.parser import get_block_attributes, parse_with_grammar
from composer.registry import registry as default_registry
from composer.shortcode import shortcode_converter

from .filters import INLINE_FILTERS, get_block_filters
from .is_inline_content import is_inline_content
from .normalise_blocks import normalise_blocks
from .schema import get_block_content_schema, get_phrasing_content_schema
from .utils import (
    deep_filter_html,
    element_children,
    is_plain,
    outer_html,
    parse_html,
    remove_invalid_html,
    soup_to_html,
)

logger = logging.getLogger(__name__)

AUTO = "AUTO"
INLINE = "INLINE"
BLOCKS = "BLOCKS"

_META_TAG = re.compile(r"<meta[^>]+>")


def filter_inline_html(html):
    """
    Filter HTML down to phrasing content only.

    Args:
        html: The HTML to filter

    Returns:
        HTML that can be inserted inline
    """
    html = deep_filter_html(html, INLINE_FILTERS)
    html = remove_invalid_html(html, get_phrasing_content_schema(), inline=True)

    logger.debug(f"Processed inline HTML piece: {html}")
    return html


def _html_to_blocks(html, registry):
    transforms = registry.get_raw_transforms()
    doc = parse_html(html)
    blocks = []

    for node in element_children(doc):
        transform = next((t for t in transforms if t.matches(node)), None)

        if transform is None:
            blocks.append(_fallback_block(node, registry))
        elif transform.transform is not None:
            blocks.append(transform.transform(node, registry))
        else:
            block_type = registry.get_block_type(transform.block_name)
            blocks.append(
                registry.create_block(
                    transform.block_name, get_block_attributes(block_type, outer_html(node))
                )
            )

    return blocks


def _fallback_block(node, registry):
    name = get_fallback_block()
    if registry.get_block_type(name) is None:
        raise ImproperlyConfigured(
            f"COMPOSER_FALLBACK_BLOCK '{name}' is not a registered block type"
        )

    logger.warning(f"No raw transform for <{node.name}>, converted into '{name}'")
    return registry.create_block(name, {"content": soup_to_html(node)})


def raw_handler(
    html="",
    plain_text="",
    mode=AUTO,
    tag_name=None,
    can_user_use_unfiltered_html=False,
    registry=None,
):
    """
    Convert pasted content to blocks or inline HTML.

    Args:
        html: HTML to convert
        plain_text: Plain text version, used when the HTML carries nothing more
        mode: AUTO to decide, INLINE to always return a string, BLOCKS to
            always return blocks
        tag_name: Tag the content is pasted into, if any
        can_user_use_unfiltered_html: Whether iframes may be kept
        registry: Block registry to convert with, defaults to the global one

    Returns:
        A list of blocks, or an HTML string in inline mode
    """
    registry = registry or default_registry
    html = html or ""

    # First of all, strip any meta tags.
    html = _META_TAG.sub("", html, count=1)

    # If we detect block delimiters, parse entirely as blocks.
    if mode != INLINE and get_block_delimiter() in html:
        return parse_with_grammar(html, registry)

    # Parse Markdown (and encoded HTML) if:
    # * There is a plain text version.
    # * There is no HTML version, or it has no formatting.
    if plain_text and (not html or is_plain(html)):
        html = convert_markdown(plain_text)

        # Switch to inline mode if:
        # * The current mode is AUTO.
        # * The original plain text had no line breaks.
        # * The original plain text was not an HTML paragraph.
        # * The converted text is just a paragraph.
        if (
            mode == AUTO
            and "\n" not in plain_text
            and not plain_text.startswith("<p>")
            and html.startswith("<p>")
        ):
            mode = INLINE

    if mode == INLINE:
        return filter_inline_html(html)

    # An array of HTML strings and block objects. The blocks replace matched
    # shortcodes.
    pieces = shortcode_converter(html, registry=registry)

    # The call to shortcode_converter will always return more than one element
    # if shortcodes are matched. The reason is when shortcodes are matched
    # empty HTML strings are included.
    has_shortcodes = len(pieces) > 1

    if mode == AUTO and not has_shortcodes and is_inline_content(html, tag_name):
        return filter_inline_html(html)

    block_content_schema = get_block_content_schema(registry.get_raw_transforms())
    schema = {**block_content_schema, **get_phrasing_content_schema()}
    filters = get_block_filters(can_user_use_unfiltered_html)

    blocks = []
    for piece in pieces:
        # Already a block from shortcode.
        if not isinstance(piece, str):
            blocks.append(piece)
            continue

        piece = deep_filter_html(piece, filters, block_content_schema)
        piece = remove_invalid_html(piece, schema)
        piece = normalise_blocks(piece)

        logger.debug(f"Processed HTML piece: {piece}")

        blocks.extend(_html_to_blocks(piece, registry))

    return blocks
