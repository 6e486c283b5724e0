# composer/shortcode.py
"""
Shortcode matching and conversion of shortcodes into blocks.

Supports the three shortcode forms:

    [gallery ids="1,2"]                 single
    [gallery ids="1,2" /]               self-closing
    [caption]<img src="a.jpg">[/caption] closed

Escaped shortcodes ([[gallery]]) are left alone.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, List, Optional, Union

from .exceptions import BlockTypeNotRegistered
from .parser import get_block_attributes
from .registry import Block, BlockType, registry as default_registry

logger = logging.getLogger(__name__)

# Reused from shortcode_parse_atts() in wp-includes/shortcodes.php
_ATTRS = re.compile(
    r"""([\w-]+)\s*=\s*"([^"]*)"(?:\s|$)"""
    r"""|([\w-]+)\s*=\s*'([^']*)'(?:\s|$)"""
    r"""|([\w-]+)\s*=\s*([^\s'"]+)(?:\s|$)"""
    r"""|"([^"]*)"(?:\s|$)"""
    r"""|(\S+)(?:\s|$)"""
)

_ENDS_WITH_BLOCK_BOUNDARY = re.compile(r"(\n|<p>)\s*$")


@dataclass
class ShortcodeAttrs:
    named: Dict[str, str] = field(default_factory=dict)
    numeric: List[str] = field(default_factory=list)


@dataclass
class Shortcode:
    tag: str
    attrs: ShortcodeAttrs
    type: str
    content: Optional[str] = None


@dataclass
class ShortcodeMatch:
    index: int
    content: str
    shortcode: Shortcode


@lru_cache(maxsize=None)
def regexp(tag: str) -> re.Pattern:
    """
    Regular expression matching a shortcode.

    Groups: 1 an extra [ to escape, 2 the tag, 3 the attributes, 4 the
    self-closing slash, 5 the content, 6 the closing tag, 7 an extra ] to
    escape.
    """
    return re.compile(
        r"\[(\[?)(" + re.escape(tag) + r")(?![\w-])"
        r"([^\]\/]*(?:\/(?!\])[^\]\/]*)*?)"
        r"(?:(\/)\]|\](?:([^\[]*(?:\[(?!\/\2\])[^\[]*)*)(\[\/\2\]))?)"
        r"(\]?)"
    )


@lru_cache(maxsize=256)
def _parse_attrs(text: str) -> tuple:
    named = {}
    numeric = []

    # Map non-breaking and zero-width spaces to actual spaces.
    text = re.sub(r"[\u00a0\u200b]", " ", text)

    for match in _ATTRS.finditer(text):
        if match.group(1):
            named[match.group(1).lower()] = match.group(2)
        elif match.group(3):
            named[match.group(3).lower()] = match.group(4)
        elif match.group(5):
            named[match.group(5).lower()] = match.group(6)
        elif match.group(7):
            numeric.append(match.group(7))
        elif match.group(8):
            numeric.append(match.group(8))

    return tuple(named.items()), tuple(numeric)


def parse_attrs(text: str) -> ShortcodeAttrs:
    """Parse a shortcode's attribute string into named and numeric attributes."""
    named, numeric = _parse_attrs(text or "")
    return ShortcodeAttrs(named=dict(named), numeric=list(numeric))


def _from_match(match: re.Match) -> Shortcode:
    if match.group(4):
        shortcode_type = "self-closing"
    elif match.group(6):
        shortcode_type = "closed"
    else:
        shortcode_type = "single"

    return Shortcode(
        tag=match.group(2),
        attrs=parse_attrs(match.group(3)),
        type=shortcode_type,
        content=match.group(5),
    )


def next_shortcode(tag: str, text: str, index: int = 0) -> Optional[ShortcodeMatch]:
    """Find the next unescaped ``tag`` shortcode in ``text`` from ``index``."""
    pattern = regexp(tag)

    while True:
        match = pattern.search(text, index)
        if not match:
            return None

        # An escaped shortcode, try again after it.
        if match.group(1) == "[" and match.group(7) == "]":
            index = match.end()
            continue

        content = match.group(0)
        start = match.start()

        # Strip a leading [ and a trailing ] that are not part of the shortcode.
        if match.group(1):
            content = content[1:]
            start += 1
        if match.group(7):
            content = content[:-1]

        return ShortcodeMatch(index=start, content=content, shortcode=_from_match(match))


def _find_transform(html: str, registry):
    for transform in registry.get_shortcode_transforms():
        if any(regexp(tag).search(html) for tag in transform.tags):
            return transform
    return None


def shortcode_converter(html: str, last_index: int = 0, registry=None) -> List[Union[str, Block]]:
    """
    Split HTML on shortcodes that registered blocks can be created from.

    Returns the pieces in order: HTML strings and the blocks replacing the
    shortcodes. HTML without such shortcodes comes back as ``[html]``.
    """
    registry = registry or default_registry
    transform = _find_transform(html, registry)
    if transform is None:
        return [html]

    match = next_shortcode(transform.tags[0], html, last_index)
    if match is None:
        return [html]

    before_html = html[:match.index]
    last_index = match.index + len(match.content)

    # Shortcode content without HTML that doesn't start a new line (or a
    # paragraph from the Markdown converter) is inline text, skip it.
    if "<" not in (match.shortcode.content or "") and not _ENDS_WITH_BLOCK_BOUNDARY.search(before_html):
        return shortcode_converter(html, last_index, registry)

    attributes = {
        name: build(match.shortcode.attrs, match) for name, build in transform.attributes.items()
    }
    block_type = registry.get_block_type(transform.block_name)
    if block_type is None:
        raise BlockTypeNotRegistered(f"Block '{transform.block_name}' is not registered")

    # The shortcode's own attribute callables take the place of any source.
    definitions = dict(block_type.attributes)
    for name in transform.attributes:
        definitions[name] = {
            key: value for key, value in definitions.get(name, {}).items() if key not in ("source", "selector")
        }
    sourcing_type = BlockType(name=block_type.name, attributes=definitions)

    block = registry.create_block(
        transform.block_name,
        get_block_attributes(sourcing_type, match.shortcode.content or "", attributes),
    )
    logger.debug(f"Converted [{match.shortcode.tag}] shortcode into '{block.name}'")

    return [before_html, block, *shortcode_converter(html[last_index:], 0, registry)]
