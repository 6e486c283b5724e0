# composer/parser.py
"""
Block attribute sourcing and the block delimiter grammar.

Attribute definitions say where a block attribute comes from:

    {"type": "string", "source": "html", "selector": "p"}
    {"type": "string", "source": "attribute", "selector": "img", "attribute": "src"}
    {"type": "array", "source": "query", "selector": "tr", "query": {...}}
    {"type": "number", "default": 2}          # from the delimiter comment

Serialized content marks blocks with HTML comments:

    <!-- wp:heading {"level":3} --><h3>Title</h3><!-- /wp:heading -->
    <!-- wp:separator /-->
"""

from __future__ import annotations

import copy
import json
import logging
import re
from typing import Any, Dict, List, Optional

from bs4 import Tag

from .conf import get_freeform_block
from .raw.utils import parse_html, soup_to_html
from .registry import Block, BlockType, registry as default_registry

logger = logging.getLogger(__name__)

_DELIMITER = re.compile(
    r"<!--\s+(?P<closer>/)?wp:(?P<namespace>[a-z][a-z0-9_-]*/)?(?P<name>[a-z][a-z0-9_-]*)"
    r"\s+(?P<attrs>\{(?:(?!-->).)*?\}\s+)?(?P<void>/)?-->",
    re.DOTALL,
)


def _coerce(value, definition: dict):
    attribute_type = definition.get("type")
    if value is None:
        return None
    if attribute_type == "number":
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        return int(number) if number.is_integer() else number
    if attribute_type == "boolean":
        return bool(value)
    return value


def _source_value(root, definition: dict):
    source = definition.get("source")
    selector = definition.get("selector")

    if source == "query":
        nodes = root.select(selector) if selector else []
        return [
            {key: _coerce(_source_value(node, sub), sub) for key, sub in definition.get("query", {}).items()}
            for node in nodes
        ]

    node = root.select_one(selector) if selector else root
    if node is None:
        return None

    if source == "attribute":
        value = node.get(definition.get("attribute", ""))
        if definition.get("type") == "boolean":
            return value is not None
        if isinstance(value, list):
            value = " ".join(value)
        return value
    if source == "html":
        return soup_to_html(node)
    if source == "text":
        return node.get_text()
    if source == "tag":
        return node.name if isinstance(node, Tag) else None
    return None


def get_block_attributes(
    block_type: BlockType, html: str, attributes: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Resolve a block's attributes from its HTML and its comment attributes.

    Args:
        block_type: The block type whose definitions are used
        html: The block's saved HTML
        attributes: Attributes from the delimiter comment or a shortcode

    Returns:
        Attribute name → value; attributes that resolve to nothing are omitted
    """
    attributes = attributes or {}
    doc = parse_html(html)

    resolved = {}
    for key, definition in block_type.attributes.items():
        if definition.get("source"):
            value = _coerce(_source_value(doc, definition), definition)
        else:
            value = attributes.get(key)
        if value is None:
            value = attributes.get(key, copy.deepcopy(definition.get("default")))
        if value is not None:
            resolved[key] = value
    return resolved


def _freeform(html: str, registry) -> Optional[Block]:
    if not html.strip():
        return None
    name = get_freeform_block()
    return registry.create_block(name, {"content": html})


def _create_from_grammar(name: str, attrs: dict, inner_html: str, inner_blocks: List[Block], registry) -> Block:
    block_type = registry.get_block_type(name)
    if block_type is None:
        logger.warning(f"Unregistered block '{name}' kept as freeform content")
        return registry.create_block(get_freeform_block(), {"content": inner_html})

    return registry.create_block(
        name, get_block_attributes(block_type, inner_html, attrs), inner_blocks
    )


def _parse_attrs(raw: Optional[str]) -> dict:
    if not raw:
        return {}
    try:
        value = json.loads(raw)
    except ValueError:
        logger.warning(f"Invalid block attributes ignored: {raw!r}")
        return {}
    return value if isinstance(value, dict) else {}


def parse_with_grammar(content: str, registry=None) -> List[Block]:
    """
    Parse serialized block content into blocks.

    Markup outside any block delimiter becomes a freeform block. Nested
    blocks become inner blocks of their parent.
    """
    registry = registry or default_registry
    blocks: List[Block] = []
    # Open blocks: name, comment attributes, inner blocks, inner html parts
    stack: List[dict] = []
    position = 0

    for match in _DELIMITER.finditer(content):
        text = content[position:match.start()]
        position = match.end()
        name = (match.group("namespace") or "core/") + match.group("name")

        if stack:
            stack[-1]["html"].append(text)
        else:
            freeform = _freeform(text, registry)
            if freeform is not None:
                blocks.append(freeform)

        if match.group("closer"):
            if not stack or stack[-1]["name"] != name:
                logger.warning(f"Unbalanced block closer for '{name}' ignored")
                continue
            frame = stack.pop()
            block = _create_from_grammar(
                name, frame["attrs"], "".join(frame["html"]), frame["inner"], registry
            )
            if stack:
                stack[-1]["inner"].append(block)
            else:
                blocks.append(block)
            continue

        attrs = _parse_attrs((match.group("attrs") or "").strip())

        if match.group("void"):
            block = _create_from_grammar(name, attrs, "", [], registry)
            if stack:
                stack[-1]["inner"].append(block)
            else:
                blocks.append(block)
            continue

        stack.append({"name": name, "attrs": attrs, "inner": [], "html": []})

    tail = content[position:]

    # Unclosed blocks swallow the rest of the document.
    if stack:
        stack[-1]["html"].append(tail)
        while stack:
            frame = stack.pop()
            block = _create_from_grammar(
                frame["name"], frame["attrs"], "".join(frame["html"]), frame["inner"], registry
            )
            if stack:
                stack[-1]["inner"].append(block)
            else:
                blocks.append(block)
    else:
        freeform = _freeform(tail, registry)
        if freeform is not None:
            blocks.append(freeform)

    return blocks
