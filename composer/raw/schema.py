# composer/raw/schema.py
"""
Content schemas used by the raw handler.

A schema maps a tag name (or TEXT_NODE for text) to an entry:

    {
        "attributes": ["href"],        # allowed attributes
        "classes": ["alignleft"],      # allowed class names or compiled regexes
        "children": {...},             # schema for children, absent = none allowed
        "require": ["img"],            # at least one selector must match inside
    }

Schemas are plain acyclic dicts built fresh by constructor functions. Nested
dicts may be shared between positions, so they are never changed in place:
merging copies every dict on the path it changes.
"""

import copy
import re
from typing import Dict, Iterable, List, Optional

from bs4 import Tag
from bs4.element import PreformattedString

from composer.exceptions import SchemaConflictError

TEXT_NODE = "#text"
COMMENT_NODE = "#comment"

PHRASING_TAGS = ["strong", "em", "del", "ins", "a", "code", "abbr", "sub", "sup"]

# Deeper inline formatting is unwrapped down to its text.
PHRASING_NESTING_DEPTH = 16

_PHRASING_ATTRIBUTES = {"a": ["href"], "abbr": ["title"]}

# Generic inline wrapper without semantic meaning, always phrasing
GENERIC_INLINE_TAG = "span"


def node_name(node) -> str:
    """Lowercased tag name, or TEXT_NODE / COMMENT_NODE for strings."""
    if isinstance(node, Tag):
        return node.name.lower()
    if isinstance(node, PreformattedString):
        return COMMENT_NODE
    return TEXT_NODE


def _phrasing_level(parent: Optional[str], depth: int, built: dict) -> Dict[str, dict]:
    key = (parent, depth)
    if key in built:
        return built[key]

    schema = {}
    if depth > 0:
        for tag in PHRASING_TAGS:
            # Possible: strong > em > strong. Impossible: strong > strong.
            if tag == parent:
                continue
            entry = {"children": _phrasing_level(tag, depth - 1, built)}
            if tag in _PHRASING_ATTRIBUTES:
                entry["attributes"] = list(_PHRASING_ATTRIBUTES[tag])
            schema[tag] = entry
    schema["br"] = {}
    schema[TEXT_NODE] = {}
    built[key] = schema
    return schema


def get_phrasing_content_schema() -> Dict[str, dict]:
    """
    Schema of possible paths for phrasing content.

    See https://developer.mozilla.org/en-US/docs/Web/Guide/HTML/Content_categories#Phrasing_content
    """
    return _phrasing_level(None, PHRASING_NESTING_DEPTH, {})


_PHRASING_NAMES = frozenset(get_phrasing_content_schema())


def is_phrasing_content(node) -> bool:
    """Whether the node is phrasing content (text, inline formatting, span)."""
    tag = node_name(node)
    return tag in _PHRASING_NAMES or tag == GENERIC_INLINE_TAG


def _union(existing: List, new: List, tag: str, key: str) -> List:
    if not isinstance(existing, list) or not isinstance(new, list):
        raise SchemaConflictError(f"'{key}' of <{tag}> must be a list")
    merged = list(existing)
    for item in new:
        if item not in merged:
            merged.append(item)
    return sorted(merged, key=_sort_key)


def _sort_key(item) -> str:
    if isinstance(item, re.Pattern):
        return item.pattern
    return str(item)


def _check_entry(tag: str, entry) -> None:
    if not isinstance(entry, dict):
        raise SchemaConflictError(f"Schema entry for <{tag}> must be a mapping")
    children = entry.get("children")
    if children is not None and not isinstance(children, dict):
        raise SchemaConflictError(f"'children' of <{tag}> must be a mapping")


def _merged_entry(current: dict, entry: dict, tag: str, memo: dict) -> dict:
    merged = dict(current)

    if entry.get("children") is not None:
        if current.get("children") is not None:
            merged["children"] = _merged_children(
                current["children"], entry["children"], memo
            )
        else:
            merged["children"] = entry["children"]

    for key in ("attributes", "classes", "require"):
        if key in current or key in entry:
            merged[key] = _union(current.get(key, []), entry.get(key, []), tag, key)

    return merged


def _merged_children(accu: dict, schema: dict, memo: dict) -> dict:
    # Shared sub-schemas merge once per pair. The inputs are held in the memo
    # so their ids stay unique until the merge is done.
    key = (id(accu), id(schema))
    if key not in memo:
        merged = dict(accu)
        memo[key] = (merged, accu, schema)
        _merge_into(merged, schema, memo)
    return memo[key][0]


def _merge_into(accu: dict, schema: dict, memo: dict) -> None:
    for tag, entry in schema.items():
        _check_entry(tag, entry)

        if tag not in accu:
            accu[tag] = entry
            continue

        _check_entry(tag, accu[tag])
        accu[tag] = _merged_entry(accu[tag], entry, tag, memo)


def merge_schemas(accu: Dict[str, dict], schema: Dict[str, dict]) -> Dict[str, dict]:
    """
    Merge ``schema`` into ``accu`` and return it.

    Only ``accu`` itself is updated in place. Tags seen for the first time are
    inserted as they are. Tags seen again get a new entry with their children
    deep-merged and their attributes, classes and require lists unioned, so no
    contributor loses an allowance and no other position sharing the old
    entry gains one.
    """
    _merge_into(accu, schema, {})
    return accu


def get_block_content_schema(transforms: Iterable) -> Dict[str, dict]:
    """
    Compose the block content schema from the schema of every raw transform.

    The result does not depend on the order of ``transforms`` and shares
    nothing with them.
    """
    accu: Dict[str, dict] = {}
    for transform in transforms:
        merge_schemas(accu, getattr(transform, "schema", None) or {})
    return copy.deepcopy(accu)
