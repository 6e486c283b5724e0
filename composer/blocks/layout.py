# composer/blocks/layout.py
"""Layout blocks: separator, table, more and next page."""

from composer.raw.schema import get_phrasing_content_schema
from composer.registry import BlockType, RawTransform

# Placeholder element created from <!--more--> and <!--nextpage--> comments
PLACEHOLDER_TAG = "wp-block"

PLACEHOLDER_SCHEMA = {
    PLACEHOLDER_TAG: {
        "attributes": ["data-block", "data-custom-text", "data-no-teaser"],
    },
}


def get_table_schema():
    """Tables with optional head, body and foot sections of phrasing cells."""
    cells = {
        "td": {"children": get_phrasing_content_schema()},
        "th": {"children": get_phrasing_content_schema()},
    }
    row = {"children": cells}
    section = {"children": {"tr": row}}
    return {
        "table": {
            "children": {
                "thead": section,
                "tbody": section,
                "tfoot": section,
                "tr": row,
            },
        },
    }


def _table_rows(selector):
    return {
        "type": "array",
        "source": "query",
        "selector": selector,
        "query": {
            "cells": {
                "type": "array",
                "source": "query",
                "selector": "td,th",
                "query": {
                    "content": {"type": "string", "source": "html"},
                    "tag": {"type": "string", "source": "tag"},
                },
            },
        },
    }


def _is_placeholder(block_name):
    def is_match(node):
        return node.name == PLACEHOLDER_TAG and node.get("data-block") == block_name

    return is_match


separator = BlockType(
    name="core/separator",
    title="Separator",
    raw_transforms=[
        RawTransform(selector="hr", schema={"hr": {}}),
    ],
)

table = BlockType(
    name="core/table",
    title="Table",
    attributes={
        "head": _table_rows("thead > tr"),
        "body": _table_rows("tbody > tr, table > tr"),
        "foot": _table_rows("tfoot > tr"),
    },
    raw_transforms=[
        RawTransform(selector="table", schema=get_table_schema()),
    ],
)

more = BlockType(
    name="core/more",
    title="More",
    attributes={
        "customText": {
            "type": "string",
            "source": "attribute",
            "selector": PLACEHOLDER_TAG,
            "attribute": "data-custom-text",
        },
        "noTeaser": {
            "type": "boolean",
            "source": "attribute",
            "selector": PLACEHOLDER_TAG,
            "attribute": "data-no-teaser",
            "default": False,
        },
    },
    raw_transforms=[
        RawTransform(is_match=_is_placeholder("core/more"), schema=PLACEHOLDER_SCHEMA),
    ],
)

nextpage = BlockType(
    name="core/nextpage",
    title="Page Break",
    raw_transforms=[
        RawTransform(is_match=_is_placeholder("core/nextpage"), schema=PLACEHOLDER_SCHEMA),
    ],
)
