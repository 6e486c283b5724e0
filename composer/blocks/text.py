# composer/blocks/text.py
"""Text blocks: paragraph, heading, list, quote, code and preformatted."""

from composer.raw.schema import TEXT_NODE, get_phrasing_content_schema
from composer.raw.utils import element_children, soup_to_html
from composer.registry import BlockType, RawTransform

HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]

# Lists nest this many levels deep before nested lists are unwrapped.
LIST_NESTING_DEPTH = 4


def _phrasing_children():
    return {"children": get_phrasing_content_schema()}


def get_list_schema(depth=LIST_NESTING_DEPTH):
    """
    Schema for ordered and unordered lists.

    List items hold phrasing content and, up to ``depth`` levels down, nested
    lists. Ordered and unordered items at the same level share their children.
    """
    item_children = dict(get_phrasing_content_schema())
    if depth > 0:
        item_children.update(get_list_schema(depth - 1))

    schema = {}
    for tag in ("ol", "ul"):
        entry = {"children": {"li": {"children": item_children}}}
        if tag == "ol":
            entry["attributes"] = ["type", "start", "reversed"]
        schema[tag] = entry
    return schema


def _heading_transform(node, registry):
    return registry.create_block(
        "core/heading",
        {"content": soup_to_html(node), "level": int(node.name[1])},
    )


def _list_transform(node, registry):
    return registry.create_block(
        "core/list",
        {"ordered": node.name == "ol", "values": soup_to_html(node)},
    )


def _is_code(node):
    """A <pre> wrapping a single <code> and nothing else."""
    if node.name != "pre":
        return False
    children = element_children(node)
    if len(children) != 1 or children[0].name != "code":
        return False
    return not "".join(
        str(child) for child in node.contents if child is not children[0]
    ).strip()


paragraph = BlockType(
    name="core/paragraph",
    title="Paragraph",
    attributes={
        "content": {"type": "string", "source": "html", "selector": "p", "default": ""},
    },
    raw_transforms=[
        RawTransform(selector="p", schema={"p": _phrasing_children()}),
    ],
)

heading = BlockType(
    name="core/heading",
    title="Heading",
    attributes={
        "content": {"type": "string", "source": "html", "selector": ",".join(HEADING_TAGS)},
        "level": {"type": "number", "default": 2},
    },
    raw_transforms=[
        RawTransform(
            selector=",".join(HEADING_TAGS),
            schema={tag: _phrasing_children() for tag in HEADING_TAGS},
            transform=_heading_transform,
        ),
    ],
)

list_block = BlockType(
    name="core/list",
    title="List",
    attributes={
        "ordered": {"type": "boolean", "default": False},
        "values": {"type": "string", "source": "html", "selector": "ol,ul", "default": ""},
    },
    raw_transforms=[
        RawTransform(selector="ol,ul", schema=get_list_schema(), transform=_list_transform),
    ],
)

quote = BlockType(
    name="core/quote",
    title="Quote",
    attributes={
        "value": {"type": "string", "source": "html", "selector": "blockquote", "default": ""},
        "citation": {"type": "string", "source": "html", "selector": "cite"},
    },
    raw_transforms=[
        RawTransform(
            selector="blockquote",
            schema={
                "blockquote": {
                    "children": {
                        "p": _phrasing_children(),
                        "cite": _phrasing_children(),
                    },
                },
            },
        ),
    ],
)

code = BlockType(
    name="core/code",
    title="Code",
    attributes={
        "content": {"type": "string", "source": "text", "selector": "code"},
    },
    raw_transforms=[
        RawTransform(
            is_match=_is_code,
            schema={
                "pre": {
                    "children": {
                        "code": {"children": {TEXT_NODE: {}}},
                    },
                },
            },
        ),
    ],
)

preformatted = BlockType(
    name="core/preformatted",
    title="Preformatted",
    attributes={
        "content": {"type": "string", "source": "html", "selector": "pre", "default": ""},
    },
    raw_transforms=[
        RawTransform(selector="pre", schema={"pre": _phrasing_children()}),
    ],
)
