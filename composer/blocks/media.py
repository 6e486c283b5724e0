# composer/blocks/media.py
"""Media blocks: image and gallery."""

import re

from composer.raw.schema import get_phrasing_content_schema
from composer.raw.utils import get_classes, soup_to_html
from composer.registry import BlockType, RawTransform, ShortcodeTransform

ALIGNMENTS = ["left", "center", "right", "wide", "full"]

_ALIGN_CLASS = re.compile(r"align(" + "|".join(ALIGNMENTS) + r")")
_IMAGE_ID_CLASS = re.compile(r"wp-image-(\d+)")


def get_image_schema():
    """A figure holding one image, optionally linked, and a caption."""
    img = {
        "attributes": ["src", "alt"],
        "classes": [_ALIGN_CLASS, _IMAGE_ID_CLASS],
    }
    return {
        "figure": {
            "require": ["img"],
            "children": {
                "a": {
                    "attributes": ["href", "rel", "target"],
                    "children": {"img": img},
                },
                "img": dict(img),
                "figcaption": {"children": get_phrasing_content_schema()},
            },
        },
    }


def _image_transform(node, registry):
    img = node.find("img")
    attributes = {"url": img.get("src") or None, "alt": img.get("alt", "")}

    for name in get_classes(img):
        align = _ALIGN_CLASS.fullmatch(name)
        if align:
            attributes["align"] = align.group(1)
        image_id = _IMAGE_ID_CLASS.fullmatch(name)
        if image_id:
            attributes["id"] = int(image_id.group(1))

    anchor = img.find_parent("a")
    if anchor is not None and anchor.get("href"):
        attributes["href"] = anchor["href"]

    caption = node.find("figcaption")
    if caption is not None:
        attributes["caption"] = soup_to_html(caption)

    return registry.create_block("core/image", attributes)


def _gallery_images(attrs, match):
    ids = attrs.named.get("ids", "")
    return [{"id": int(image_id)} for image_id in ids.split(",") if image_id.strip().isdigit()]


def _gallery_columns(attrs, match):
    try:
        return int(attrs.named.get("columns", "3"))
    except ValueError:
        return 3


def _gallery_link_to(attrs, match):
    link = attrs.named.get("link", "attachment")
    return "media" if link == "file" else link


image = BlockType(
    name="core/image",
    title="Image",
    attributes={
        "url": {"type": "string"},
        "alt": {"type": "string", "default": ""},
        "caption": {"type": "string"},
        "href": {"type": "string"},
        "id": {"type": "number"},
        "align": {"type": "string"},
    },
    raw_transforms=[
        RawTransform(
            is_match=lambda node: node.name == "figure" and node.find("img") is not None,
            schema=get_image_schema(),
            transform=_image_transform,
        ),
    ],
)

gallery = BlockType(
    name="core/gallery",
    title="Gallery",
    attributes={
        "images": {"type": "array", "default": []},
        "columns": {"type": "number"},
        "linkTo": {"type": "string", "default": "none"},
    },
    shortcode_transforms=[
        ShortcodeTransform(
            tag="gallery",
            attributes={
                "images": _gallery_images,
                "columns": _gallery_columns,
                "linkTo": _gallery_link_to,
            },
        ),
    ],
)
