# composer/raw/filters/special_comment_converter.py
"""
Filter that converts the classic editor's special comments into placeholder
elements picked up by the more and next page blocks.

    <!--more Read on-->   →  <wp-block data-block="core/more" data-custom-text="Read on">
    <!--noteaser-->          (anywhere after it) adds data-no-teaser=""
    <!--nextpage-->       →  <wp-block data-block="core/nextpage">
"""

from bs4 import Comment


def _create_more(doc, custom_text: str, no_teaser: bool):
    node = doc.new_tag("wp-block")
    node["data-block"] = "core/more"
    if custom_text:
        node["data-custom-text"] = custom_text
    if no_teaser:
        node["data-no-teaser"] = ""
    return node


def _create_nextpage(doc):
    node = doc.new_tag("wp-block")
    node["data-block"] = "core/nextpage"
    return node


def special_comment_converter(node, doc, schema) -> None:
    if not isinstance(node, Comment):
        return

    value = str(node)

    if value == "nextpage":
        node.replace_with(_create_nextpage(doc))
        return

    if value.startswith("more"):
        custom_text = value[4:].strip()
        no_teaser = False

        for sibling in node.next_siblings:
            if isinstance(sibling, Comment) and str(sibling) == "noteaser":
                no_teaser = True
                sibling.extract()
                break

        node.replace_with(_create_more(doc, custom_text, no_teaser))
