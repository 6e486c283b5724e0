# composer/raw/normalise_blocks.py
"""
Normalise top-level content into block elements.

Loose text and phrasing elements are gathered into paragraphs, double line
breaks start a new paragraph, and empty paragraphs are dropped. Any other
element is kept as its own block.
"""

from bs4 import BeautifulSoup, Tag

from .schema import TEXT_NODE, is_phrasing_content, node_name
from .utils import is_empty, parse_html, soup_to_html


def _last_paragraph(accu: BeautifulSoup, create: bool):
    last = accu.contents[-1] if accu.contents else None
    if isinstance(last, Tag) and last.name == "p":
        return last
    if not create:
        return None
    paragraph = accu.new_tag("p")
    accu.append(paragraph)
    return paragraph


def normalise_blocks(html: str) -> str:
    decu = parse_html(html)
    accu = parse_html("")

    while decu.contents:
        node = decu.contents[0]
        name = node_name(node)

        # Text nodes: wrap in a paragraph, or append to the previous one.
        if name == TEXT_NODE:
            if not str(node).strip():
                node.extract()
            else:
                _last_paragraph(accu, create=True).append(node.extract())

        elif isinstance(node, Tag):
            if name == "br":
                # Two breaks in a row start a new paragraph.
                following = node.next_sibling
                if isinstance(following, Tag) and following.name == "br":
                    accu.append(accu.new_tag("p"))
                    following.extract()

                # Don't append to an empty paragraph.
                paragraph = _last_paragraph(accu, create=False)
                if paragraph is not None and paragraph.contents:
                    paragraph.append(node.extract())
                else:
                    node.extract()

            elif name == "p":
                # Only keep paragraphs with content.
                if is_empty(node):
                    node.extract()
                else:
                    accu.append(node.extract())

            elif is_phrasing_content(node):
                _last_paragraph(accu, create=True).append(node.extract())

            else:
                accu.append(node.extract())

        else:
            node.extract()

    # A trailing double break leaves an empty paragraph behind.
    last = _last_paragraph(accu, create=False)
    if last is not None and not last.contents:
        last.extract()

    return soup_to_html(accu)
