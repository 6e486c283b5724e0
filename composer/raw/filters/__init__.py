# composer/raw/filters/__init__.py

from .blockquote_normaliser import blockquote_normaliser
from .embedded_content_reducer import embedded_content_reducer, is_embedded
from .iframe_remover import iframe_remover
from .image_corrector import image_corrector
from .list_reducer import list_reducer
from .ms_list_converter import ms_list_converter
from .phrasing_content_reducer import phrasing_content_reducer
from .special_comment_converter import special_comment_converter

BLOCK_FILTERS = [
    ms_list_converter,  # MS Word list paragraphs → real lists
    list_reducer,  # Merge split lists and fix invalid nesting
    image_corrector,  # Drop local file sources and tracking pixels
    phrasing_content_reducer,  # b/i/styled spans → semantic phrasing tags
    special_comment_converter,  # <!--more--> and <!--nextpage--> placeholders
    embedded_content_reducer,  # Take media out of paragraphs into figures
    blockquote_normaliser,  # Wrap loose blockquote content in paragraphs
    # Order matters - embedded content must be moved before sanitizing
]

INLINE_FILTERS = [
    phrasing_content_reducer,
]


def get_block_filters(can_user_use_unfiltered_html=False):
    """Filters for block mode; iframes are unwrapped unless unfiltered HTML is allowed."""
    filters = list(BLOCK_FILTERS)
    if not can_user_use_unfiltered_html:
        filters.insert(0, iframe_remover)
    return filters


__all__ = [
    "BLOCK_FILTERS",
    "INLINE_FILTERS",
    "blockquote_normaliser",
    "embedded_content_reducer",
    "get_block_filters",
    "iframe_remover",
    "image_corrector",
    "is_embedded",
    "list_reducer",
    "ms_list_converter",
    "phrasing_content_reducer",
    "special_comment_converter",
]
