"""Tests for the block and inline node filters."""

from __future__ import annotations

from composer.raw.filters import (
    BLOCK_FILTERS,
    blockquote_normaliser,
    embedded_content_reducer,
    get_block_filters,
    iframe_remover,
    image_corrector,
    is_embedded,
    list_reducer,
    ms_list_converter,
    phrasing_content_reducer,
    special_comment_converter,
)
from composer.raw.filters.phrasing_content_reducer import parse_style
from composer.raw.utils import deep_filter_html, parse_html

FIGURE_SCHEMA = {"figure": {"children": {"img": {}}}}


class TestEmbeddedContentReducer:
    """Media is taken out of paragraphs into figures."""

    def test_images_promoted_in_order(self) -> None:
        """Each image gets its own figure before the paragraph."""
        html = '<p><strong>test<img class="one"></strong><img class="two"></p>'
        assert deep_filter_html(html, [embedded_content_reducer], FIGURE_SCHEMA) == (
            '<figure><img class="one"></figure>'
            '<figure><img class="two"></figure>'
            "<p><strong>test</strong></p>"
        )

    def test_linked_image_keeps_link(self) -> None:
        """An anchor wrapping only the image moves with it."""
        html = '<p><a href="#"><img class="one"></a><strong>test</strong></p>'
        assert deep_filter_html(html, [embedded_content_reducer], FIGURE_SCHEMA) == (
            '<figure><a href="#"><img class="one"></a></figure><p><strong>test</strong></p>'
        )

    def test_image_outside_paragraph(self) -> None:
        """Without a paragraph the figure goes where the image was."""
        html = 'a<img src="x.jpg">b'
        assert deep_filter_html(html, [embedded_content_reducer], FIGURE_SCHEMA) == (
            'a<figure><img src="x.jpg"></figure>b'
        )

    def test_without_figure_schema(self) -> None:
        """Nothing is embedded when figures are not allowed."""
        html = '<p>a<img src="x.jpg"></p>'
        assert deep_filter_html(html, [embedded_content_reducer], {}) == html


class TestIsEmbedded:
    """Embedded content detection."""

    def test_allowed_media(self) -> None:
        """An image allowed in a figure is embedded."""
        assert is_embedded(parse_html("<img>").img, FIGURE_SCHEMA)

    def test_caption_is_not_embedded(self) -> None:
        """Captions belong to the figure, they are not media."""
        schema = {"figure": {"children": {"img": {}, "figcaption": {}}}}
        assert not is_embedded(parse_html("<figcaption>c</figcaption>").figcaption, schema)

    def test_phrasing_is_not_embedded(self) -> None:
        """Links stay inline even when a figure may hold them."""
        schema = {"figure": {"children": {"a": {}, "img": {}}}}
        assert not is_embedded(parse_html('<a href="#">l</a>').a, schema)

    def test_not_a_figure_child(self) -> None:
        """Only tags declared as figure children are embedded."""
        assert not is_embedded(parse_html("<video></video>").video, FIGURE_SCHEMA)


class TestPhrasingContentReducer:
    """Presentational markup becomes semantic."""

    def test_bold_and_italic_tags(self) -> None:
        """b and i are renamed."""
        html = "<b>a</b><i>b</i>"
        assert deep_filter_html(html, [phrasing_content_reducer]) == "<strong>a</strong><em>b</em>"

    def test_styled_span(self) -> None:
        """A bold span is wrapped in strong."""
        html = '<span style="font-weight:bold">a</span>'
        assert deep_filter_html(html, [phrasing_content_reducer]) == (
            '<strong><span style="font-weight:bold">a</span></strong>'
        )

    def test_multiple_styles(self) -> None:
        """Each style adds its own wrapper, innermost last."""
        html = '<span style="font-style: italic; vertical-align: super">a</span>'
        assert deep_filter_html(html, [phrasing_content_reducer]) == (
            '<em><sup><span style="font-style: italic; vertical-align: super">a</span></sup></em>'
        )

    def test_new_window_links(self) -> None:
        """Links opening a new window get a safe rel."""
        html = '<a href="x" target="_blank">l</a>'
        assert deep_filter_html(html, [phrasing_content_reducer]) == (
            '<a href="x" rel="noreferrer noopener" target="_blank">l</a>'
        )

    def test_parse_style(self) -> None:
        """Declarations are split and lowercased."""
        assert parse_style("Font-Weight: BOLD; color:red;") == {"font-weight": "bold", "color": "red"}


class TestListReducer:
    """List structure normalisation."""

    def test_single_item_list_merged(self) -> None:
        """A one-item list joins the previous list of the same type."""
        html = "<ul><li>a</li></ul><ul><li>b</li></ul>"
        assert deep_filter_html(html, [list_reducer]) == "<ul><li>a</li><li>b</li></ul>"

    def test_different_types_not_merged(self) -> None:
        """Ordered and unordered lists stay apart."""
        html = "<ul><li>a</li></ul><ol><li>b</li></ol>"
        assert deep_filter_html(html, [list_reducer]) == html

    def test_list_in_list_moves_into_previous_item(self) -> None:
        """ul > ul becomes ul > li > ul."""
        html = "<ul><li>a</li><ul><li>b</li></ul></ul>"
        assert deep_filter_html(html, [list_reducer]) == "<ul><li>a<ul><li>b</li></ul></li></ul>"

    def test_list_in_list_without_previous_item(self) -> None:
        """Without an item to move into, the nested list is unwrapped."""
        html = "<ul><ul><li>b</li><li>c</li></ul></ul>"
        assert deep_filter_html(html, [list_reducer]) == "<ul><li>b</li><li>c</li></ul>"

    def test_list_in_empty_item(self) -> None:
        """A list alone in an item moves into the previous item."""
        html = "<ul><li>a</li><li><ul><li>b</li></ul></li></ul>"
        assert deep_filter_html(html, [list_reducer]) == "<ul><li>a<ul><li>b</li></ul></li></ul>"


class TestMsListConverter:
    """MS Word list paragraphs."""

    def test_ordered_list(self) -> None:
        """Numbered paragraphs become an ordered list."""
        html = (
            '<p style="mso-list:l0 level1 lfo1"><span>1.</span>One</p>'
            '<p style="mso-list:l0 level1 lfo1"><span>2.</span>Two</p>'
        )
        assert deep_filter_html(html, [ms_list_converter]) == (
            '<ol type="1"><li>One</li><li>Two</li></ol>'
        )

    def test_nested_unordered_list(self) -> None:
        """Deeper levels nest into the last item."""
        html = (
            '<p style="mso-list:l0 level1 lfo1"><span>·</span>A</p>'
            '<p style="mso-list:l0 level2 lfo1"><span>o</span>B</p>'
        )
        assert deep_filter_html(html, [ms_list_converter]) == (
            "<ul><li>A<ul><li>B</li></ul></li></ul>"
        )

    def test_regular_paragraph(self) -> None:
        """Paragraphs without list styling are left alone."""
        html = '<p style="margin:0">Text</p>'
        assert deep_filter_html(html, [ms_list_converter]) == html


class TestImageCorrector:
    """Pasted image fixes."""

    def test_local_file_source_cleared(self) -> None:
        """file: sources cannot be loaded."""
        html = '<img src="file:///C:/image.png">'
        assert deep_filter_html(html, [image_corrector]) == '<img src="">'

    def test_tracking_pixel_removed(self) -> None:
        """1px images are removed."""
        html = '<p><img src="t.gif" width="1" height="1">x</p>'
        assert deep_filter_html(html, [image_corrector]) == "<p>x</p>"

    def test_regular_image(self) -> None:
        """Other images are left alone."""
        html = '<img src="a.jpg" width="300">'
        assert deep_filter_html(html, [image_corrector]) == html


class TestSpecialCommentConverter:
    """More and next page comments."""

    def test_nextpage(self) -> None:
        """<!--nextpage--> becomes a placeholder."""
        assert deep_filter_html("<!--nextpage-->", [special_comment_converter]) == (
            '<wp-block data-block="core/nextpage"></wp-block>'
        )

    def test_more_with_text(self) -> None:
        """Custom text after more is kept."""
        assert deep_filter_html("<!--more Read on-->", [special_comment_converter]) == (
            '<wp-block data-block="core/more" data-custom-text="Read on"></wp-block>'
        )

    def test_more_with_noteaser(self) -> None:
        """A following noteaser comment is folded into the placeholder."""
        assert deep_filter_html("<!--more--><!--noteaser-->", [special_comment_converter]) == (
            '<wp-block data-block="core/more" data-no-teaser=""></wp-block>'
        )

    def test_other_comments(self) -> None:
        """Unrelated comments are left for the sanitizer."""
        assert deep_filter_html("<!-- note -->", [special_comment_converter]) == "<!-- note -->"


class TestBlockquoteNormaliser:
    """Loose quote content."""

    def test_text_wrapped_in_paragraphs(self) -> None:
        """Double line breaks split the quote into paragraphs."""
        html = "<blockquote>Text<br><br>More</blockquote>"
        assert deep_filter_html(html, [blockquote_normaliser]) == (
            "<blockquote><p>Text</p><p>More</p></blockquote>"
        )


class TestIframeRemover:
    """Iframes for users without unfiltered HTML."""

    def test_iframe_unwrapped(self) -> None:
        """The iframe element goes, its fallback content stays."""
        html = '<p>a<iframe src="https://example.com">b</iframe></p>'
        assert deep_filter_html(html, [iframe_remover]) == "<p>ab</p>"

    def test_prepended_unless_allowed(self) -> None:
        """The remover only runs when unfiltered HTML is not allowed."""
        assert get_block_filters()[0] is iframe_remover
        assert get_block_filters(can_user_use_unfiltered_html=True) == BLOCK_FILTERS
