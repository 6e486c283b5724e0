# composer/templatetags/composer_tags.py

from django import template
from django.utils.safestring import mark_safe

from composer.raw.handler import INLINE, filter_inline_html, raw_handler

register = template.Library()


@register.filter(name="inline_html")
def inline_html_filter(value):
    """Reduce HTML to phrasing content (links, emphasis, code...)"""
    return mark_safe(filter_inline_html(value or ""))


@register.filter(name="plain_text_inline")
def plain_text_inline_filter(value):
    """Render Markdown plain text as inline HTML"""
    return mark_safe(raw_handler(plain_text=value or "", mode=INLINE))
