# composer/conf.py
"""
Settings for the composer app, read from Django settings with defaults.

    COMPOSER_MARKDOWN_BACKEND   "markdown" (python-markdown) or "pandoc"
    COMPOSER_FALLBACK_BLOCK     block used for top-level elements no raw
                                transform claims
    COMPOSER_FREEFORM_BLOCK     block used for markup outside block delimiters
    COMPOSER_BLOCK_DELIMITER    marker that identifies serialized blocks
"""

from django.conf import settings

DEFAULT_MARKDOWN_BACKEND = "markdown"
DEFAULT_FALLBACK_BLOCK = "core/paragraph"
DEFAULT_FREEFORM_BLOCK = "core/freeform"
DEFAULT_BLOCK_DELIMITER = "<!-- wp:"


def get_markdown_backend() -> str:
    return getattr(settings, "COMPOSER_MARKDOWN_BACKEND", DEFAULT_MARKDOWN_BACKEND)


def get_fallback_block() -> str:
    return getattr(settings, "COMPOSER_FALLBACK_BLOCK", DEFAULT_FALLBACK_BLOCK)


def get_freeform_block() -> str:
    return getattr(settings, "COMPOSER_FREEFORM_BLOCK", DEFAULT_FREEFORM_BLOCK)


def get_block_delimiter() -> str:
    return getattr(settings, "COMPOSER_BLOCK_DELIMITER", DEFAULT_BLOCK_DELIMITER)
