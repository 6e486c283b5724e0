# composer/markdown/converter.py

import logging
import re

import markdown
import pypandoc
from django.core.exceptions import ImproperlyConfigured

from composer.conf import get_markdown_backend

from .config import get_markdown_config, get_pandoc_config
from .preprocessors import apply_preprocessors

logger = logging.getLogger(__name__)

# python-markdown keeps the last newline of a code block inside <code>
_TRAILING_CODE_NEWLINE = re.compile(r"\n</code></pre>")


def _convert_with_markdown(text):
    config = get_markdown_config()
    html = markdown.markdown(
        text,
        extensions=config["extensions"],
        output_format=config["output_format"],
    )
    return _TRAILING_CODE_NEWLINE.sub("</code></pre>", html)


def _convert_with_pandoc(text):
    config = get_pandoc_config()
    html = pypandoc.convert_text(
        text,
        to="html5",
        format=config["format"],
        extra_args=config["extra_args"],
    )
    return html.strip()


BACKENDS = {
    "markdown": _convert_with_markdown,
    "pandoc": _convert_with_pandoc,
}


def convert_markdown(text, context=None):
    """
    Convert pasted plain text into HTML based on any Markdown present.

    Args:
        text: Plain text, possibly containing Markdown
        context: Optional dict for preprocessors that need additional data

    Returns:
        HTML
    """
    context = context or {}
    backend = get_markdown_backend()

    try:
        convert = BACKENDS[backend]
    except KeyError:
        raise ImproperlyConfigured(
            f"Unknown COMPOSER_MARKDOWN_BACKEND '{backend}', expected one of {sorted(BACKENDS)}"
        ) from None

    # Pre-processing: Before markdown conversion
    text = apply_preprocessors(text, context)

    html = convert(text)
    logger.debug(f"Converted {len(text)} characters of Markdown with '{backend}'")
    return html
