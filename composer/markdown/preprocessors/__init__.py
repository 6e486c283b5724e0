# composer/markdown/preprocessors/__init__.py

from .slack_markdown_variant_corrector import slack_markdown_variant_corrector

PREPROCESSORS = [
    slack_markdown_variant_corrector,  # ```code``` on one line → fenced block
    # Order matters - they run sequentially
]


def apply_preprocessors(text, context):
    """Apply all preprocessors in order"""
    for processor in PREPROCESSORS:
        text = processor(text, context)
    return text
