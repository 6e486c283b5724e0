# composer/markdown/preprocessors/slack_markdown_variant_corrector.py
"""
Preprocessor that corrects Slack's Markdown variant.

Slack writes code blocks on a single line (```code```), which standard
Markdown reads as inline code. The fences are moved onto their own lines:

    ```let a = 1```   →   ```
                          let a = 1
                          ```
"""

import re

_SINGLE_LINE_FENCE = re.compile(r"((?:^|\n)```)([^\n`]+)(```(?:$|\n))")


def slack_markdown_variant_corrector(text: str, context: dict) -> str:
    return _SINGLE_LINE_FENCE.sub(
        lambda match: f"{match.group(1)}\n{match.group(2)}\n{match.group(3)}", text, count=1
    )
