# composer/markdown/config.py


def get_markdown_config():
    """
    Configuration for python-markdown conversion of pasted plain text.

    - No heading ids (python-markdown only adds them with the toc extension)
    - Tables enabled
    - Underscores inside words stay literal (python-markdown's default)
    - Fenced code blocks, without the extra newline before </code>
    - Single newlines become line breaks
    """
    return {
        "extensions": [
            "tables",
            "fenced_code",
            "nl2br",
        ],
        "output_format": "html",
    }


def get_pandoc_config():
    """
    Configuration for pypandoc/Pandoc conversion of pasted plain text.

    GitHub-flavoured Markdown already has pipe tables, fenced code and
    literal intraword underscores; heading ids are turned off and single
    newlines become hard line breaks.
    """
    return {
        "format": "gfm-gfm_auto_identifiers+hard_line_breaks",
        "extra_args": [
            "--wrap=none",
        ],
    }
