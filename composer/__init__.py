"""Composer: converts pasted HTML, Markdown and shortcodes into blocks."""
