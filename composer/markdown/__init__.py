from .converter import convert_markdown

__all__ = ["convert_markdown"]
