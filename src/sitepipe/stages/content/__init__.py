from .markdown import MarkdownRenderer, build_markdown_renderer
from .post import PostParser, parse_preamble

__all__ = ["MarkdownRenderer", "build_markdown_renderer", "PostParser", "parse_preamble"]
