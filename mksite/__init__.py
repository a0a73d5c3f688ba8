"""Static site generator for a small plain-text markup dialect."""

from .blocks import render_blocks, render_content
from .inline import escape_html, format_inline, render_inline
from .page import render_page, render_page_html
from .state import ParseState

__version__ = "0.1.0"

__all__ = [
    "ParseState",
    "escape_html",
    "format_inline",
    "render_blocks",
    "render_content",
    "render_inline",
    "render_page",
    "render_page_html",
]
