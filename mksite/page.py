"""Full-document rendering: page scaffolding around the block output, and the archive index."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Callable, Optional, Sequence, TextIO

from .blocks import render_blocks
from .content import Page, format_date_abbr, format_date_full
from .inline import escape_html
from .state import ParseState

DEFAULT_STYLESHEET = Path(__file__).with_name("styles.css")
INDEX_TITLE = "Blog Index"
INDEX_HEADING = "Blog Posts"

DateFormatter = Callable[[str], Optional[str]]


def load_stylesheet(path: Optional[Path] = None) -> str:
    return (path or DEFAULT_STYLESHEET).read_text(encoding="utf-8")


def write_head(out: TextIO, title: str, stylesheet: str) -> None:
    out.write("<!DOCTYPE html>\n")
    out.write('<html lang="en">\n')
    out.write("<head>\n")
    out.write('  <meta charset="utf-8">\n')
    out.write('  <meta name="viewport" content="width=device-width, initial-scale=1">\n')
    out.write('  <link rel="icon" type="image/svg+xml" href="/favicon.svg" />\n')
    out.write(f"  <title>{escape_html(title)}</title>\n")
    out.write(f"  <style>\n{stylesheet}\n</style>\n")
    out.write("</head>\n")


def render_page(
    title: str,
    date: Optional[str],
    content: str,
    out: TextIO,
    *,
    stylesheet: str = "",
    format_date: DateFormatter = format_date_full,
    buffer_limit: Optional[int] = None,
) -> ParseState:
    """Write one complete HTML document for a page to ``out``.

    Args:
        title: Page title, escaped into ``<title>`` and the ``<h1>``.
        date: ISO date from the front matter, or None. No dateline is written
            when it is missing or ``format_date`` cannot format it.
        content: Page body with the front matter already stripped.
        out: Text sink; it is written to but never closed.
        stylesheet: CSS embedded verbatim in the document head.
        format_date: Converts the ISO date to its display form.
        buffer_limit: Optional cap on a single paragraph or code block.

    Returns:
        The parse state left by the block assembler.
    """
    display_date = format_date(date) if date else None

    write_head(out, title, stylesheet)
    out.write("<body>\n")
    out.write("<article>\n")
    out.write(f"<h1>{escape_html(title)}</h1>\n")
    if display_date:
        out.write(
            f'<p class="post-meta"><time datetime="{escape_html(date or "")}">'
            f"{escape_html(display_date)}</time></p>\n"
        )
    out.write('<div class="content">\n')
    state = render_blocks(content, out, buffer_limit=buffer_limit)
    out.write("</div>\n")
    out.write("</article>\n")
    out.write("</body>\n")
    out.write("</html>\n")
    return state


def render_page_html(title: str, date: Optional[str], content: str, **kwargs) -> str:
    buffer = io.StringIO()
    render_page(title, date, content, buffer, **kwargs)
    return buffer.getvalue()


def render_index(pages: Sequence[Page], out: TextIO, *, stylesheet: str = "", section: str = "posts") -> None:
    """Write the archive table linking every page in ``pages`` in the given order."""
    write_head(out, INDEX_TITLE, stylesheet)
    out.write("<body>\n")
    out.write(f"  <h1>{INDEX_HEADING}</h1>\n")
    out.write('  <table class="archive">\n')
    out.write("    <thead><tr><th>date</th><th>title</th></tr></thead>\n")
    out.write("    <tbody>\n")
    for page in pages:
        display_date = format_date_abbr(page.date) or ""
        out.write("      <tr>\n")
        out.write(f'        <td class="date">{escape_html(display_date)}</td>\n')
        out.write(
            f'        <td class="title"><a href="{section}/{page.slug}.html">'
            f"{escape_html(page.title)}</a></td>\n"
        )
        out.write("      </tr>\n")
    out.write("    </tbody>\n")
    out.write("  </table>\n")
    out.write("</body>\n")
    out.write("</html>\n")
