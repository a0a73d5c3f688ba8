"""Inline formatting: emphasis toggles, inline code, sidenotes and margin notes."""

from __future__ import annotations

import io
from html import escape as html_escape
from typing import List, Optional, TextIO, Tuple

from .state import ParseState

TOGGLE_TAGS = {
    "**": "strong",
    "__": "em",
    "==": "mark",
}

SIDENOTE_HTML = (
    '<label for="sn-{id}" class="margin-toggle sidenote-number"></label>'
    '<input type="checkbox" id="sn-{id}" class="margin-toggle"/>'
    '<span class="sidenote">'
)
MARGIN_NOTE_HTML = (
    '<label for="mn-{id}" class="margin-toggle">&#8853;</label>'
    '<input type="checkbox" id="mn-{id}" class="margin-toggle"/>'
    '<span class="marginnote">'
)

# Checked in order; "^-[" has to win over "^[".
NOTE_MARKERS = (
    ("^-[", MARGIN_NOTE_HTML),
    ("^[", SIDENOTE_HTML),
)


def escape_html(text: str) -> str:
    return html_escape(text, quote=False)


def find_closing(text: str, start: int, closing: str) -> int:
    i = start
    while i < len(text):
        if text[i] == "\\":
            i += 2
            continue
        if text[i] == closing:
            return i
        i += 1
    return -1


def find_matching_bracket(text: str, start: int) -> int:
    """Return the index of the ``]`` closing a bracket opened just before ``start``."""
    depth = 1
    for i in range(start, len(text)):
        if text[i] == "[":
            depth += 1
        elif text[i] == "]":
            depth -= 1
            if depth == 0:
                return i
    return -1


def _toggle(tag: str, open_tags: List[str], out: TextIO) -> None:
    if tag not in open_tags:
        open_tags.append(tag)
        out.write(f"<{tag}>")
        return
    # Close everything opened after ``tag`` as well, then reopen it.
    index = open_tags.index(tag)
    reopen = open_tags[index + 1:]
    for name in reversed(open_tags[index:]):
        out.write(f"</{name}>")
    del open_tags[index:]
    for name in reopen:
        open_tags.append(name)
        out.write(f"<{name}>")


def write_note(template: str, body: str, state: ParseState, out: TextIO) -> None:
    note_id = state.next_note_id()
    out.write(template.format(id=note_id))
    format_inline(body, state, out)
    out.write("</span>")


def _match_note(text: str, i: int) -> Optional[Tuple[str, int, int]]:
    for marker, template in NOTE_MARKERS:
        if text.startswith(marker, i):
            body_start = i + len(marker)
            close = find_matching_bracket(text, body_start)
            if close != -1:
                return template, body_start, close
            return None
    return None


def format_inline(text: str, state: ParseState, out: TextIO) -> None:
    """Write ``text`` to ``out`` as inline HTML.

    Unbalanced markup never raises: unmatched code and note markers are emitted
    as literal characters, and emphasis left open is closed at the end of
    ``text`` so it cannot leak into the next block.
    """
    open_tags: List[str] = []
    i = 0
    start = 0

    def flush(end: int) -> None:
        nonlocal start
        if start < end:
            out.write(escape_html(text[start:end]))
        start = end

    while i < len(text):
        tag = TOGGLE_TAGS.get(text[i:i + 2])
        if tag:
            flush(i)
            _toggle(tag, open_tags, out)
            i += 2
            start = i
            continue

        char = text[i]
        if char == "`" and text[i + 1:i + 2] != "`":
            close = find_closing(text, i + 1, "`")
            if close != -1:
                flush(i)
                out.write(f"<code>{escape_html(text[i + 1:close])}</code>")
                i = close + 1
                start = i
                continue

        if char == "^":
            note = _match_note(text, i)
            if note:
                template, body_start, close = note
                flush(i)
                write_note(template, text[body_start:close], state, out)
                i = close + 1
                start = i
                continue

        i += 1

    flush(len(text))
    for name in reversed(open_tags):
        out.write(f"</{name}>")


def render_inline(text: str, state: Optional[ParseState] = None) -> str:
    buffer = io.StringIO()
    format_inline(text, state if state is not None else ParseState(), buffer)
    return buffer.getvalue()
