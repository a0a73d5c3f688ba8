"""Block assembly: walks a document line by line and emits block-level HTML."""

from __future__ import annotations

import io
from typing import Optional, TextIO

from .inline import escape_html, format_inline
from .lines import (
    LineKind,
    LineSequence,
    classify_line,
    heading_level,
    heading_text,
    is_code_fence,
    list_item_offset,
)
from .state import BlockKind, ParseState

LIST_TAGS = {
    BlockKind.UNORDERED_LIST: "ul",
    BlockKind.ORDERED_LIST: "ol",
}

ITEM_BLOCKS = {
    LineKind.UNORDERED_ITEM: BlockKind.UNORDERED_LIST,
    LineKind.ORDERED_ITEM: BlockKind.ORDERED_LIST,
}


def close_paragraph(state: ParseState, out: TextIO) -> None:
    if state.in_paragraph:
        out.write("</p>\n")
        state.in_paragraph = False


def close_list(state: ParseState, out: TextIO) -> None:
    tag = LIST_TAGS.get(state.block)
    if tag:
        out.write(f"</{tag}>\n")
    state.block = BlockKind.NONE


def open_list(block: BlockKind, state: ParseState, out: TextIO) -> None:
    if state.block is block:
        return
    close_list(state, out)
    out.write(f"<{LIST_TAGS[block]}>\n")
    state.block = block


def close_section(state: ParseState, out: TextIO) -> None:
    if state.in_section:
        out.write("</section>\n")
        state.in_section = False


def write_code_block(lines: LineSequence, state: ParseState, out: TextIO) -> None:
    """Consume lines up to the closing fence (or end of input) as one code block."""
    state.block = BlockKind.CODE
    buffer = state.scratch()
    first = True
    for line in lines:
        text = line.text
        if is_code_fence(text):
            break
        if not first:
            buffer.append("\n")
        buffer.append(text)
        first = False
    out.write(f"<pre><code>{escape_html(buffer.getvalue())}</code></pre>\n")
    state.block = BlockKind.NONE


def write_heading(text: str, state: ParseState, out: TextIO) -> None:
    level = heading_level(text)
    if level == 2:
        close_section(state, out)
        out.write("<section>\n")
        state.in_section = True
    out.write(f"<h{level}>")
    format_inline(heading_text(text), state, out)
    out.write(f"</h{level}>\n")


def write_list_item(text: str, state: ParseState, out: TextIO) -> None:
    out.write("<li>")
    format_inline(text[list_item_offset(text):], state, out)
    out.write("</li>\n")


def write_paragraph(first: str, lines: LineSequence, state: ParseState, out: TextIO) -> None:
    # Adjacent plain lines form one paragraph, joined by single spaces.
    buffer = state.scratch()
    buffer.append(first)
    while True:
        upcoming = lines.peek()
        if upcoming is None or classify_line(upcoming.text) is not LineKind.TEXT:
            break
        next(lines)
        buffer.append(" ")
        buffer.append(upcoming.text)

    paragraph = buffer.getvalue()
    if not paragraph:
        return
    out.write("<p>")
    state.in_paragraph = True
    format_inline(paragraph, state, out)


def render_blocks(
    content: str,
    out: TextIO,
    state: Optional[ParseState] = None,
    *,
    buffer_limit: Optional[int] = None,
) -> ParseState:
    """Render ``content`` as block HTML into ``out`` and return the final state.

    Every paragraph, list and section opened along the way is closed before
    returning, whatever the input looks like.
    """
    if state is None:
        state = ParseState(buffer_limit=buffer_limit)
    lines = LineSequence(content)

    for line in lines:
        text = line.text
        kind = classify_line(text)

        if kind is LineKind.BLANK:
            close_paragraph(state, out)
            close_list(state, out)
            continue

        if kind is LineKind.CODE_FENCE:
            close_paragraph(state, out)
            close_list(state, out)
            write_code_block(lines, state, out)
            continue

        if kind is LineKind.HEADING:
            close_paragraph(state, out)
            close_list(state, out)
            write_heading(text, state, out)
            continue

        if kind in ITEM_BLOCKS:
            close_paragraph(state, out)
            open_list(ITEM_BLOCKS[kind], state, out)
            write_list_item(text, state, out)
            continue

        close_list(state, out)
        write_paragraph(text, lines, state, out)

    close_paragraph(state, out)
    close_list(state, out)
    close_section(state, out)
    return state


def render_content(content: str, state: Optional[ParseState] = None, *, buffer_limit: Optional[int] = None) -> str:
    buffer = io.StringIO()
    render_blocks(content, buffer, state, buffer_limit=buffer_limit)
    return buffer.getvalue()
