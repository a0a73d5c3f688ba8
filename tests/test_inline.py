from __future__ import annotations

from mksite.inline import escape_html, find_matching_bracket, render_inline
from mksite.state import ParseState


def sidenote(note_id: int, body: str) -> str:
    return (
        f'<label for="sn-{note_id}" class="margin-toggle sidenote-number"></label>'
        f'<input type="checkbox" id="sn-{note_id}" class="margin-toggle"/>'
        f'<span class="sidenote">{body}</span>'
    )


def margin_note(note_id: int, body: str) -> str:
    return (
        f'<label for="mn-{note_id}" class="margin-toggle">&#8853;</label>'
        f'<input type="checkbox" id="mn-{note_id}" class="margin-toggle"/>'
        f'<span class="marginnote">{body}</span>'
    )


def test_escape_html_leaves_quotes_alone() -> None:
    assert escape_html("a<b>&c \"q\" 'x'") == "a&lt;b&gt;&amp;c \"q\" 'x'"


def test_plain_text_is_escaped() -> None:
    assert render_inline("a<b>&c") == "a&lt;b&gt;&amp;c"


def test_emphasis_toggles() -> None:
    assert (
        render_inline("**bold** and __it__ and ==hi==")
        == "<strong>bold</strong> and <em>it</em> and <mark>hi</mark>"
    )


def test_unclosed_toggles_are_closed_innermost_first() -> None:
    assert render_inline("**open __both") == "<strong>open <em>both</em></strong>"


def test_crossed_toggles_stay_nested() -> None:
    assert render_inline("**a __b** c__") == "<strong>a <em>b</em></strong><em> c</em>"


def test_inline_code_is_verbatim_and_escaped() -> None:
    assert render_inline("use `a<b>` now") == "use <code>a&lt;b&gt;</code> now"
    assert render_inline("`**x**`") == "<code>**x**</code>"


def test_unmatched_backticks_are_literal() -> None:
    assert render_inline("a ` b") == "a ` b"
    assert render_inline("``") == "``"


def test_escaped_backtick_does_not_close_code() -> None:
    assert render_inline("`a\\`b`") == "<code>a\\`b</code>"


def test_sidenote_and_margin_note() -> None:
    assert render_inline("x^[note]") == "x" + sidenote(1, "note")
    assert render_inline("^-[aside] y") == margin_note(1, "aside") + " y"


def test_nested_sidenotes_get_increasing_ids() -> None:
    state = ParseState()
    html = render_inline("text^[inner ^[nested] note]", state)
    assert html == "text" + sidenote(1, "inner " + sidenote(2, "nested") + " note")
    assert state.note_counter == 2


def test_note_ids_continue_across_calls() -> None:
    state = ParseState()
    render_inline("^[a]", state)
    assert render_inline("^-[b]", state) == margin_note(2, "b")


def test_note_body_formatting_is_closed_inside_the_note() -> None:
    assert render_inline("^[**b] after") == sidenote(1, "<strong>b</strong>") + " after"


def test_unmatched_note_brackets_are_literal() -> None:
    assert render_inline("a ^[b [c]") == "a ^[b [c]"
    assert render_inline("caret ^ alone") == "caret ^ alone"
    assert render_inline("^-[open") == "^-[open"


def test_find_matching_bracket_tracks_depth() -> None:
    text = "[a [b] c] d"
    assert find_matching_bracket(text, 1) == 8
    assert find_matching_bracket("[a [b]", 1) == -1
