from __future__ import annotations

import io

from mksite.content import Page
from mksite.page import load_stylesheet, render_index, render_page, render_page_html


def test_page_scaffolding_wraps_content() -> None:
    html = render_page_html("A & B", "2024-01-05", "Hello", stylesheet="body{}")
    assert html.startswith("<!DOCTYPE html>\n")
    assert html.endswith("</html>\n")
    assert "<title>A &amp; B</title>" in html
    assert "<style>\nbody{}\n</style>" in html
    assert "<h1>A &amp; B</h1>" in html
    assert '<p class="post-meta"><time datetime="2024-01-05">January  5, 2024</time></p>' in html
    assert '<div class="content">\n<p>Hello</p>\n</div>\n</article>\n</body>\n' in html


def test_dateline_is_omitted_without_a_usable_date() -> None:
    for date in (None, "", "someday", "2024-13-01"):
        html = render_page_html("Title", date, "Body")
        assert "<time" not in html
        assert "post-meta" not in html


def test_custom_date_formatter() -> None:
    html = render_page_html("Title", "2024-01-05", "", format_date=lambda _iso: "yesterday")
    assert ">yesterday</time>" in html


def test_render_page_writes_to_sink_and_returns_state() -> None:
    out = io.StringIO()
    state = render_page("T", None, "a^[b]\n\n## s", out)
    assert state.note_counter == 1
    assert not state.in_section
    assert out.getvalue().count("<section>") == out.getvalue().count("</section>") == 1


def test_render_index_lists_pages_in_given_order() -> None:
    pages = [
        Page(title="Newer <post>", slug="newer-post", date="2024-02-01", content=""),
        Page(title="Undated", slug="undated", date="", content=""),
    ]
    out = io.StringIO()
    render_index(pages, out)
    html = out.getvalue()
    assert "<title>Blog Index</title>" in html
    assert '<td class="date">Feb  1, 2024</td>' in html
    assert '<a href="posts/newer-post.html">Newer &lt;post&gt;</a>' in html
    assert html.index("newer-post") < html.index("undated")
    assert '<td class="date"></td>' in html


def test_bundled_stylesheet_styles_notes() -> None:
    css = load_stylesheet()
    assert ".sidenote" in css
    assert ".marginnote" in css
