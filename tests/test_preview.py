"""Tests for core/preview.py - markdown rendering of unfocused blocks."""

from __future__ import annotations

import pytest

from core.preview import page_link_href, page_link_title, render_markdown


class TestRenderMarkdown:
    def test_inline_emphasis(self) -> None:
        html = render_markdown("some **bold** and *italic* text")

        assert "<strong>bold</strong>" in html
        assert "<em>italic</em>" in html

    @pytest.mark.parametrize("content", ["", "   ", "\n\t\n"])
    def test_blank_content_renders_nothing(self, content: str) -> None:
        assert render_markdown(content) == ""

    def test_raw_html_is_escaped(self) -> None:
        html = render_markdown("<script>alert(1)</script>")

        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_tables_enabled(self) -> None:
        html = render_markdown("| a | b |\n|---|---|\n| 1 | 2 |")

        assert "<table>" in html
        assert "<td>1</td>" in html

    def test_strikethrough_enabled(self) -> None:
        assert "<s>gone</s>" in render_markdown("~~gone~~")

    def test_code_fence(self) -> None:
        html = render_markdown("```python\nx = 1\n```")

        assert '<code class="language-python">' in html
        assert "x = 1" in html

    def test_links(self) -> None:
        html = render_markdown("[site](https://example.com)")

        assert '<a href="https://example.com">site</a>' in html


class TestPageLinks:
    """[[Title]] links to another document in the notebook."""

    def test_page_link_becomes_anchor(self) -> None:
        html = render_markdown("see [[Project Notes]] today")

        assert '<a href="doc-title:Project%20Notes">Project Notes</a>' in html

    def test_special_characters_are_encoded(self) -> None:
        html = render_markdown("[[a/b & c]]")

        assert 'href="doc-title:a%2Fb%20%26%20c"' in html
        assert ">a/b &amp; c</a>" in html

    def test_several_links_in_one_block(self) -> None:
        html = render_markdown("[[One]] and [[Two]]")

        assert html.count('href="doc-title:') == 2

    def test_code_spans_left_alone(self) -> None:
        html = render_markdown("`[[Not a link]]`")

        assert "doc-title:" not in html
        assert "<code>[[Not a link]]</code>" in html

    @pytest.mark.parametrize("content", ["[[]]", "[[unclosed", "[[  ]]"])
    def test_incomplete_links_stay_text(self, content: str) -> None:
        assert "doc-title:" not in render_markdown(content)

    def test_regular_links_still_work(self) -> None:
        assert '<a href="https://example.com">x</a>' in render_markdown("[x](https://example.com)")

    def test_href_round_trip(self) -> None:
        assert page_link_title(page_link_href("a/b & c")) == "a/b & c"
        assert page_link_title("https://example.com") is None
