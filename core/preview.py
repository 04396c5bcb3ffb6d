'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from functools import lru_cache
from typing import Optional
from urllib.parse import quote, unquote

from markdown_it import MarkdownIt
from markdown_it.rules_inline import StateInline

__all__ = ["PAGE_LINK_SCHEME", "page_link_href", "page_link_title", "render_markdown"]

PAGE_LINK_SCHEME = "doc-title:"


def page_link_href(title: str) -> str:
    return PAGE_LINK_SCHEME + quote(title, safe="")


def page_link_title(href: str) -> Optional[str]:
    """The document title a [[page link]] points at, or None for other links."""
    if not href.startswith(PAGE_LINK_SCHEME):
        return None
    return unquote(href[len(PAGE_LINK_SCHEME):])


def _page_link_rule(state: StateInline, silent: bool) -> bool:
    """[[Title]] -> <a href="doc-title:Title">Title</a>"""
    start = state.pos
    if not state.src.startswith("[[", start):
        return False
    end = state.src.find("]]", start + 2)
    if end < 0 or end + 2 > state.posMax:
        return False
    title = state.src[start + 2:end]
    if not title.strip() or "\n" in title:
        return False

    if not silent:
        token = state.push("link_open", "a", 1)
        token.attrSet("href", page_link_href(title))
        token = state.push("text", "", 0)
        token.content = title
        state.push("link_close", "a", -1)
    state.pos = end + 2
    return True


def page_link_plugin(md: MarkdownIt) -> None:
    md.inline.ruler.before("link", "page_link", _page_link_rule)


@lru_cache(maxsize=1)
def _renderer() -> MarkdownIt:
    # Raw HTML in block text is shown escaped, never injected.
    md = MarkdownIt("commonmark", {"html": False}).enable(["table", "strikethrough"])
    md.use(page_link_plugin)
    return md


def render_markdown(content: str) -> str:
    """Convert a block's markdown source to an HTML fragment."""
    if not content or not content.strip():
        return ""
    return _renderer().render(content)
