from __future__ import annotations
from pathlib import Path
from typing import List
from bs4 import BeautifulSoup, FeatureNotFound, NavigableString, Tag
from .utils import join_pages, squash_whitespace

_BLOCK_TAGS = ["p", "li", "h1", "h2", "h3", "h4", "h5", "h6", "blockquote", "pre", "td"]
_DROP_TAGS = ["script", "style", "noscript", "template", "head"]

def _soup(html: str) -> BeautifulSoup:
    try:
        return BeautifulSoup(html, "lxml")
    except FeatureNotFound:
        return BeautifulSoup(html, "html.parser")

def html_blocks(html: str) -> List[str]:
    """Outermost block elements plus runs of loose text between them, in document order."""
    soup = _soup(html)
    for tag in soup(_DROP_TAGS):
        tag.decompose()

    blocks: List[str] = []
    loose: List[str] = []

    def flush():
        text = squash_whitespace(" ".join(loose))
        loose.clear()
        if text:
            blocks.append(text)

    for node in soup.descendants:
        if isinstance(node, Tag):
            if node.name in _BLOCK_TAGS and node.find_parent(_BLOCK_TAGS) is None:
                flush()
                text = squash_whitespace(node.get_text(" ", strip=True))
                if text:
                    blocks.append(text)
        # exact type: skips comments, doctypes and CDATA
        elif type(node) is NavigableString and node.find_parent(_BLOCK_TAGS) is None:
            loose.append(node.strip())
    flush()
    return blocks

def html_to_text(html: str) -> str:
    return join_pages([html_blocks(html)])

def read_document(path: Path) -> str:
    raw = Path(path).read_text(encoding="utf-8", errors="replace")
    if Path(path).suffix.lower() in (".html", ".htm", ".xhtml"):
        return html_to_text(raw)
    return raw
