from __future__ import annotations
from typing import Iterable, List
import re

_WS = re.compile(r"\s+")

def word_count(text: str) -> int:
    return len(text.split())

def join_page(blocks: Iterable[str]) -> str:
    return " ".join(b for b in blocks if b)

def join_pages(pages: Iterable[Iterable[str]]) -> str:
    # one page per paragraph, blank line between pages
    out: List[str] = []
    for blocks in pages:
        page = join_page(blocks).strip()
        if page:
            out.append(page)
    return "\n\n".join(out)

def squash_whitespace(text: str) -> str:
    return _WS.sub(" ", text).strip()
