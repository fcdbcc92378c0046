# site_intel/parser/markdown_parser.py
"""
Convert markdown returned by the rendering proxy into a CrawledPage.

The proxy output has no DOM, so structure is recovered from markdown
syntax: ``#`` lines give the title and headings, ``[text](url)`` gives the
links, and everything else is flattened to plain text.
"""
from __future__ import annotations

import re
from typing import List

from site_intel.crawler.link_extractor import classify_links, origin_of
from site_intel.crawler.models import CrawledPage
from site_intel.parser.html_parser import MAX_HEADING_CHARS

_TITLE_RE = re.compile(r"^#\s+(.+)$", re.MULTILINE)
_HEADING_RE = re.compile(r"^#{1,4}\s+(.+)$", re.MULTILINE)
_LINK_RE = re.compile(r"(?<!!)\[([^\]]+)\]\(([^)]+)\)")

# Applied in order. Images go before links so ![alt](src) is not turned into "!alt".
_STRIP_RULES = (
    (re.compile(r"```[\s\S]*?```"), ""),
    (re.compile(r"^#{1,6}\s+", re.MULTILINE), ""),
    (re.compile(r"!\[([^\]]*)\]\([^)]+\)"), ""),
    (re.compile(r"\[([^\]]+)\]\([^)]+\)"), r"\1"),
    (re.compile(r"[*_]{1,3}([^*_]+)[*_]{1,3}"), r"\1"),
    (re.compile(r"`[^`]+`"), ""),
    (re.compile(r"^\s*[-*+]\s+", re.MULTILINE), ""),
    (re.compile(r"^\s*\d+\.\s+", re.MULTILINE), ""),
    (re.compile(r"\s+"), " "),
)


def markdown_to_text(markdown: str) -> str:
    """Strip markdown syntax and collapse whitespace."""
    text = markdown
    for pattern, repl in _STRIP_RULES:
        text = pattern.sub(repl, text)
    return text.strip()


def markdown_headings(markdown: str) -> List[str]:
    headings: List[str] = []
    for match in _HEADING_RE.finditer(markdown):
        text = match.group(1).strip()
        if text and len(text) < MAX_HEADING_CHARS:
            headings.append(text)
    return headings


def parse_rendered_markdown(url: str, markdown: str, max_body_chars: int = 10_000) -> CrawledPage:
    """Build a CrawledPage for *url* from rendered *markdown*."""
    title_match = _TITLE_RE.search(markdown)
    title = title_match.group(1).strip() if title_match else ""

    body_text = markdown_to_text(markdown)

    # [text](url "optional title")
    hrefs = [m.group(2).split()[0] for m in _LINK_RE.finditer(markdown) if m.group(2).strip()]
    internal, external = classify_links(hrefs, origin_of(url))

    return CrawledPage(
        url=url,
        title=title,
        headings=tuple(markdown_headings(markdown)),
        body_text=body_text[:max_body_chars],
        word_count=len(body_text.split()),
        internal_links=tuple(internal),
        external_links=tuple(external),
    )
