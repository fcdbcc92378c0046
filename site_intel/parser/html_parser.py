# === FILE: site_intel/parser/html_parser.py ===
"""HTML page parser for SiteIntel.

Turns raw markup into a :class:`~site_intel.crawler.models.CrawledPage`:

* noise removal: ``script``, ``style``, ``noscript``, ``iframe``, ``svg``
  and navigation (``nav`` / ``role="navigation"``) are dropped first;
* title: first ``<title>`` text or ``""``;
* headings: ``h1``–``h4`` text in document order, shorter than 150 chars;
* body text: taken from the main content container when there is one,
  with skip-link / cookie / banner elements removed, whitespace collapsed
  and capped at ``max_body_chars``;
* links: every ``<a href>`` resolved against the page origin and split
  into internal and external lists;
* images: ``<img>`` sources with alt text and the nearest heading.

Parsing is deterministic: identical input yields an identical page.
"""
from __future__ import annotations

import re
from collections.abc import Sequence
from typing import List, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from site_intel.crawler.link_extractor import classify_links, origin_of, resolve_url
from site_intel.crawler.models import CrawledPage, SiteImage

__all__: Sequence[str] = ("parse_page", "collapse_whitespace", "MAX_HEADING_CHARS")

MAX_HEADING_CHARS = 150

_NOISE_TAGS = ["script", "style", "noscript", "iframe", "svg"]
_NAV_SELECTOR = "nav, [role='navigation']"
_CONTENT_SELECTOR = "main, article, [role='main'], .content, #content"
_CHROME_SELECTOR = "[class*='skip'], [class*='cookie'], [class*='banner']"
_HEADING_TAGS = ["h1", "h2", "h3", "h4"]
_WS_RE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    return _WS_RE.sub(" ", text).strip()


def _strip_noise(soup: BeautifulSoup) -> None:
    for element in soup(_NOISE_TAGS):
        element.decompose()
    for element in soup.select(_NAV_SELECTOR):
        element.decompose()


def _headings(soup: BeautifulSoup) -> List[str]:
    result: List[str] = []
    for tag in soup.find_all(_HEADING_TAGS):
        text = tag.get_text().strip()
        if text and len(text) < MAX_HEADING_CHARS:
            result.append(text)
    return result


def _body_text(soup: BeautifulSoup) -> str:
    scope = soup.select_one(_CONTENT_SELECTOR) or soup.body
    if scope is None:
        # html.parser builds no implicit <body>; keep <head> text out of the document scope
        scope = soup
        for element in soup(["head", "title"]):
            element.decompose()
    for element in scope.select(_CHROME_SELECTOR):
        element.decompose()
    return collapse_whitespace(scope.get_text())


def _images(soup: BeautifulSoup, origin: str) -> List[SiteImage]:
    images: List[SiteImage] = []
    seen: set[str] = set()
    for img in soup.find_all("img"):
        if not isinstance(img, Tag):
            continue
        src = img.get("src") or img.get("data-src")
        if not isinstance(src, str):
            continue
        # tracking pixels
        if img.get("width") == "1" and img.get("height") == "1":
            continue
        resolved = resolve_url(src, origin)
        if resolved is None or resolved.lower().startswith("mailto:") or resolved in seen:
            continue
        seen.add(resolved)
        context = ""
        for heading in img.find_all_previous(_HEADING_TAGS):
            context = heading.get_text().strip()
            if context:
                break
        alt = img.get("alt")
        images.append(
            SiteImage(
                url=resolved,
                alt=alt.strip() if isinstance(alt, str) else "",
                context=context[:MAX_HEADING_CHARS],
            )
        )
    return images


def parse_page(
    url: str,
    html: str,
    max_body_chars: int = 10_000,
    final_url: Optional[str] = None,
) -> CrawledPage:
    """
    Parse *html* fetched from *url* into a :class:`CrawledPage`.

    Links and images are resolved against the origin of *final_url*, the
    address the fetch ended on after redirects, when it is given.
    """
    soup = BeautifulSoup(html, "html.parser")
    _strip_noise(soup)

    title_tag = soup.find("title")
    title = title_tag.get_text().strip() if title_tag else ""

    headings = _headings(soup)
    body_text = _body_text(soup)

    origin = origin_of(final_url or url)
    hrefs = [a.get("href") for a in soup.find_all("a", href=True) if isinstance(a, Tag)]
    internal, external = classify_links(hrefs, origin)

    return CrawledPage(
        url=url,
        title=title,
        headings=tuple(headings),
        body_text=body_text[:max_body_chars],
        word_count=len(body_text.split()),
        internal_links=tuple(internal),
        external_links=tuple(external),
        images=tuple(_images(soup, origin)),
    )
