# site_intel/extractors/services.py
"""
Service extraction from page headings.

A heading becomes a service when it sits on a service page, or directly
under a service-section heading ("Our Services"), and passes the name
filters. Every filter is a separate predicate so false positives can be
pinned down in tests one rule at a time.
"""
from __future__ import annotations

import re
from typing import Iterable, List, Optional, Sequence
from urllib.parse import urlsplit

from site_intel.crawler.models import CrawledPage, ExtractedService

__all__: Sequence[str] = (
    "extract_services",
    "is_service_page",
    "is_section_heading",
    "is_non_service_heading",
    "is_plausible_service_name",
    "find_description_near_heading",
)

SERVICE_PAGE_RE = re.compile(r"service|what-we-do|our-work|solution|treatment|specialt", re.IGNORECASE)
SKIP_PAGE_RE = re.compile(r"blog|article|news|press|post", re.IGNORECASE)
SERVICE_SECTION_RE = re.compile(
    r"service|what we (?:do|offer)|our work|capabilities|solutions|treatments|specialties",
    re.IGNORECASE,
)
NON_SERVICE_RE = re.compile(
    r"^(contact|about|blog|article|news|faq|frequently|how (?:do|can|much|to)|why |"
    r"what (?:is|are|our)|get (?:your|a|an)|learn more|check out|resources|our process|"
    r"testimonial|review|copyright|follow us|call us)",
    re.IGNORECASE,
)

_CAMEL_BLEED_RE = re.compile(r"([a-z.!?])([A-Z][a-z])")
_SENTENCE_RE = re.compile(r"[^.!?]+[.!?]+")

MAX_SECTION_WORDS = 5
MIN_NAME_CHARS, MAX_NAME_CHARS = 3, 60
MAX_NAME_WORDS = 8
DESCRIPTION_WINDOW = 500
MAX_DESCRIPTION_CHARS = 200


def _page_path(url: str) -> str:
    parts = urlsplit(url)
    return f"{parts.path}?{parts.query}" if parts.query else parts.path


def is_service_page(url: str) -> bool:
    return bool(SERVICE_PAGE_RE.search(_page_path(url)))


def is_skipped_page(url: str) -> bool:
    return bool(SKIP_PAGE_RE.search(_page_path(url)))


def is_section_heading(text: str) -> bool:
    """Short grouping label such as "Our Services", not an individual offering."""
    return bool(SERVICE_SECTION_RE.search(text)) and len(text.split()) <= MAX_SECTION_WORDS


def is_non_service_heading(text: str) -> bool:
    return bool(NON_SERVICE_RE.match(text.strip()))


def is_plausible_service_name(text: str) -> bool:
    name = text.strip()
    return MIN_NAME_CHARS <= len(name) <= MAX_NAME_CHARS and len(name.split()) <= MAX_NAME_WORDS


def find_description_near_heading(body_text: str, heading: str) -> str:
    """First one or two sentences following *heading* in *body_text*."""
    idx = body_text.find(heading)
    if idx == -1:
        return ""
    start = idx + len(heading)
    after = body_text[start : start + DESCRIPTION_WINDOW].strip()
    # body text is concatenated element text, so "...done.Next Heading" needs a split
    after = _CAMEL_BLEED_RE.sub(r"\1 \2", after)

    sentences = _SENTENCE_RE.findall(after)
    if sentences:
        desc = " ".join(s.strip() for s in sentences[:2]).strip()
        if len(desc) > MAX_DESCRIPTION_CHARS:
            return desc[:MAX_DESCRIPTION_CHARS].strip() + "..."
        return desc
    return after[:150].strip()


def _candidate_names(page: CrawledPage) -> Iterable[str]:
    service_page = is_service_page(page.url)
    previous: Optional[str] = None
    for heading in page.headings:
        name = heading.strip()
        under_section = previous is not None and bool(SERVICE_SECTION_RE.search(previous))
        previous = heading
        if is_section_heading(name):
            continue
        if is_non_service_heading(name):
            continue
        if not is_plausible_service_name(name):
            continue
        if service_page or under_section:
            yield name


def extract_services(pages: Sequence[CrawledPage], max_services: int = 12) -> List[ExtractedService]:
    """
    Services found across *pages*, service-looking URLs first,
    deduplicated case-insensitively and capped at *max_services*.
    """
    services: List[ExtractedService] = []
    seen: set[str] = set()
    ordered = sorted(pages, key=lambda p: 0 if is_service_page(p.url) else 1)

    for page in ordered:
        if len(services) >= max_services:
            break
        if is_skipped_page(page.url):
            continue
        for name in _candidate_names(page):
            if len(services) >= max_services:
                break
            key = name.lower()
            if key in seen:
                continue
            seen.add(key)
            services.append(
                ExtractedService(
                    name=name,
                    description=find_description_near_heading(page.body_text, name),
                    page_url=page.url,
                )
            )
    return services
