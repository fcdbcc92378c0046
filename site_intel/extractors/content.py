# site_intel/extractors/content.py
"""About text, testimonials and opening hours from crawled body text."""
from __future__ import annotations

import re
from typing import List, Optional, Sequence
from urllib.parse import urlsplit

from site_intel.crawler.models import CrawledPage

ABOUT_PAGE_RE = re.compile(r"about|who-we-are|our-story|our-team", re.IGNORECASE)
ABOUT_SECTION_RE = re.compile(r"about us|who we are|our story|our mission", re.IGNORECASE)
SENTENCE_START_RE = re.compile(r"[A-Z][a-z].*?[.!?]\s")
TESTIMONIAL_SECTION_RE = re.compile(
    r"testimonial|review|what (?:our )?(?:clients|customers|patients) say|hear from",
    re.IGNORECASE,
)
QUOTE_RE = re.compile(r"[\"“]([^\"”]{30,500})[\"”]")
HOURS_RE = re.compile(r"(?:Mon(?:day)?|hours)[^.]{0,200}(?:\d{1,2}\s*(?:am|pm))", re.IGNORECASE)

ABOUT_PAGE_CHARS = 3000
ABOUT_SECTION_CHARS = 1500
TESTIMONIAL_WINDOW = 3000
QUOTES_PER_PAGE = 5


def extract_about_content(pages: Sequence[CrawledPage]) -> Optional[str]:
    """Text of the about page, else the homepage "about us" section, else None."""
    about_page = next((p for p in pages if ABOUT_PAGE_RE.search(urlsplit(p.url).path)), None)
    if about_page is not None:
        text = about_page.body_text
        # drop leftover skip-link / breadcrumb text before the first real sentence
        match = SENTENCE_START_RE.search(text)
        if match and 0 < match.start() < 200:
            text = text[match.start():]
        return text[:ABOUT_PAGE_CHARS]

    if not pages:
        return None
    homepage = pages[0]
    match = ABOUT_SECTION_RE.search(homepage.body_text)
    if match:
        return homepage.body_text[match.start(): match.start() + ABOUT_SECTION_CHARS].strip()
    return None


def extract_testimonials(pages: Sequence[CrawledPage]) -> List[str]:
    """Quoted passages after the first testimonial/review keyword of each page."""
    testimonials: List[str] = []
    for page in pages:
        section = TESTIMONIAL_SECTION_RE.search(page.body_text)
        if section is None:
            continue
        window = page.body_text[section.start(): section.start() + TESTIMONIAL_WINDOW]
        quotes = QUOTE_RE.findall(window)[:QUOTES_PER_PAGE]
        testimonials.extend(q.strip() for q in quotes if len(q.strip()) > 30)
    return testimonials


def extract_hours(pages: Sequence[CrawledPage]) -> Optional[str]:
    text = " ".join(p.body_text for p in pages)
    match = HOURS_RE.search(text)
    return match.group(0).strip()[:200] if match else None
