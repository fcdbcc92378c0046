# site_intel/extractors/competitor.py
"""
Light single-page profile of a competitor's homepage.

One static fetch, no BFS and no rendering fallback. The service and contact
extractors run over the single parsed page so competitor numbers are
comparable with the full crawl of the prospect's own site.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional

from aiohttp import ClientSession
from bs4 import BeautifulSoup

from site_intel.config import CrawlerConfig
from site_intel.crawler.fetcher import Fetcher
from site_intel.crawler.link_extractor import canonicalize, normalize_base_url
from site_intel.crawler.models import ContactInfo, ExtractedService
from site_intel.errors import FetchError
from site_intel.extractors.contact import extract_contact_info
from site_intel.extractors.services import extract_services
from site_intel.logger import get_logger
from site_intel.parser.html_parser import collapse_whitespace, parse_page

log = get_logger("competitor")

_EXCLUDED_HEADING_RE = re.compile(r"about|contact|blog|faq|review|testimonial", re.IGNORECASE)


@dataclass(slots=True)
class HomepageProfile:
    url: str
    word_count: int
    service_count: int
    has_schema: bool
    has_blog: bool
    services: List[ExtractedService] = field(default_factory=list)
    contact: ContactInfo = field(default_factory=ContactInfo)


def count_service_headings(soup: BeautifulSoup) -> int:
    """``h2``/``h3`` headings of 4-59 chars that are not about/contact/blog/etc."""
    count = 0
    for tag in soup.find_all(["h2", "h3"]):
        text = tag.get_text().strip().lower()
        if 3 < len(text) < 60 and not _EXCLUDED_HEADING_RE.search(text):
            count += 1
    return count


def build_profile(url: str, html: str, config: Optional[CrawlerConfig] = None) -> HomepageProfile:
    """Profile from already-fetched homepage *html*."""
    cfg = config or CrawlerConfig()
    soup = BeautifulSoup(html, "html.parser")
    has_schema = soup.select_one("script[type='application/ld+json']") is not None
    has_blog = soup.select_one("a[href*='blog'], a[href*='article'], a[href*='news']") is not None

    for element in soup(["script", "style", "noscript"]):
        element.decompose()
    body = soup.body or soup
    word_count = len(collapse_whitespace(body.get_text()).split())

    page = parse_page(url, html, cfg.max_body_chars)
    return HomepageProfile(
        url=url,
        word_count=word_count,
        service_count=count_service_headings(soup),
        has_schema=has_schema,
        has_blog=has_blog,
        services=extract_services([page], cfg.max_services),
        contact=extract_contact_info([page]),
    )


async def profile_homepage(
    url: str,
    config: Optional[CrawlerConfig] = None,
    session: Optional[ClientSession] = None,
) -> Optional[HomepageProfile]:
    """Fetch and profile a competitor homepage; None when it cannot be fetched."""
    cfg = config or CrawlerConfig()
    target = canonicalize(normalize_base_url(url))
    own_session = session is None
    active = session or ClientSession(headers={"User-Agent": cfg.user_agent})
    try:
        fetched = await Fetcher(active, cfg).fetch_html(target)
    except FetchError as exc:
        log.info("Competitor homepage unavailable: %s", exc)
        return None
    finally:
        if own_session:
            await active.close()
    return build_profile(target, fetched.html, cfg)
