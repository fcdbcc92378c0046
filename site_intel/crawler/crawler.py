# === FILE: site_intel/crawler/crawler.py ===
"""
Breadth-first crawl controller.

One :meth:`SiteCrawler.crawl` call owns its own frontier, visited set and
clock, so a crawler instance can be reused for many businesses without
state leaking between them. The BFS phase is sequential so the page, depth
and wall-clock budgets are enforced exactly; only the rendering retry of
key sub-pages fans out concurrently.
"""
from __future__ import annotations

import asyncio
import re
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional, Set
from urllib.parse import urlsplit

from aiohttp import ClientSession

from site_intel.config import CrawlerConfig
from site_intel.crawler.fetcher import Fetcher
from site_intel.crawler.link_extractor import canonicalize, normalize_base_url, should_skip_url
from site_intel.crawler.models import (
    CrawledPage,
    CrawlResult,
    FetchResult,
    FrontierEntry,
    PageOutcome,
    SkipReason,
)
from site_intel.crawler.renderer import JsRenderer
from site_intel.errors import FetchError
from site_intel.logger import get_logger
from site_intel.parser.html_parser import parse_page

__all__ = ("SiteCrawler",)

_KEY_PAGE_RE = re.compile(r"service|about|contact", re.IGNORECASE)


@dataclass(slots=True)
class _CrawlState:
    """Mutable state of a single crawl; never shared between calls."""

    base_url: str
    frontier: Deque[FrontierEntry] = field(default_factory=deque)
    visited: Set[str] = field(default_factory=set)
    pages: List[CrawledPage] = field(default_factory=list)
    outcomes: List[PageOutcome] = field(default_factory=list)
    started: float = field(default_factory=time.monotonic)

    def elapsed(self) -> float:
        return time.monotonic() - self.started


class SiteCrawler:
    """Bounded BFS crawler with a JS-rendering fallback for thin sites."""

    def __init__(self, config: Optional[CrawlerConfig] = None, session: Optional[ClientSession] = None) -> None:
        self.config = config or CrawlerConfig()
        self.session: Optional[ClientSession] = session
        self._owns_session = session is None
        self.logger = get_logger("crawler")
        self.fetcher: Optional[Fetcher] = Fetcher(session, self.config) if session else None
        self.renderer: Optional[JsRenderer] = JsRenderer(session, self.config) if session else None

    async def __aenter__(self) -> SiteCrawler:
        if self.session is None:
            self.session = ClientSession(headers={"User-Agent": self.config.user_agent})
            self._owns_session = True
        if self.fetcher is None:
            self.fetcher = Fetcher(self.session, self.config)
        if self.renderer is None:
            self.renderer = JsRenderer(self.session, self.config)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    # ------------------------------------------------------------------ #
    # BFS                                                                #
    # ------------------------------------------------------------------ #

    async def crawl(self, url: str) -> CrawlResult:
        """Crawl the site at *url* within the configured budgets."""
        if self.fetcher is None:
            raise RuntimeError("Session not initialized")
        cfg = self.config
        base_url = normalize_base_url(url)
        state = _CrawlState(base_url=base_url)
        state.frontier.append(FrontierEntry(base_url, 0))
        self.logger.info("Crawl started: %s", base_url)

        while state.frontier and len(state.pages) < cfg.max_pages:
            if state.elapsed() > cfg.crawl_timeout:
                self.logger.info(
                    "Crawl budget of %.1f s exhausted after %d pages", cfg.crawl_timeout, len(state.pages)
                )
                break

            entry = state.frontier.popleft()
            canonical = canonicalize(entry.url)
            if canonical in state.visited:
                continue
            state.visited.add(canonical)

            if should_skip_url(canonical):
                state.outcomes.append(PageOutcome(canonical, entry.depth, skip_reason=SkipReason.SKIPPED_EXTENSION))
                continue

            outcome = await self._visit(canonical, entry.depth)
            state.outcomes.append(outcome)
            if outcome.page is None:
                continue
            state.pages.append(outcome.page)
            if outcome.final_url:
                state.visited.add(canonicalize(outcome.final_url))

            if entry.depth < cfg.max_depth:
                for link in outcome.page.internal_links:
                    if canonicalize(link) not in state.visited:
                        state.frontier.append(FrontierEntry(link, entry.depth + 1))

        result = CrawlResult(base_url=base_url, pages=state.pages, outcomes=state.outcomes)
        self.logger.info(
            "Static crawl finished: %d pages, %d skipped, %.2f s",
            len(result.pages),
            len(result.skipped),
            state.elapsed(),
        )
        if cfg.render_enabled:
            await self._apply_render_fallback(result)
        return result

    async def _visit(self, url: str, depth: int) -> PageOutcome:
        if self.fetcher is None:
            raise RuntimeError("Session not initialized")
        try:
            fetched = await self.fetcher.fetch_html(url)
        except FetchError as exc:
            self.logger.debug("Skipping %s: %s", url, exc.reason)
            return PageOutcome(url, depth, skip_reason=SkipReason.FETCH_FAILED, detail=exc.reason)
        try:
            page = parse_page(url, fetched.html, self.config.max_body_chars, final_url=fetched.url)
        except Exception as exc:  # malformed markup must not abort the crawl
            self.logger.debug("Parse failed for %s: %s", url, exc)
            return PageOutcome(url, depth, skip_reason=SkipReason.PARSE_FAILED, detail=str(exc))
        return PageOutcome(url, depth, page=page, final_url=fetched.url)

    async def fetch_homepage(self, base_url: str) -> Optional[FetchResult]:
        """Raw homepage HTML and headers for markup-level extractors, or None."""
        if self.fetcher is None:
            raise RuntimeError("Session not initialized")
        try:
            return await self.fetcher.fetch_html(canonicalize(normalize_base_url(base_url)))
        except FetchError as exc:
            self.logger.debug("Homepage re-fetch failed: %s", exc)
            return None

    # ------------------------------------------------------------------ #
    # JS-rendering fallback                                              #
    # ------------------------------------------------------------------ #

    async def _apply_render_fallback(self, result: CrawlResult) -> None:
        if self.renderer is None:
            raise RuntimeError("Session not initialized")
        cfg = self.config
        home_url = canonicalize(result.base_url)

        if not result.pages:
            page = await self.renderer.render(home_url)
            if page is not None:
                self.logger.info(
                    "Static fetch returned 0 pages, rendering recovered %d chars", len(page.body_text)
                )
                result.pages.append(page)
                result.rendered = True
            return

        total = result.total_text
        if total >= cfg.thin_content_threshold:
            return

        self.logger.info(
            "Thin content detected (%d chars across %d pages), trying rendering fallback",
            total,
            len(result.pages),
        )
        rendered_home = await self.renderer.render(home_url)
        if rendered_home is None or len(rendered_home.body_text) <= total:
            return
        self.logger.info("Rendering recovered %d chars (was %d)", len(rendered_home.body_text), total)
        result.pages[0] = rendered_home
        result.rendered = True

        key_urls = [
            link for link in rendered_home.internal_links if _KEY_PAGE_RE.search(urlsplit(link).path)
        ][: cfg.render_subpage_limit]
        rendered = await asyncio.gather(
            *(self.renderer.render(canonicalize(link)) for link in key_urls),
            return_exceptions=True,
        )
        for page in rendered:
            if not isinstance(page, CrawledPage) or len(page.body_text) <= cfg.render_subpage_min_chars:
                continue
            self._merge_page(result.pages, page)

    def _merge_page(self, pages: List[CrawledPage], page: CrawledPage) -> None:
        key = canonicalize(page.url)
        for idx, existing in enumerate(pages):
            if canonicalize(existing.url) == key:
                pages[idx] = page
                return
        if len(pages) < self.config.max_pages:
            pages.append(page)
