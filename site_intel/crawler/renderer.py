# site_intel/crawler/renderer.py
"""
JS-rendering fallback through a readability proxy.

The proxy (``https://r.jina.ai/{url}`` by default) executes the page and
returns readable markdown. It is slow and rate-limited, so the crawler only
calls it when the static crawl produced no pages or too little text.
"""
from __future__ import annotations

import asyncio
from typing import Optional

from aiohttp import ClientError, ClientSession, ClientTimeout

from site_intel.config import CrawlerConfig
from site_intel.crawler.models import CrawledPage
from site_intel.errors import RenderError
from site_intel.logger import get_logger
from site_intel.parser.markdown_parser import parse_rendered_markdown

log = get_logger("renderer")

_PROXY_HEADERS = {"Accept": "text/markdown", "X-Return-Format": "markdown"}


class JsRenderer:
    """Fetches a URL through the rendering proxy and parses the markdown."""

    def __init__(self, session: ClientSession, config: CrawlerConfig) -> None:
        self.session = session
        self.config = config
        self._timeout = ClientTimeout(total=config.render_timeout)

    def proxy_url(self, url: str) -> str:
        return f"{self.config.render_proxy_url}{url}"

    async def fetch_markdown(self, url: str) -> str:
        """Return the proxy's markdown for *url*; raises RenderError."""
        try:
            async with self.session.get(
                self.proxy_url(url), headers=_PROXY_HEADERS, timeout=self._timeout
            ) as resp:
                if not 200 <= resp.status < 300:
                    raise RenderError(url, f"proxy returned HTTP {resp.status}")
                markdown = await resp.text(errors="replace")
        except asyncio.TimeoutError as exc:
            raise RenderError(url, "proxy timeout") from exc
        except ClientError as exc:
            raise RenderError(url, f"{type(exc).__name__}: {exc}") from exc
        except LookupError as exc:
            raise RenderError(url, f"undecodable body: {exc}") from exc
        if len(markdown) < self.config.render_min_chars:
            raise RenderError(url, f"minimal content ({len(markdown)} chars)")
        return markdown

    async def render(self, url: str) -> Optional[CrawledPage]:
        """Rendered page for *url*, or None when the proxy gave nothing usable."""
        log.info("Fetching via rendering proxy: %s", url)
        try:
            markdown = await self.fetch_markdown(url)
        except RenderError as exc:
            log.warning("Rendering fallback failed for %s", exc)
            return None
        return parse_rendered_markdown(url, markdown, self.config.max_body_chars)
