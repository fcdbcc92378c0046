# site_intel/crawler/fetcher.py
"""
Fetcher module: single bounded-timeout HTML GET with content-type check.

There is no retry or backoff: a failed fetch means the page contributed
nothing, and the crawl controller moves on.
"""
from __future__ import annotations

import asyncio
from typing import Dict

from aiohttp import ClientError, ClientSession, ClientTimeout

from site_intel.config import CrawlerConfig
from site_intel.crawler.models import FetchResult
from site_intel.errors import FetchError
from site_intel.logger import get_logger

log = get_logger("fetcher")

_HTML_ACCEPT = "text/html,application/xhtml+xml"


class Fetcher:
    """Fetches HTML documents over a shared aiohttp session."""

    def __init__(self, session: ClientSession, config: CrawlerConfig) -> None:
        self.session = session
        self.config = config
        self._timeout = ClientTimeout(total=config.page_timeout)

    async def fetch_html(self, url: str) -> FetchResult:
        """
        GET *url* and return its HTML and headers.

        Raises FetchError on non-2xx status, a non-HTML content type,
        timeout or any transport error.
        """
        headers = {"User-Agent": self.config.user_agent, "Accept": _HTML_ACCEPT}
        try:
            async with self.session.get(
                url, headers=headers, timeout=self._timeout, allow_redirects=True
            ) as resp:
                if not 200 <= resp.status < 300:
                    raise FetchError(url, f"HTTP {resp.status}", status=resp.status)
                ctype = resp.headers.get("Content-Type", "").lower()
                if "text/html" not in ctype and "xhtml" not in ctype:
                    raise FetchError(url, f"not HTML: {ctype or 'no content-type'}", status=resp.status)
                html = await resp.text(errors="replace")
                captured: Dict[str, str] = {k.lower(): v for k, v in resp.headers.items()}
                return FetchResult(url=str(resp.url), html=html, headers=captured, status=resp.status)
        except asyncio.TimeoutError as exc:
            raise FetchError(url, "timeout") from exc
        except ClientError as exc:
            raise FetchError(url, f"{type(exc).__name__}: {exc}") from exc
        except (LookupError, UnicodeDecodeError) as exc:
            raise FetchError(url, f"undecodable body: {exc}") from exc
