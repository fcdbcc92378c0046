# File: tests/conftest.py
from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Optional, Sequence

import pytest
import pytest_asyncio
from aiohttp import web

from site_intel.config import CrawlerConfig
from site_intel.crawler.models import CrawledPage


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


@pytest.fixture()
def make_page() -> Callable[..., CrawledPage]:
    """
    Factory for CrawledPage instances used by the pure extractor tests.
    """

    def _make(
        url: str = "https://acme.com/",
        *,
        title: str = "",
        headings: Sequence[str] = (),
        body_text: str = "",
        internal_links: Sequence[str] = (),
        external_links: Sequence[str] = (),
    ) -> CrawledPage:
        return CrawledPage(
            url=url,
            title=title,
            headings=tuple(headings),
            body_text=body_text,
            word_count=len(body_text.split()),
            internal_links=tuple(internal_links),
            external_links=tuple(external_links),
        )

    return _make


@pytest.fixture()
def static_config() -> CrawlerConfig:
    """
    Small budgets and no rendering proxy: tests never leave localhost.
    """
    return CrawlerConfig(
        max_pages=20,
        max_depth=2,
        crawl_timeout=10.0,
        page_timeout=2.0,
        render_timeout=2.0,
        render_enabled=False,
    )


@pytest_asyncio.fixture
async def serve(unused_tcp_port_factory) -> AsyncIterator[Callable[[web.Application], Awaitable[str]]]:
    """Start aiohttp apps on free ports, yield a starter returning the base URL, clean up after."""
    runners: list[web.AppRunner] = []

    async def _serve(app: web.Application, port: Optional[int] = None) -> str:
        runner = web.AppRunner(app)
        await runner.setup()
        runners.append(runner)
        port = port or unused_tcp_port_factory()
        site = web.TCPSite(runner, "127.0.0.1", port)
        await site.start()
        return f"http://127.0.0.1:{port}"

    yield _serve
    for runner in runners:
        await runner.cleanup()
