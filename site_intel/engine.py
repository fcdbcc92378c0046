# File: site_intel/engine.py
"""site_intel.engine: точка входа для обхода сайта и синхронный фасад Engine."""

from __future__ import annotations

import asyncio
from typing import Optional

from aiohttp import ClientSession

from site_intel.aggregator import assemble_site, empty_result
from site_intel.config import CrawlerConfig, load_config
from site_intel.crawler.crawler import SiteCrawler
from site_intel.crawler.link_extractor import normalize_base_url
from site_intel.crawler.models import CrawledSite
from site_intel.logger import logger

__all__ = ["Engine", "crawl_website"]


async def crawl_website(
    url: str,
    config: Optional[CrawlerConfig] = None,
    *,
    session: Optional[ClientSession] = None,
) -> CrawledSite:
    """
    Обходит сайт бизнеса и возвращает CrawledSite.

    Тотальная функция: сетевые ошибки и ошибки разбора не пробрасываются.
    Если не получено ни одной страницы или весь собранный текст пуст
    (даже после рендеринга), возвращается пустой результат empty_result(url).
    """
    cfg = config or CrawlerConfig()
    base_url = normalize_base_url(url)
    try:
        async with SiteCrawler(cfg, session=session) as crawler:
            result = await crawler.crawl(base_url)
            if not result.pages or result.total_text == 0:
                logger.info("No content for %s, returning empty result", base_url)
                return empty_result(base_url)
            homepage = await crawler.fetch_homepage(base_url)
    except Exception as exc:  # crawl_website never raises for network or parse failures
        logger.error("Crawl of %s failed: %s", base_url, exc)
        return empty_result(base_url)

    for outcome in result.skipped:
        logger.debug("Skipped %s (%s) %s", outcome.url, outcome.skip_reason.value, outcome.detail)
    return assemble_site(base_url, result.pages, homepage, cfg)


class Engine:
    """Фасад для CLI и тестов: загрузка конфига и синхронный запуск обхода."""

    @staticmethod
    def load_config(path: Optional[str]) -> CrawlerConfig:
        """Загружает конфиг из YAML/JSON или использует значения по умолчанию."""
        return load_config(path)

    def __init__(self, config: Optional[CrawlerConfig] = None) -> None:
        self.config = config or CrawlerConfig()

    def crawl(self, url: str) -> CrawledSite:
        """Запускает обход в новом event loop и возвращает собранный результат."""
        logger.info("Starting crawl of %s…", url)
        return asyncio.run(crawl_website(url, self.config))
