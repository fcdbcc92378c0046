# File: site_intel/aggregator.py
"""site_intel.aggregator: сборка итогового CrawledSite из страниц и разметки главной.

Каждый экстрактор запускается изолированно: его ошибка превращается в значение
по умолчанию для своего поля и не прерывает сборку остальных.
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence, TypeVar

from bs4 import BeautifulSoup

from site_intel.config import CrawlerConfig
from site_intel.crawler.models import ContactInfo, CrawledPage, CrawledSite, FetchResult
from site_intel.extractors import (
    default_brand_info,
    default_seo_meta,
    detect_tech_stack,
    extract_about_content,
    extract_brand_info,
    extract_contact_info,
    extract_hours,
    extract_images,
    extract_seo_meta,
    extract_services,
    extract_testimonials,
)
from site_intel.logger import get_logger

log = get_logger("aggregator")

T = TypeVar("T")


def _guarded(name: str, func: Callable[[], T], default: Callable[[], T]) -> T:
    """Вызывает экстрактор; при исключении логирует и возвращает значение по умолчанию."""
    try:
        return func()
    except Exception as exc:  # one broken heuristic must not sink the whole result
        log.warning("Extractor %s failed: %s", name, exc)
        return default()


def empty_result(url: str) -> CrawledSite:
    """Пустой результат: страниц нет, все поля пустые или None."""
    return CrawledSite(url=url)


def assemble_site(
    base_url: str,
    pages: Sequence[CrawledPage],
    homepage: Optional[FetchResult] = None,
    config: Optional[CrawlerConfig] = None,
) -> CrawledSite:
    """Собирает CrawledSite из страниц обхода и (необязательно) сырого HTML главной."""
    if not pages:
        return empty_result(base_url)
    cfg = config or CrawlerConfig()
    pages = list(pages)
    first = pages[0]

    soup: Optional[BeautifulSoup] = None
    if homepage is not None:
        soup = _guarded("homepage-markup", lambda: BeautifulSoup(homepage.html, "html.parser"), lambda: None)

    contact = _guarded("contact", lambda: extract_contact_info(pages), ContactInfo)
    contact.hours = _guarded("hours", lambda: extract_hours(pages), lambda: None)

    if soup is not None:
        seo_meta = _guarded("seo", lambda: extract_seo_meta(soup), lambda: default_seo_meta(first))
        brand_info = _guarded(
            "brand", lambda: extract_brand_info(soup, base_url), lambda: default_brand_info(first)
        )
        tech_stack = _guarded("tech-stack", lambda: detect_tech_stack(soup, homepage.headers), list)
    else:
        seo_meta = default_seo_meta(first)
        brand_info = default_brand_info(first)
        tech_stack = []

    return CrawledSite(
        url=base_url,
        pages=pages,
        brand_info=brand_info,
        contact_info=contact,
        services=_guarded("services", lambda: extract_services(pages, cfg.max_services), list),
        about_content=_guarded("about", lambda: extract_about_content(pages), lambda: None),
        testimonials=_guarded("testimonials", lambda: extract_testimonials(pages), list),
        images=_guarded("images", lambda: extract_images(pages), list),
        tech_stack=tech_stack,
        seo_meta=seo_meta,
    )
