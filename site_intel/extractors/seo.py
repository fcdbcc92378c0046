# site_intel/extractors/seo.py
"""SEO meta: title, description, og:image and JSON-LD schema."""
from __future__ import annotations

import json
from typing import Any, Iterable, Optional

from bs4 import BeautifulSoup

from site_intel.crawler.models import CrawledPage, SeoMeta
from site_intel.extractors._markup import attr, first_text, raw_text
from site_intel.logger import get_logger

log = get_logger("extractors")


def _schema_types(schema: Any) -> Iterable[str]:
    if not isinstance(schema, dict):
        return ()
    kind = schema.get("@type")
    if isinstance(kind, str):
        return (kind,)
    if isinstance(kind, list):
        return tuple(k for k in kind if isinstance(k, str))
    return ()


def _is_business(schema: Any) -> bool:
    return any("Business" in kind for kind in _schema_types(schema))


def extract_json_ld(soup: BeautifulSoup) -> Any:
    """
    First parseable JSON-LD block, unless a later one is a *Business type.
    Malformed blocks are skipped.
    """
    first: Any = None
    for script in soup.select("script[type='application/ld+json']"):
        try:
            parsed = json.loads(raw_text(script))
        except ValueError:
            log.debug("Skipping malformed JSON-LD block")
            continue
        if _is_business(parsed):
            return parsed
        if first is None:
            first = parsed
    return first


def extract_seo_meta(soup: BeautifulSoup) -> SeoMeta:
    description: Optional[str] = attr(soup, "meta[name='description']", "content")
    return SeoMeta(
        title=first_text(soup, "title"),
        description=(description or "").strip(),
        og_image=attr(soup, "meta[property='og:image']", "content"),
        schema=extract_json_ld(soup),
    )


def default_seo_meta(homepage: Optional[CrawledPage]) -> SeoMeta:
    return SeoMeta(title=homepage.title if homepage else "")
