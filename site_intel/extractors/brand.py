# site_intel/extractors/brand.py
"""
Brand identity from the raw homepage markup: business name, tagline,
logo, favicon and primary colour.
"""
from __future__ import annotations

import re
from typing import Optional

from bs4 import BeautifulSoup

from site_intel.crawler.link_extractor import origin_of, resolve_url
from site_intel.crawler.models import BrandInfo, CrawledPage
from site_intel.extractors._markup import attr, first_text, raw_text

_TITLE_SPLIT_RE = re.compile(r"[|\-–—]")
_COLOR = r"#[0-9a-fA-F]{3,8}|rgba?\([^)]+\)"
_CSS_VAR_RE = re.compile(r"--(?:primary|brand|main|accent)[-\w]*\s*:\s*(" + _COLOR + ")")
_INLINE_BG_RE = re.compile(r"background(?:-color)?\s*:\s*(" + _COLOR + ")")
_RULE_BG_RE = re.compile(r"(?:header|nav|\.navbar|\.nav)\s*\{[^}]*background(?:-color)?\s*:\s*(#[0-9a-fA-F]{3,8})")

_TAGLINE_SELECTOR = "header h2, header p, .hero p, .hero h2, [class*='hero'] p"
_LOGO_SELECTOR = "header img, nav img, .logo img, [class*='logo'] img"
_FAVICON_SELECTOR = "link[rel~='icon']"
_COLORED_ELEMENTS = (
    "header",
    "nav",
    ".navbar",
    "[class*='header']",
    "a[class*='btn-primary']",
    "button[class*='primary']",
    "[class*='cta']",
)


def business_name_from_title(title: str) -> str:
    """First segment of a title split on | and dashes: "Acme Plumbing | Denver" gives "Acme Plumbing"."""
    return _TITLE_SPLIT_RE.split(title, maxsplit=1)[0].strip()


def extract_primary_color(soup: BeautifulSoup) -> Optional[str]:
    """
    Primary colour, first match wins:
    a ``--primary``/``--brand``/``--main``/``--accent*`` custom property,
    an inline background on header/nav/CTA elements,
    a background in a header/nav CSS rule.
    """
    css = "\n".join(raw_text(style) for style in soup.find_all("style"))

    match = _CSS_VAR_RE.search(css)
    if match:
        return match.group(1)

    for selector in _COLORED_ELEMENTS:
        style = attr(soup, selector, "style")
        if style:
            match = _INLINE_BG_RE.search(style)
            if match:
                return match.group(1)

    match = _RULE_BG_RE.search(css)
    return match.group(1) if match else None


def _absolute(url: Optional[str], origin: str) -> Optional[str]:
    if not url:
        return None
    return resolve_url(url, origin) or url


def extract_brand_info(soup: BeautifulSoup, base_url: str) -> BrandInfo:
    origin = origin_of(base_url)

    site_name = (attr(soup, "meta[property='og:site_name']", "content") or "").strip()
    business_name = site_name or business_name_from_title(first_text(soup, "title"))

    return BrandInfo(
        business_name=business_name,
        tagline=first_text(soup, _TAGLINE_SELECTOR) or None,
        primary_color=extract_primary_color(soup),
        logo_url=_absolute(attr(soup, _LOGO_SELECTOR, "src"), origin),
        favicon=_absolute(attr(soup, _FAVICON_SELECTOR, "href"), origin),
    )


def default_brand_info(homepage: Optional[CrawledPage]) -> BrandInfo:
    """Brand info when the homepage markup could not be re-fetched."""
    if homepage is None:
        return BrandInfo()
    return BrandInfo(business_name=business_name_from_title(homepage.title))
