# site_intel/extractors/tech_stack.py
"""
Platform and library fingerprinting of the homepage.

Signals, unioned in this order: the generator meta tag, ``<script src>``
substrings, response headers and framework-specific HTML attributes.
"""
from __future__ import annotations

import re
from typing import Dict, List, Mapping, Optional, Tuple

from bs4 import BeautifulSoup
from bs4.element import Tag

from site_intel.extractors._markup import attr

_GENERATORS: Tuple[Tuple[str, str], ...] = (
    ("wordpress", "WordPress"),
    ("wix", "Wix"),
    ("squarespace", "Squarespace"),
    ("drupal", "Drupal"),
    ("joomla", "Joomla"),
    ("shopify", "Shopify"),
)

_SCRIPT_FINGERPRINTS: Tuple[Tuple[re.Pattern[str], str], ...] = tuple(
    (re.compile(pattern, re.IGNORECASE), name)
    for pattern, name in (
        (r"wp-content|wp-includes", "WordPress"),
        (r"jquery", "jQuery"),
        (r"react", "React"),
        (r"angular", "Angular"),
        (r"vue", "Vue"),
        (r"/_next/|next(?:\.min)?\.js|nextjs", "Next.js"),
        (r"gatsby", "Gatsby"),
        (r"wix\.com|wixstatic", "Wix"),
        (r"squarespace", "Squarespace"),
        (r"shopify", "Shopify"),
        (r"webflow", "Webflow"),
        (r"godaddy", "GoDaddy"),
        (r"google.*tag.*manager|gtm\.js", "Google Tag Manager"),
        (r"google.*analytics|ga\.js|gtag", "Google Analytics"),
    )
)

_SERVER_FINGERPRINTS: Tuple[Tuple[str, str], ...] = (
    ("nginx", "Nginx"),
    ("apache", "Apache"),
    ("cloudflare", "Cloudflare"),
)


def _from_generator(generator: str) -> Optional[str]:
    lowered = generator.lower()
    for needle, name in _GENERATORS:
        if needle in lowered:
            return name
    return generator.split()[0] if generator.split() else None


def _has_vue_attrs(tag: Tag) -> bool:
    return "v-cloak" in tag.attrs or any(name.startswith("data-v-") for name in tag.attrs)


def detect_tech_stack(soup: BeautifulSoup, headers: Optional[Mapping[str, str]] = None) -> List[str]:
    """Recognized platforms in first-detected order, without duplicates."""
    stack: Dict[str, None] = {}

    generator = (attr(soup, "meta[name='generator']", "content") or "").strip()
    if generator:
        name = _from_generator(generator)
        if name:
            stack[name] = None

    scripts = " ".join(
        src for src in (tag.get("src") for tag in soup.find_all("script", src=True)) if isinstance(src, str)
    )
    for pattern, name in _SCRIPT_FINGERPRINTS:
        if pattern.search(scripts):
            stack[name] = None
    if soup.find("script", id="__NEXT_DATA__") is not None:
        stack["Next.js"] = None

    if headers:
        lowered = {k.lower(): v for k, v in headers.items()}
        server = f"{lowered.get('server', '')} {lowered.get('x-powered-by', '')}".lower()
        for needle, name in _SERVER_FINGERPRINTS:
            if needle in server:
                stack[name] = None
        if "x-shopify-stage" in lowered:
            stack["Shopify"] = None
        if "x-wix-request-id" in lowered:
            stack["Wix"] = None

    if soup.select_one("[data-reactroot], [data-reactid]") is not None:
        stack["React"] = None
    if soup.select_one("[ng-app], [ng-controller]") is not None:
        stack["Angular"] = None
    if soup.find(_has_vue_attrs) is not None:
        stack["Vue"] = None

    return list(stack)
