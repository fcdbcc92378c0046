# site_intel/crawler/link_extractor.py
"""
Link resolution and URL canonicalization utilities for SiteIntel.

The canonical form is the dedup key of the crawl frontier: scheme and host
are lower-cased, trailing slashes are stripped from the path (an empty path
becomes ``/``), the fragment is dropped and the query string is kept.
"""
from __future__ import annotations

import re
from typing import Iterable, List, Optional, Tuple
from urllib.parse import urldefrag, urljoin, urlsplit

_NON_CRAWLABLE_RE = re.compile(r"^(#|javascript:|tel:|mailto:|data:|blob:)", re.IGNORECASE)
_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)

SKIP_EXTENSIONS = frozenset(
    {
        # documents
        "pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx", "csv",
        # images
        "jpg", "jpeg", "png", "gif", "svg", "webp", "bmp", "tif", "tiff", "ico",
        # media
        "mp4", "mov", "avi", "webm", "mp3", "wav", "ogg",
        # archives
        "zip", "rar", "gz", "tar", "7z",
        # web assets and data
        "css", "js", "xml", "json",
        # fonts
        "woff", "woff2", "ttf", "otf", "eot",
    }
)


def normalize_base_url(url: str) -> str:
    """Trim, default to ``https://`` and drop trailing slashes."""
    normalized = url.strip()
    if not _SCHEME_RE.match(normalized):
        normalized = "https://" + normalized
    return normalized.rstrip("/")


def origin_of(url: str) -> str:
    """Return ``scheme://host[:port]`` lower-cased."""
    parts = urlsplit(url)
    return f"{parts.scheme.lower()}://{parts.netloc.lower()}"


def resolve_url(href: str, origin: str) -> Optional[str]:
    """
    Resolve *href* against *origin*.

    ``mailto:`` links are returned verbatim so contact extraction can read
    them; other non-crawlable schemes and bare fragments give ``None``.
    The fragment of a resolved URL is stripped. Never raises.
    """
    if not isinstance(href, str):
        return None
    raw = href.strip()
    if not raw:
        return None
    if _NON_CRAWLABLE_RE.match(raw):
        if raw.lower().startswith("mailto:"):
            return raw
        return None
    try:
        resolved = urljoin(origin, raw)
        # urlsplit validates ports and IPv6 brackets
        parts = urlsplit(resolved)
        _ = parts.port
    except ValueError:
        return None
    if not parts.scheme or not parts.netloc:
        return None
    return urldefrag(resolved).url


def canonicalize(url: str) -> str:
    """Canonical dedup key for *url*. Idempotent."""
    try:
        parts = urlsplit(url.strip())
    except ValueError:
        return url.strip()
    if not parts.scheme or not parts.netloc:
        return url.strip()
    path = parts.path.rstrip("/") or "/"
    canonical = f"{parts.scheme.lower()}://{parts.netloc.lower()}{path}"
    if parts.query:
        canonical += f"?{parts.query}"
    return canonical


def should_skip_url(url: str) -> bool:
    """True if the path (query ignored) ends in a binary/asset extension."""
    try:
        path = urlsplit(url).path.lower()
    except ValueError:
        return True
    last = path.rsplit("/", 1)[-1]
    if "." not in last:
        return False
    return last.rsplit(".", 1)[-1] in SKIP_EXTENSIONS


def is_internal(url: str, origin: str) -> bool:
    """Same-origin check; ``mailto:`` links are never internal."""
    if url.lower().startswith("mailto:"):
        return False
    return origin_of(url) == origin.lower()


def classify_links(hrefs: Iterable[str], origin: str) -> Tuple[List[str], List[str]]:
    """
    Resolve *hrefs* against *origin* and split them into internal and
    external lists, deduplicated with first-seen order preserved.
    """
    internal: List[str] = []
    external: List[str] = []
    seen: set[str] = set()
    for href in hrefs:
        resolved = resolve_url(href, origin)
        if resolved is None or resolved in seen:
            continue
        seen.add(resolved)
        if is_internal(resolved, origin):
            internal.append(resolved)
        else:
            external.append(resolved)
    return internal, external
