# site_intel/errors.py
"""
Exception hierarchy for SiteIntel.

Transport and rendering errors are raised by the low-level fetch helpers and
caught by the crawl controller, which turns them into per-URL outcomes.
Nothing here escapes :func:`site_intel.engine.crawl_website`.
"""
from __future__ import annotations

from typing import Optional


class SiteIntelError(Exception):
    """Base class for all SiteIntel errors."""


class FetchError(SiteIntelError):
    """A static page fetch failed (status, content type, timeout or transport)."""

    def __init__(self, url: str, reason: str, status: Optional[int] = None) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason
        self.status = status


class RenderError(SiteIntelError):
    """The rendering proxy returned nothing usable for a URL."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason
