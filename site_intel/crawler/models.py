# site_intel/crawler/models.py
"""
Data models for the SiteIntel crawler.

``CrawledPage`` is immutable once parsed; a JS-rendered version replaces a
page instead of mutating it. ``CrawledSite`` is the aggregate handed to the
caller, with :func:`site_intel.aggregator.empty_result` as the sentinel for
"no data available".
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True, slots=True)
class SiteImage:
    """An ``<img>`` found on a page: absolute URL, alt text and nearest heading."""

    url: str
    alt: str = ""
    context: str = ""


@dataclass(frozen=True, slots=True)
class CrawledPage:
    """One fetched and parsed document."""

    url: str
    title: str
    headings: Tuple[str, ...]
    body_text: str
    word_count: int
    internal_links: Tuple[str, ...]
    external_links: Tuple[str, ...]
    images: Tuple[SiteImage, ...] = ()


@dataclass(frozen=True, slots=True)
class ExtractedService:
    name: str
    description: str
    page_url: Optional[str]


@dataclass(slots=True)
class BrandInfo:
    business_name: str = ""
    tagline: Optional[str] = None
    primary_color: Optional[str] = None
    logo_url: Optional[str] = None
    favicon: Optional[str] = None


@dataclass(slots=True)
class ContactInfo:
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    hours: Optional[str] = None


@dataclass(slots=True)
class SeoMeta:
    title: str = ""
    description: str = ""
    og_image: Optional[str] = None
    schema: Any = None


@dataclass(slots=True)
class CrawledSite:
    """Aggregate result for one business URL."""

    url: str
    pages: List[CrawledPage] = field(default_factory=list)
    brand_info: BrandInfo = field(default_factory=BrandInfo)
    contact_info: ContactInfo = field(default_factory=ContactInfo)
    services: List[ExtractedService] = field(default_factory=list)
    about_content: Optional[str] = None
    testimonials: List[str] = field(default_factory=list)
    images: List[SiteImage] = field(default_factory=list)
    tech_stack: List[str] = field(default_factory=list)
    seo_meta: SeoMeta = field(default_factory=SeoMeta)

    @property
    def is_empty(self) -> bool:
        """True when no page could be fetched or rendered."""
        return not self.pages

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serializable representation (tuples become lists)."""
        data = asdict(self)
        for page in data["pages"]:
            for key in ("headings", "internal_links", "external_links", "images"):
                page[key] = list(page[key])
        return data


@dataclass(frozen=True, slots=True)
class FetchResult:
    """Raw HTML plus the response headers (lower-cased names)."""

    url: str
    html: str
    headers: Dict[str, str]
    status: int = 200


@dataclass(frozen=True, slots=True)
class FrontierEntry:
    url: str
    depth: int


class SkipReason(str, Enum):
    SKIPPED_EXTENSION = "skipped_extension"
    FETCH_FAILED = "fetch_failed"
    PARSE_FAILED = "parse_failed"


@dataclass(frozen=True, slots=True)
class PageOutcome:
    """What happened to one dequeued URL: a page or the reason it was skipped."""

    url: str
    depth: int
    page: Optional[CrawledPage] = None
    skip_reason: Optional[SkipReason] = None
    detail: str = ""
    # where the fetch ended after redirects; empty when it was not fetched
    final_url: str = ""

    @property
    def ok(self) -> bool:
        return self.page is not None


@dataclass(slots=True)
class CrawlResult:
    """Output of one BFS crawl: pages in crawl order plus per-URL outcomes."""

    base_url: str
    pages: List[CrawledPage] = field(default_factory=list)
    outcomes: List[PageOutcome] = field(default_factory=list)
    rendered: bool = False

    @property
    def skipped(self) -> List[PageOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def total_text(self) -> int:
        return sum(len(p.body_text) for p in self.pages)
