"""site_intel.crawler: fetching, link handling, BFS control and rendering fallback.

Only the data models are re-exported here; import
:class:`site_intel.crawler.crawler.SiteCrawler` from its module.
"""

from site_intel.crawler.models import (
    BrandInfo,
    ContactInfo,
    CrawledPage,
    CrawledSite,
    CrawlResult,
    ExtractedService,
    PageOutcome,
    SeoMeta,
    SiteImage,
    SkipReason,
)

__all__ = [
    "BrandInfo",
    "ContactInfo",
    "CrawledPage",
    "CrawledSite",
    "CrawlResult",
    "ExtractedService",
    "PageOutcome",
    "SeoMeta",
    "SiteImage",
    "SkipReason",
]
