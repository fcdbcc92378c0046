# site_intel/extractors/images.py
"""Site images aggregated from the per-page image lists collected at parse time."""
from __future__ import annotations

import re
from typing import List, Sequence

from site_intel.crawler.models import CrawledPage, SiteImage

_ICON_RE = re.compile(r"favicon|sprite|spacer|pixel|\.ico(?:\?|$)", re.IGNORECASE)


def extract_images(pages: Sequence[CrawledPage], limit: int = 30) -> List[SiteImage]:
    """Unique images across pages in crawl order, icons and spacers left out."""
    images: List[SiteImage] = []
    seen: set[str] = set()
    for page in pages:
        for image in page.images:
            if image.url in seen or _ICON_RE.search(image.url):
                continue
            seen.add(image.url)
            images.append(image)
            if len(images) >= limit:
                return images
    return images
