# site_intel/extractors/contact.py
"""Phone, email and postal address extraction over crawled body text."""
from __future__ import annotations

import re
from typing import Optional, Sequence

from site_intel.crawler.models import ContactInfo, CrawledPage

PHONE_RE = re.compile(r"(?:\+1[-.\s]?)?(?:\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4})")
EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
ADDRESS_RE = re.compile(
    r"\d{1,5}\s+[\w\s.]+(?:Street|St|Avenue|Ave|Road|Rd|Boulevard|Blvd|Drive|Dr|Lane|Ln|Way|Court|Ct|Place|Pl)"
    r"\.?,?\s+[\w\s]+,?\s*[A-Z]{2}\s*\d{5}",
    re.IGNORECASE,
)


def _all_text(pages: Sequence[CrawledPage]) -> str:
    return " ".join(p.body_text for p in pages)


def find_phone(text: str) -> Optional[str]:
    match = PHONE_RE.search(text)
    return match.group(0).strip() if match else None


def find_address(text: str) -> Optional[str]:
    match = ADDRESS_RE.search(text)
    return match.group(0).strip() if match else None


def find_mailto(pages: Sequence[CrawledPage]) -> Optional[str]:
    """First ``mailto:`` link among the pages' external links, query stripped."""
    for page in pages:
        for link in page.external_links:
            if link.lower().startswith("mailto:"):
                address = link[len("mailto:"):].split("?", 1)[0].strip()
                if address:
                    return address
    return None


def find_email(pages: Sequence[CrawledPage], text: Optional[str] = None) -> Optional[str]:
    """A ``mailto:`` address wins over an address-looking string in the text."""
    mailto = find_mailto(pages)
    if mailto:
        return mailto
    match = EMAIL_RE.search(_all_text(pages) if text is None else text)
    return match.group(0) if match else None


def extract_contact_info(pages: Sequence[CrawledPage]) -> ContactInfo:
    """Contact details from all pages; hours are filled in by the assembler."""
    text = _all_text(pages)
    return ContactInfo(
        phone=find_phone(text),
        email=find_email(pages, text),
        address=find_address(text),
    )
