# site_intel/extractors/_markup.py
"""Small BeautifulSoup helpers shared by the markup-level extractors."""
from __future__ import annotations

from typing import Optional

from bs4 import BeautifulSoup
from bs4.element import Tag


def raw_text(tag: Tag) -> str:
    """Unparsed contents of a ``<style>`` / ``<script>`` element."""
    return "".join(str(child) for child in tag.contents)


def attr(soup: BeautifulSoup, selector: str, name: str) -> Optional[str]:
    """Attribute *name* of the first element matching *selector*, or None."""
    tag = soup.select_one(selector)
    if tag is None:
        return None
    value = tag.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    return value if isinstance(value, str) else None


def first_text(soup: BeautifulSoup, selector: str) -> str:
    tag = soup.select_one(selector)
    return tag.get_text().strip() if tag is not None else ""
