# site_intel/__init__.py
"""
SiteIntel package initializer.
Defines package version and exposes the crawl entry point and CLI.
"""
__version__ = "0.1.0"

from site_intel.engine import Engine, crawl_website
from site_intel.extractors.contact import extract_contact_info
from site_intel.extractors.services import extract_services

from .cli import cli  # экспорт для pytest

__all__ = ["__version__", "Engine", "cli", "crawl_website", "extract_contact_info", "extract_services"]
