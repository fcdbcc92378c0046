"""site_intel.extractors: heuristic extractors over crawled pages and homepage markup."""

from site_intel.extractors.brand import default_brand_info, extract_brand_info, extract_primary_color
from site_intel.extractors.contact import extract_contact_info
from site_intel.extractors.content import extract_about_content, extract_hours, extract_testimonials
from site_intel.extractors.images import extract_images
from site_intel.extractors.seo import default_seo_meta, extract_seo_meta
from site_intel.extractors.services import extract_services
from site_intel.extractors.tech_stack import detect_tech_stack

__all__ = [
    "default_brand_info",
    "default_seo_meta",
    "detect_tech_stack",
    "extract_about_content",
    "extract_brand_info",
    "extract_contact_info",
    "extract_hours",
    "extract_images",
    "extract_primary_color",
    "extract_seo_meta",
    "extract_services",
    "extract_testimonials",
]
