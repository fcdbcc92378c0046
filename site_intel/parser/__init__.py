"""site_intel.parser: HTML and rendered-markdown page parsers."""

from site_intel.parser.html_parser import parse_page
from site_intel.parser.markdown_parser import parse_rendered_markdown

__all__ = ["parse_page", "parse_rendered_markdown"]
