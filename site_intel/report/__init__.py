# File: site_intel/report/__init__.py
"""site_intel.report: генерация отчётов (JSON и HTML) по результату обхода."""

from site_intel.report.html_report import render_html
from site_intel.report.json_report import render_json

__all__ = ["render_json", "render_html"]
