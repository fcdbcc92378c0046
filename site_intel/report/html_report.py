# File: site_intel/report/html_report.py
"""site_intel.report.html_report: Генерация HTML-отчёта с помощью Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from site_intel.crawler.models import CrawledSite

TEMPLATE_NAME = "report.html.j2"
DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


def schema_type(schema: Any) -> str:
    """Фильтр шаблона: значение @type из JSON-LD или "-", если разметки нет."""
    if not schema:
        return "-"
    kind = schema.get("@type") if isinstance(schema, dict) else None
    if isinstance(kind, list):
        return ", ".join(str(k) for k in kind)
    return str(kind) if kind else "present"


def _environment(template_dir: Path) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    env.filters["schema_type"] = schema_type
    return env


def render_html(
    site: CrawledSite,
    template_dir: Optional[Union[Path, str]],
    output_path: Union[Path, str],
) -> Path:
    """Рендерит HTML-отчёт по результату обхода и сохраняет его.

    Args:
        site: объект CrawledSite.
        template_dir: директория с report.html.j2 (None: встроенный шаблон).
        output_path: путь к итоговому HTML-файлу.

    Returns:
        Path до сохранённого HTML-файла.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    template = _environment(Path(template_dir) if template_dir else DEFAULT_TEMPLATE_DIR).get_template(
        TEMPLATE_NAME
    )
    context: dict[str, Any] = {
        "site": site,
        "brand": site.brand_info,
        "contact": site.contact_info,
        "seo": site.seo_meta,
        "pages": site.pages,
        "services": site.services,
        "testimonials": site.testimonials,
        "images": site.images,
        "tech_stack": site.tech_stack,
    }
    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
