# site_intel/report/json_report.py

"""
Генерация JSON-отчёта для проекта SiteIntel.

Сериализация объекта CrawledSite в файл.
"""
import json
from pathlib import Path

from site_intel.crawler.models import CrawledSite


def render_json(site: CrawledSite, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Сохраняет результат обхода site в формате JSON по указанному пути.

    :param site: объект CrawledSite с данными обхода
    :param output_path: путь к JSON-файлу
    :param pretty: отступ 2 пробела (иначе компактный вывод)
    :return: Path сохранённого файла

    Пример:
    ```python
    from site_intel.report.json_report import render_json
    report_path = render_json(site, 'reports/acme.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    # Запись в файл с отступами и Unicode
    with output.open('w', encoding='utf-8') as f:
        json.dump(site.to_dict(), f, ensure_ascii=False, indent=2 if pretty else None)

    return output
