# site_intel/cli.py
"""
Точка входа для запуска краулера SiteIntel через командную строку.

Команды:
  crawl URL           Обойти сайт бизнеса и вывести/сохранить результат
  profile URL         Лёгкий профиль главной страницы конкурента
  config              Показать текущую конфигурацию в JSON

Опции группы:
  --config, -c        Путь к файлу конфигурации YAML/JSON
  --log-level         Уровень логирования
  --log-file          Путь к файлу логов (stdout, если не указан)
  --version, -v       Показать версию SiteIntel

Пример:
  site-intel crawl acmeplumbing.com --json reports/acme.json --pretty
"""
import asyncio
import json
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from site_intel import __version__
from site_intel.config import load_config
from site_intel.engine import crawl_website
from site_intel.extractors.competitor import profile_homepage
from site_intel.logger import init_logging
from site_intel.report.html_report import render_html
from site_intel.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteIntel, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON (по умолчанию configs/default.yaml).'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stdout, если не указан)'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file):
    """Группа команд SiteIntel CLI."""
    init_logging(level=log_level, log_file=str(log_file) if log_file else None)
    try:
        cfg = load_config(config_path)
    except (OSError, ValueError, TypeError, ValidationError) as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с Jinja2-шаблонами (report.html.j2)'
)
@click.option(
    '--pretty', is_flag=True,
    help='Преформатировать JSON-вывод (отступ 2)'
)
@click.option(
    '--max-pages', '-l', 'max_pages',
    type=click.IntRange(min=1),
    default=None,
    help='Макс. число страниц (override max_pages)'
)
@click.pass_context
def crawl(ctx, url, json_output, html_output, template_dir, pretty, max_pages):
    """Обойти сайт URL и сгенерировать отчёты."""
    cfg = ctx.obj['config']
    if max_pages is not None:
        cfg = cfg.model_copy(update={'max_pages': max_pages})
    click.echo(f'Crawling {url} (max {cfg.max_pages} pages)', err=True)

    site = asyncio.run(crawl_website(url, cfg))
    if site.is_empty:
        click.secho(f'No content could be fetched from {site.url}', fg='yellow', err=True)

    # без файлов вывода JSON печатается в stdout
    if not json_output and not html_output:
        click.echo(json.dumps(site.to_dict(), ensure_ascii=False, indent=2 if pretty else None))
        return

    if json_output:
        try:
            saved_json = render_json(site, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(site, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@cli.command('profile', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.pass_context
def profile(ctx, url):
    """Лёгкий профиль главной страницы конкурента (без обхода)."""
    cfg = ctx.obj['config']
    result = asyncio.run(profile_homepage(url, cfg))
    if result is None:
        print_error(f'Главная страница недоступна: {url}')
    click.echo(json.dumps(
        {
            'url': result.url,
            'word_count': result.word_count,
            'service_count': result.service_count,
            'has_schema': result.has_schema,
            'has_blog': result.has_blog,
            'services': [s.name for s in result.services],
            'phone': result.contact.phone,
            'email': result.contact.email,
        },
        ensure_ascii=False,
        indent=2,
    ))


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == '__main__':
    cli()
