# File: tests/test_cli.py
"""Тесты для CLI (`site_intel/cli.py`) с использованием click.testing.CliRunner.
Проверяют команды `crawl`, `profile`, `config`, `--version`, а также обработку ошибок.
"""
import importlib
import json

import pytest
from click.testing import CliRunner

from site_intel.cli import cli
from site_intel.crawler.models import ContactInfo, CrawledPage, CrawledSite, ExtractedService
from site_intel.extractors.competitor import HomepageProfile

# site_intel/__init__ экспортирует группу cli под тем же именем, что и модуль
cli_module = importlib.import_module("site_intel.cli")


def _json_from(output: str):
    """stderr-сообщения CLI идут до JSON; берём всё с первой фигурной скобки."""
    return json.loads(output[output.index("{"):])


@pytest.fixture()
def crawl_calls(monkeypatch):
    """Патчим crawl_website: возвращаем фиктивный сайт без сети и запоминаем вызовы."""
    calls = []

    async def fake_crawl(url, config=None, **kwargs):
        calls.append((url, config))
        page = CrawledPage(
            url="https://acme.com/",
            title="Acme Plumbing",
            headings=("Drain Cleaning",),
            body_text="Drain Cleaning",
            word_count=2,
            internal_links=(),
            external_links=(),
        )
        return CrawledSite(
            url="https://acme.com",
            pages=[page],
            services=[ExtractedService("Drain Cleaning", "", "https://acme.com/")],
        )

    monkeypatch.setattr(cli_module, "crawl_website", fake_crawl)
    return calls


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Без configs/default.yaml в рабочей папке используются значения по умолчанию."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "SiteIntel" in result.output


def test_show_config(tmp_path):
    cfg_file = tmp_path / "crawl.yaml"
    cfg_file.write_text("max_pages: 5\nrender_enabled: false\n", encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(cli, ["--log-level", "WARNING", "--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    data = _json_from(result.output)
    assert data["max_pages"] == 5
    assert data["render_enabled"] is False
    assert data["render_proxy_url"] == "https://r.jina.ai/"


def test_invalid_config_exits_with_error(tmp_path):
    cfg_file = tmp_path / "bad.yaml"
    cfg_file.write_text("max_pagez: 5\n", encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 1
    assert "Ошибка загрузки конфигурации" in result.output


def test_crawl_stdout(crawl_calls):
    runner = CliRunner()
    result = runner.invoke(cli, ["--log-level", "WARNING", "crawl", "acme.com", "--max-pages", "3"])
    assert result.exit_code == 0
    output = _json_from(result.output)
    assert output["url"] == "https://acme.com"
    assert output["services"][0]["name"] == "Drain Cleaning"
    assert output["pages"][0]["headings"] == ["Drain Cleaning"]

    url, cfg = crawl_calls[0]
    assert url == "acme.com"
    assert cfg.max_pages == 3


def test_crawl_json_file(tmp_path, crawl_calls):
    out = tmp_path / "reports" / "acme.json"
    runner = CliRunner()
    result = runner.invoke(cli, ["--log-level", "WARNING", "crawl", "acme.com", "--json", str(out), "--pretty"])
    assert result.exit_code == 0
    assert out.exists()
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["pages"][0]["title"] == "Acme Plumbing"
    assert "JSON report" in result.output


def test_crawl_html_file(tmp_path, crawl_calls):
    out = tmp_path / "acme.html"
    runner = CliRunner()
    result = runner.invoke(cli, ["--log-level", "WARNING", "crawl", "acme.com", "--html", str(out)])
    assert result.exit_code == 0
    assert "Drain Cleaning" in out.read_text(encoding="utf-8")


def test_crawl_empty_site_warns(monkeypatch):
    async def nothing(url, config=None, **kwargs):
        return CrawledSite(url="https://down.example")

    monkeypatch.setattr(cli_module, "crawl_website", nothing)

    runner = CliRunner()
    result = runner.invoke(cli, ["--log-level", "WARNING", "crawl", "down.example"])
    assert result.exit_code == 0
    assert "No content could be fetched" in result.output
    assert _json_from(result.output)["pages"] == []


def test_profile(monkeypatch):
    async def fake_profile(url, config=None, session=None):
        return HomepageProfile(
            url="https://rival.com/",
            word_count=420,
            service_count=6,
            has_schema=True,
            has_blog=False,
            services=[ExtractedService("Roof Repair", "", "https://rival.com/")],
            contact=ContactInfo(phone="303-555-0100"),
        )

    monkeypatch.setattr(cli_module, "profile_homepage", fake_profile)

    runner = CliRunner()
    result = runner.invoke(cli, ["--log-level", "WARNING", "profile", "rival.com"])
    assert result.exit_code == 0
    data = _json_from(result.output)
    assert data["service_count"] == 6
    assert data["services"] == ["Roof Repair"]
    assert data["phone"] == "303-555-0100"
    assert data["email"] is None


def test_profile_unreachable(monkeypatch):
    async def unreachable(url, config=None, session=None):
        return None

    monkeypatch.setattr(cli_module, "profile_homepage", unreachable)

    runner = CliRunner()
    result = runner.invoke(cli, ["profile", "rival.com"])
    assert result.exit_code == 1
    assert "Главная страница недоступна" in result.output
