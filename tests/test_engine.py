# File: tests/test_engine.py
# End-to-end crawl_website tests against local aiohttp sites
from __future__ import annotations

import json

import pytest
from aiohttp import web

import site_intel.aggregator as aggregator_module
import site_intel.engine as engine_module
from site_intel.aggregator import assemble_site, empty_result
from site_intel.crawler.crawler import SiteCrawler
from site_intel.crawler.models import CrawledSite, FetchResult
from site_intel.engine import Engine, crawl_website
from site_intel.report import render_html, render_json
from site_intel.report.html_report import schema_type

HOME = """
<html>
<head>
  <title>Acme Plumbing | Denver</title>
  <meta name="description" content="Denver plumbing since 1990.">
  <meta name="generator" content="WordPress 6.4">
  <script type="application/ld+json">{"@type": "Plumber", "name": "Acme Plumbing"}</script>
</head>
<body>
  <nav><a href="/privacy">Privacy</a></nav>
  <header><p>Fast, friendly plumbers</p></header>
  <main>
    <h1>Acme Plumbing</h1>
    <p>Call (303) 555-0123 today.</p>
    <h2>Our Services</h2>
    <h3>Drain Cleaning</h3>
    <p>We clear clogged drains fast.</p>
    <img src="/img/van.jpg" alt="Our van">
    <a href="/services">All services</a>
    <a href="mailto:info@acme.com">Email us</a>
  </main>
</body>
</html>
"""

SERVICES = """
<html><head><title>Services</title></head>
<body><main>
  <h1>Services</h1>
  <h2>Water Heater Repair</h2>
  <p>We repair tanks of every size.</p>
  <a href="/">Home</a>
</main></body></html>
"""


def business_app() -> web.Application:
    async def home(request: web.Request) -> web.Response:
        resp = web.Response(text=HOME, content_type="text/html")
        resp.headers["Server"] = "nginx"
        return resp

    async def services(request: web.Request) -> web.Response:
        return web.Response(text=SERVICES, content_type="text/html")

    app = web.Application()
    app.router.add_get("/", home)
    app.router.add_get("/services", services)
    return app


@pytest.mark.asyncio()
async def test_crawl_website_assembles_site(serve, static_config):
    base = await serve(business_app())

    site = await crawl_website(base, static_config)

    assert site.url == base
    assert [p.url for p in site.pages] == [f"{base}/", f"{base}/services"]
    assert site.brand_info.business_name == "Acme Plumbing"
    assert site.brand_info.tagline == "Fast, friendly plumbers"
    assert site.contact_info.phone == "(303) 555-0123"
    assert site.contact_info.email == "info@acme.com"
    assert [s.name for s in site.services] == ["Water Heater Repair", "Drain Cleaning"]
    assert site.services[0].page_url == f"{base}/services"
    assert site.tech_stack == ["WordPress", "Nginx"]
    assert site.seo_meta.description == "Denver plumbing since 1990."
    assert site.seo_meta.schema == {"@type": "Plumber", "name": "Acme Plumbing"}
    assert [i.url for i in site.images] == [f"{base}/img/van.jpg"]
    # nav links are never followed
    assert all("privacy" not in p.url for p in site.pages)


@pytest.mark.asyncio()
async def test_crawl_website_server_error_gives_empty_result(serve, static_config):
    async def broken(request: web.Request) -> web.Response:
        raise web.HTTPInternalServerError()

    app = web.Application()
    app.router.add_get("/", broken)
    base = await serve(app)

    site = await crawl_website(base, static_config)

    assert site == empty_result(base)
    assert site.is_empty


@pytest.mark.asyncio()
async def test_empty_body_with_failing_proxy_gives_empty_result(serve, static_config):
    async def blank(request: web.Request) -> web.Response:
        return web.Response(text="<html><body></body></html>", content_type="text/html")

    async def proxy(request: web.Request) -> web.Response:
        raise web.HTTPNotFound()

    site_app = web.Application()
    site_app.router.add_get("/", blank)
    proxy_app = web.Application()
    proxy_app.router.add_get("/{tail:.*}", proxy)
    base = await serve(site_app)
    proxy_url = await serve(proxy_app)

    cfg = static_config.model_copy(update={"render_enabled": True, "render_proxy_url": f"{proxy_url}/"})
    site = await crawl_website(base, cfg)

    assert site == empty_result(base)


@pytest.mark.asyncio()
async def test_unreachable_host_does_not_raise(static_config, unused_tcp_port):
    base = f"http://127.0.0.1:{unused_tcp_port}"

    site = await crawl_website(base, static_config)

    assert site == empty_result(base)


@pytest.mark.asyncio()
async def test_unexpected_crawler_error_is_contained(monkeypatch, static_config):
    async def boom(self, url):
        raise ValueError("unexpected")

    monkeypatch.setattr(SiteCrawler, "crawl", boom)

    site = await crawl_website("acme.com/", static_config)

    assert site == empty_result("https://acme.com")


def test_engine_runs_crawl_synchronously(monkeypatch, static_config):
    seen = {}

    async def fake_crawl(url, config=None, **kwargs):
        seen["args"] = (url, config)
        return CrawledSite(url=url)

    monkeypatch.setattr(engine_module, "crawl_website", fake_crawl)

    site = Engine(static_config).crawl("https://acme.com")

    assert site.url == "https://acme.com"
    assert seen["args"] == ("https://acme.com", static_config)


# --------------------------------------------------------------------------- #
#                                Aggregator                                   #
# --------------------------------------------------------------------------- #


def test_failing_extractor_keeps_other_fields(monkeypatch, make_page):
    def explode(*args, **kwargs):
        raise RuntimeError("broken heuristic")

    monkeypatch.setattr(aggregator_module, "extract_services", explode)
    page = make_page(
        "https://acme.com/services",
        title="Acme | Services",
        headings=["Drain Cleaning"],
        body_text="Drain Cleaning. Call 303-555-0123.",
    )

    site = assemble_site("https://acme.com", [page])

    assert site.services == []
    assert site.contact_info.phone == "303-555-0123"
    assert site.brand_info.business_name == "Acme"
    assert site.seo_meta.title == "Acme | Services"
    assert site.tech_stack == []


def test_assemble_site_uses_homepage_markup(make_page):
    page = make_page(title="Acme Plumbing", body_text="Welcome")
    homepage = FetchResult(
        url="https://acme.com/",
        html='<head><meta property="og:site_name" content="Acme Co"></head>',
        headers={"server": "cloudflare"},
    )

    site = assemble_site("https://acme.com", [page], homepage)

    assert site.brand_info.business_name == "Acme Co"
    assert site.tech_stack == ["Cloudflare"]
    assert site.seo_meta.title == ""


def test_assemble_site_without_pages():
    assert assemble_site("https://acme.com", []) == empty_result("https://acme.com")


# --------------------------------------------------------------------------- #
#                                  Reports                                    #
# --------------------------------------------------------------------------- #


def test_reports_are_written(tmp_path, make_page):
    site = assemble_site(
        "https://acme.com",
        [make_page(title="Acme <Plumbing>", headings=["Our Services", "Drain Cleaning"], body_text="Drain Cleaning We clear drains.")],
    )

    json_path = render_json(site, tmp_path / "out" / "acme.json", pretty=False)
    html_path = render_html(site, None, tmp_path / "out" / "acme.html")

    data = json.loads(json_path.read_text(encoding="utf-8"))
    assert data["url"] == "https://acme.com"
    assert data["pages"][0]["headings"] == ["Our Services", "Drain Cleaning"]
    assert data["services"][0]["name"] == "Drain Cleaning"

    html = html_path.read_text(encoding="utf-8")
    assert "Drain Cleaning" in html
    assert "Acme &lt;Plumbing&gt;" in html


def test_html_report_for_empty_site(tmp_path):
    html = render_html(empty_result("https://acme.com"), None, tmp_path / "empty.html").read_text(encoding="utf-8")
    assert "No pages could be fetched or rendered." in html


@pytest.mark.parametrize(
    "schema,shown",
    [(None, "-"), ({"@type": "Plumber"}, "Plumber"), ({"@type": ["Plumber", "LocalBusiness"]}, "Plumber, LocalBusiness"), ([{"@type": "X"}], "present")],
)
def test_schema_type_filter(schema, shown):
    assert schema_type(schema) == shown
