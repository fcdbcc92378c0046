# File: tests/test_competitor.py
from __future__ import annotations

import pytest
from aiohttp import web
from bs4 import BeautifulSoup

from site_intel.extractors.competitor import build_profile, count_service_headings, profile_homepage

RIVAL = """
<html><head>
<title>Rival Roofing</title>
<script type="application/ld+json">{"@type": "RoofingContractor"}</script>
</head><body>
<main>
  <h2>Our Services</h2>
  <h3>Roof Repair</h3>
  <p>Leaks fixed in a day.</p>
  <h3>Gutter Installation</h3>
  <p>Seamless gutters. Call 720-555-0199.</p>
  <h2>About Rival</h2>
  <h2>FAQ</h2>
  <a href="/blog/winter-roofs">Winter tips</a>
</main>
</body></html>
"""


def test_count_service_headings():
    soup = BeautifulSoup(RIVAL, "html.parser")
    # "Our Services", "Roof Repair", "Gutter Installation"; about and FAQ are excluded
    assert count_service_headings(soup) == 3


def test_build_profile():
    profile = build_profile("https://rival.com/", RIVAL)

    assert profile.has_schema is True
    assert profile.has_blog is True
    assert profile.service_count == 3
    # only the heading directly under "Our Services" counts as a named service
    assert [s.name for s in profile.services] == ["Roof Repair"]
    assert profile.contact.phone == "720-555-0199"
    assert profile.word_count == len(
        "Our Services Roof Repair Leaks fixed in a day. Gutter Installation Seamless gutters. "
        "Call 720-555-0199. About Rival FAQ Winter tips".split()
    )


def test_build_profile_plain_page():
    profile = build_profile("https://plain.com/", "<html><body><p>Hello there</p></body></html>")
    assert profile.has_schema is False
    assert profile.has_blog is False
    assert profile.service_count == 0
    assert profile.services == []
    assert profile.word_count == 2


@pytest.mark.asyncio()
async def test_profile_homepage(serve, static_config):
    async def home(request: web.Request) -> web.Response:
        return web.Response(text=RIVAL, content_type="text/html")

    app = web.Application()
    app.router.add_get("/", home)
    base = await serve(app)

    profile = await profile_homepage(base, static_config)

    assert profile is not None
    assert profile.url == f"{base}/"
    assert profile.service_count == 3


@pytest.mark.asyncio()
async def test_profile_homepage_unreachable(static_config, unused_tcp_port):
    assert await profile_homepage(f"http://127.0.0.1:{unused_tcp_port}", static_config) is None
