"""Tests for the dev server routes (pages, 404, metadata API)."""

import pytest

from docsite.config import Config
from docsite.web.server import WebServer


def _app(config: Config):
    server = WebServer(config)
    server.refresh()
    return server.app


@pytest.fixture
def client(aiohttp_client, config):
    """aiohttp test client wired to a dev server for the fixture site."""
    return aiohttp_client(_app(config))


async def test_home_page(client):
    c = await client
    resp = await c.get("/")

    assert resp.status == 200
    assert resp.content_type == "text/html"
    html = await resp.text()
    assert 'class="recent-articles"' in html
    assert 'data-name="Temporal"' in html
    assert 'data-name="BatchQueue"' not in html  # recent_plugins_count is 2
    assert 'href="https://github.com/example/plugins"' in html


async def test_article_page_has_nav(client):
    c = await client
    html = await (await c.get("/articles/first-post")).text()

    assert 'class="article-nav"' in html
    assert "Next: Second post" in html
    assert "Previous:" not in html


async def test_unknown_route_is_404(client):
    c = await client
    resp = await c.get("/does/not/exist")

    assert resp.status == 404
    html = await resp.text()
    assert "/does/not/exist" in html
    assert "Test Docs" in html


async def test_plugins_api(client):
    c = await client

    plugins = await (await c.get("/api/plugins")).json()
    recent = await (await c.get("/api/plugins/recent")).json()

    assert [p["name"] for p in plugins] == ["BatchQueue", "RuleFlow", "Temporal"]
    assert [p["name"] for p in recent] == ["Temporal", "RuleFlow"]
    assert recent[0]["path"] == "/Temporal/"


async def test_articles_api(client):
    c = await client

    articles = await (await c.get("/api/articles")).json()
    recent = await (await c.get("/api/articles/recent")).json()

    assert [a["slug"] for a in articles] == ["second-post", "first-post"]
    assert recent == articles


async def test_base_path(aiohttp_client, site_root, monkeypatch):
    monkeypatch.setenv("DOCSITE_BASE", "/docs-test/")
    c = await aiohttp_client(_app(Config.load(site_root / "config")))

    resp = await c.get("/docs-test/")
    assert resp.status == 200
    html = await resp.text()
    assert 'href="/docs-test/articles/second-post"' in html

    nav = await (await c.get("/docs-test/articles/second-post")).text()
    assert 'href="/docs-test/articles/"' in nav
    assert 'href="/docs-test/articles/first-post"' in nav


async def test_plugins_index_page(client):
    c = await client
    resp = await c.get("/plugins/")

    assert resp.status == 200
    html = await resp.text()
    assert 'class="plugins-index"' in html
    assert 'data-name="BatchQueue"' in html


async def test_article_page_with_html_suffix(client):
    c = await client
    html = await (await c.get("/articles/first-post.html")).text()

    assert "Next: Second post" in html
