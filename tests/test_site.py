"""Tests for route resolution and page loading."""

from pathlib import Path

import pytest

from docsite.site import output_path_for_route


@pytest.mark.parametrize("route,expected", [
    ("/", "index.md"),
    ("/articles/", "articles/index.md"),
    ("/articles/first-post", "articles/first-post.md"),
    ("/articles/first-post.html", "articles/first-post.md"),
    ("/RuleFlow", "RuleFlow/index.md"),
    ("/guide", "guide.md"),
])
def test_source_for_route(renderer, route, expected):
    assert renderer.source_for_route(route) == (renderer.src_dir / expected).resolve()


def test_missing_and_escaping_routes(renderer):
    assert renderer.source_for_route("/nope") is None
    assert renderer.source_for_route("/../config/docsite") is None


def test_load_page_titles(renderer):
    assert renderer.load_page("/").title == "Welcome"
    assert renderer.load_page("/RuleFlow/").title == "RuleFlow"
    assert renderer.load_page("/articles/first-post").title == "First post"


def test_load_page_layout(renderer):
    assert renderer.load_page("/").layout == "home"
    assert renderer.load_page("/guide").layout == "doc"


def test_render_route_missing(renderer):
    assert renderer.render_route("/nope") is None


def test_refresh_loads_site_data(renderer):
    site = renderer.site
    assert [p.name for p in site.plugins] == ["Temporal", "RuleFlow", "BatchQueue"]
    assert [a.slug for a in site.articles] == ["second-post", "first-post"]
    assert set(site.sidebars) == {"/", "/RuleFlow/"}


def test_discover_routes(renderer):
    (renderer.src_dir / "public").mkdir()
    (renderer.src_dir / "public" / "readme.md").write_text("asset")

    assert sorted(renderer.discover_routes()) == sorted([
        "/",
        "/RuleFlow/",
        "/articles/",
        "/plugins/",
        "/articles/first-post",
        "/articles/second-post",
        "/guide",
    ])


def test_output_path_for_route():
    out = Path("/out")
    assert output_path_for_route(out, "/") == out / "index.html"
    assert output_path_for_route(out, "/articles/") == out / "articles" / "index.html"
    assert output_path_for_route(out, "/guide") == out / "guide.html"
