"""Shared fixtures for docsite tests: a small docs tree with config."""

import json
from pathlib import Path

import pytest

from docsite.config import Config
from docsite.site import SiteRenderer
from docsite.theme.context import PageData, RenderContext
from docsite.theme.templating import create_environment

DOCSITE_ENV_VARS = ("DOCSITE_DIR", "DOCSITE_BASE", "DOCSITE_HOST", "DOCSITE_PORT", "DOCSITE_REPO_LINK")

DOCSITE_YAML = """
site:
  title: Test Docs
  base: /
theme:
  repo_link: https://github.com/example/plugins
  recent_articles_count: 5
  recent_plugins_count: 2
  plugins_index_count: 2
  diagram_poll_interval: 0.01
versions:
  - version: plugins
    label: Plugins
    display_name: Test Plugins
    path: /
    public_path: /
    is_current: true
    sidebar_file: sidebar.json
    php_version: "8.4"
    min_php_version: "8.1"
sidebar:
  /RuleFlow/:
    - text: RuleFlow Plugin
      items:
        - { text: Overview, link: /RuleFlow/ }
"""

PLUGINS_YAML = """
- title: Temporal Plugin
  details: Workflow orchestration using Temporal.
  link: /Temporal/
  name: Temporal
- title: RuleFlow Plugin
  details: Rule engine with JSON Logic support.
  link: /RuleFlow/
  name: RuleFlow
- title: BatchQueue Plugin
  details: Job coordination for CakePHP Queue.
  link: /BatchQueue/
  name: BatchQueue
"""

SIDEBAR_JSON = {
    "/": [
        {"text": "Home group", "items": [{"text": "Home", "link": "/"}]},
    ],
}

PAGES = {
    "index.md": "---\nlayout: home\ntitle: Welcome\n---\n\n# Welcome\n\nRequires PHP |minphpversion|.\n",
    "articles/index.md": "# Articles\n\nAll the articles.\n",
    "articles/first-post.md": "---\ntitle: First post\ndate: 2025-01-10\n---\n\nThe first one.\n",
    "articles/second-post.md": "---\ntitle: Second post\ndate: 2025-02-20\ntags: [news]\n---\n\nThe second one.\n",
    "RuleFlow/index.md": "# RuleFlow\n\nRules.\n",
    "plugins/index.md": "# Plugins\n\nAll of them.\n",
    "guide.md": "# Guide\n\n```mermaid\ngraph TD\n  A --> B\n```\n",
}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's DOCSITE_* variables out of the tests."""
    for var in DOCSITE_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """A project root with config/ and docs/ laid out like the real one."""
    config_dir = tmp_path / "config"
    (config_dir / "sidebars").mkdir(parents=True)
    (config_dir / "docsite.yaml").write_text(DOCSITE_YAML)
    (config_dir / "plugins.yaml").write_text(PLUGINS_YAML)
    (config_dir / "sidebars" / "sidebar.json").write_text(json.dumps(SIDEBAR_JSON))

    docs = tmp_path / "docs"
    for relative, text in PAGES.items():
        path = docs / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)
    return tmp_path


@pytest.fixture
def config(site_root: Path) -> Config:
    return Config.load(site_root / "config")


@pytest.fixture
def env():
    return create_environment()


@pytest.fixture
def renderer(config, env) -> SiteRenderer:
    site_renderer = SiteRenderer(config, env)
    site_renderer.refresh()
    return site_renderer


@pytest.fixture
def make_context(renderer):
    """Build a RenderContext for a route against the fixture site."""

    def _make(route: str, front_matter: dict | None = None) -> RenderContext:
        page = PageData(route=route, title="Page", html="<p>body</p>", front_matter=front_matter or {})
        return RenderContext(route=route, page=page, site=renderer.site)

    return _make
