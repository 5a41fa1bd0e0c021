"""Tests for the static builder and the build command."""

import json
import logging
from unittest.mock import AsyncMock, MagicMock, patch

from docsite.build import SiteBuilder
from docsite.main import main, parse_args, serve


class FakeMermaidHook:
    """Stands in for mmdc: renders every pending block to a fixed SVG."""

    instances = []

    def __init__(self, document, **kwargs):
        self.document = document
        self.calls = 0
        self.kwargs = kwargs
        FakeMermaidHook.instances.append(self)

    @staticmethod
    def available():
        return True

    def __call__(self):
        self.calls += 1
        for block in self.document.unprocessed():
            block.rendered = "<svg>ok</svg>"
            block.processed = True


async def test_build_writes_pages_and_metadata(config, renderer, tmp_path):
    out = tmp_path / "dist"
    written = await SiteBuilder(config, renderer, out_dir=out).build()

    assert out / "index.html" in written
    assert (out / "articles" / "first-post.html").is_file()
    assert (out / "RuleFlow" / "index.html").is_file()
    for name in ("plugins-metadata.json", "recent-plugins.json", "articles-metadata.json", "recent-articles.json"):
        assert (out / name).is_file()
    assert len(json.loads((out / "recent-plugins.json").read_text())) == 2

    # No renderer configured: diagrams are left for the browser
    guide = (out / "guide.html").read_text()
    assert '<div class="mermaid">' in guide


async def test_build_copies_public_assets(config, renderer, tmp_path):
    public = renderer.src_dir / "public" / "favicon"
    public.mkdir(parents=True)
    (public / "favicon.svg").write_text("<svg/>")

    out = tmp_path / "dist"
    await SiteBuilder(config, renderer, out_dir=out).build()

    assert (out / "favicon" / "favicon.svg").read_text() == "<svg/>"


async def test_build_prerenders_diagrams(config, renderer, tmp_path):
    config.theme.diagram_renderer = "mmdc"
    FakeMermaidHook.instances = []
    out = tmp_path / "dist"

    with patch("docsite.build.MermaidCliHook", FakeMermaidHook):
        await SiteBuilder(config, renderer, out_dir=out).build()

    guide = (out / "guide.html").read_text()
    assert '<div class="mermaid" data-processed="true"><svg>ok</svg></div>' in guide
    # Only the page with a diagram is mounted
    assert len(FakeMermaidHook.instances) == 1
    assert FakeMermaidHook.instances[0].calls == 1
    assert FakeMermaidHook.instances[0].kwargs["total_timeout"] == config.theme.diagram_render_timeout


async def test_unknown_diagram_renderer_falls_back(config, renderer, tmp_path, caplog):
    config.theme.diagram_renderer = "kroki"

    with caplog.at_level(logging.WARNING):
        await SiteBuilder(config, renderer, out_dir=tmp_path / "dist").build()

    assert "Unknown diagram renderer 'kroki'" in caplog.text
    assert '<div class="mermaid">' in (tmp_path / "dist" / "guide.html").read_text()


def test_parse_args():
    args = parse_args(["--config-dir", "site/config", "serve", "--port", "8080"])
    assert args.command == "serve"
    assert args.port == 8080
    assert parse_args(["build", "--out", "public"]).out.name == "public"


def test_main_build(site_root, tmp_path):
    out = tmp_path / "static"
    assert main(["--config-dir", str(site_root / "config"), "build", "--out", str(out)]) == 0
    assert (out / "index.html").is_file()


def test_main_build_without_docs(tmp_path):
    (tmp_path / "config").mkdir()
    assert main(["--config-dir", str(tmp_path / "config"), "build"]) == 1


async def test_serve_reports_start_failure(config):
    server = MagicMock()
    server.start = AsyncMock(side_effect=OSError("address already in use"))
    server.stop = AsyncMock()

    with patch("docsite.main.WebServer", return_value=server), patch("docsite.main.sitelog") as log:
        await serve(config)

    log.error.assert_called_once()
    assert "address already in use" in log.error.call_args.args[0]
    server.stop.assert_awaited_once()
