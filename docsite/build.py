"""
docsite Static Builder

Writes the whole site to the output directory:
1. Metadata JSON (plugins, recent plugins, articles, recent articles)
2. Static assets from `<docs>/public`
3. One HTML file per markdown page

When a diagram renderer is configured, every page with diagram blocks is
mounted, its trigger drives the render hook until all blocks are processed,
and the page is written with the rendered markup.
"""

import asyncio
import logging
import shutil
from pathlib import Path

from docsite.articles import generate_articles_metadata
from docsite.catalog import generate_plugins_metadata
from docsite.config import Config
from docsite.site import SiteRenderer, output_path_for_route
from docsite.sitelog import sitelog
from docsite.theme.diagrams import DiagramDocument
from docsite.theme.mermaid_cli import MermaidCliHook

logger = logging.getLogger(__name__)


class SiteBuilder:
    """Renders every page of a SiteRenderer to disk."""

    def __init__(self, config: Config, renderer: SiteRenderer, out_dir: Path | None = None):
        self.config = config
        self.renderer = renderer
        self.out_dir = out_dir or config.out_path

    def _diagram_renderer_enabled(self) -> bool:
        name = self.config.theme.diagram_renderer
        if not name:
            return False
        if name != "mmdc":
            logger.warning(f"Unknown diagram renderer '{name}', leaving diagrams to the browser")
            return False
        if not MermaidCliHook.available():
            logger.warning("mmdc not found on PATH, leaving diagrams to the browser")
            return False
        return True

    def generate_metadata(self) -> None:
        theme = self.config.theme
        generate_plugins_metadata(self.renderer.site.plugins, self.out_dir, theme.recent_plugins_count)
        generate_articles_metadata(self.renderer.src_dir, self.out_dir, theme.recent_articles_count)

    def copy_public_assets(self) -> None:
        public_dir = self.renderer.src_dir / "public"
        if public_dir.is_dir():
            shutil.copytree(public_dir, self.out_dir, dirs_exist_ok=True)
            logger.info(f"Copied public assets from {public_dir}")

    async def render_diagrams(self, route: str, html: str) -> str:
        """Pre-render a page's diagram blocks through the mounted trigger."""
        document = DiagramDocument.from_html(html)
        pending = len(document.unprocessed())
        if not pending:
            return html

        sitelog.diagram_pending(route, pending)
        theme = self.config.theme
        layout = self.renderer.layout
        trigger = await layout.mount(
            document,
            render_hook=MermaidCliHook(document, total_timeout=theme.diagram_render_timeout),
            interval=theme.diagram_poll_interval,
            missing_hook_warn_after=theme.missing_hook_warn_after,
        )
        try:
            await trigger.wait_rendered(theme.diagram_render_timeout)
            sitelog.diagram_done(route, pending)
        except asyncio.TimeoutError:
            sitelog.diagram_error(f"{route}: timed out after {theme.diagram_render_timeout}s")
        finally:
            await layout.unmount(trigger)
        return document.to_html()

    async def build(self) -> list[Path]:
        """Build the site. Returns the HTML files written."""
        sitelog.start(f"Build → {self.out_dir}")
        self.out_dir.mkdir(parents=True, exist_ok=True)
        self.renderer.refresh()
        self.generate_metadata()
        self.copy_public_assets()

        with_diagrams = self._diagram_renderer_enabled()
        written: list[Path] = []
        for route in self.renderer.discover_routes():
            html = self.renderer.render_route(route)
            if html is None:
                continue
            if with_diagrams:
                html = await self.render_diagrams(route, html)

            destination = output_path_for_route(self.out_dir, route)
            destination.parent.mkdir(parents=True, exist_ok=True)
            destination.write_text(html, encoding="utf-8")
            sitelog.page_write(destination)
            written.append(destination)

        sitelog.stop(f"Build finished: {len(written)} page(s)")
        return written
