"""
docsite Site Renderer

Resolves routes to markdown sources and renders them through the layout.
Shared by the dev server and the static builder.

Route → source:
- "/"            → index.md
- "/x/"          → x/index.md
- "/x/y"         → x/y.md (".html" suffix accepted)
"""

import logging
import re
from pathlib import Path

import jinja2

from docsite.articles import scan_articles
from docsite.catalog import load_descriptors
from docsite.config import Config
from docsite.markdown import MarkdownRenderer, split_front_matter
from docsite.sidebar import generate_sidebars
from docsite.sitelog import sitelog
from docsite.theme.context import PageData, RenderContext, SiteData
from docsite.theme.layout import Layout, default_layout

logger = logging.getLogger(__name__)

HEADING_RE = re.compile(r"^#\s+(.+?)\s*#*\s*$", re.MULTILINE)

# Source directories that never produce pages
SKIPPED_DIRS = {"public", "node_modules"}


class SiteRenderer:
    """Owns the site data and the layout for one docs tree."""

    def __init__(self, config: Config, env: jinja2.Environment, layout: Layout | None = None):
        self.config = config
        self.env = env
        self.layout = layout or default_layout(env)
        self.markdown = MarkdownRenderer(config.versions, config.supported_locales)
        self.site = SiteData(config=config)

    @property
    def src_dir(self) -> Path:
        return self.config.src_path

    def refresh(self) -> SiteData:
        """Load the plugin catalogue, article metadata and sidebars."""
        self.site = SiteData(
            config=self.config,
            plugins=load_descriptors(self.config.plugins_path),
            articles=scan_articles(self.src_dir),
            sidebars=generate_sidebars(self.config.sidebar_path, self.config.versions, self.config.sidebar),
        )
        logger.info(
            f"Site data loaded: {len(self.site.plugins)} plugin(s), "
            f"{len(self.site.articles)} article(s), {len(self.site.sidebars)} sidebar(s)"
        )
        return self.site

    def source_for_route(self, route: str) -> Path | None:
        """Markdown file backing a route, or None."""
        relative = route.lstrip("/")
        if relative.endswith(".html"):
            relative = relative[: -len(".html")]

        if not relative or relative.endswith("/"):
            candidates = [self.src_dir / relative / "index.md"]
        else:
            candidates = [self.src_dir / f"{relative}.md", self.src_dir / relative / "index.md"]

        root = self.src_dir.resolve()
        for candidate in candidates:
            resolved = candidate.resolve()
            if not resolved.is_relative_to(root):
                logger.warning(f"Refusing route outside docs dir: {route}")
                return None
            if resolved.is_file():
                return resolved
        return None

    def load_page(self, route: str) -> PageData | None:
        source = self.source_for_route(route)
        if source is None:
            return None

        front_matter, body = split_front_matter(source.read_text(encoding="utf-8"))
        title = front_matter.get("title")
        if not title:
            match = HEADING_RE.search(body)
            title = match.group(1) if match else self.config.site.title

        return PageData(
            route=route,
            title=str(title),
            html=self.markdown.render(body, route),
            front_matter=front_matter,
            source=source,
        )

    def render_page(self, page: PageData) -> str:
        ctx = RenderContext(route=page.route, page=page, site=self.site)
        html = self.layout.render(ctx)
        sitelog.page_render(page.route)
        return html

    def render_route(self, route: str) -> str | None:
        """Full page HTML for a route, or None when no source exists."""
        page = self.load_page(route)
        if page is None:
            return None
        return self.render_page(page)

    def discover_routes(self) -> list[str]:
        """Every route with a markdown source, in path order."""
        routes: list[str] = []
        for source in sorted(self.src_dir.rglob("*.md")):
            relative = source.relative_to(self.src_dir)
            if any(part.startswith(".") or part in SKIPPED_DIRS for part in relative.parts[:-1]):
                continue
            if relative.name == "index.md":
                parent = relative.parent.as_posix()
                routes.append("/" if parent == "." else f"/{parent}/")
            else:
                routes.append("/" + relative.with_suffix("").as_posix())
        return routes


def output_path_for_route(out_dir: Path, route: str) -> Path:
    """Where the static builder writes a route."""
    relative = route.lstrip("/")
    if not relative or relative.endswith("/"):
        return out_dir / relative / "index.html"
    return out_dir / f"{relative}.html"
