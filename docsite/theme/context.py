"""Data handed to theme components when a page renders."""

from dataclasses import dataclass, field
from pathlib import Path

from docsite.articles import ArticleMeta
from docsite.catalog import PluginDescriptor
from docsite.config import Config


@dataclass
class PageData:
    """A markdown page resolved for a route."""

    route: str
    title: str
    html: str
    front_matter: dict = field(default_factory=dict)
    source: Path | None = None

    @property
    def layout(self) -> str:
        return "home" if self.front_matter.get("layout") == "home" else "doc"


@dataclass
class SiteData:
    """Build-time data shared by every page. Loaded once, never mutated."""

    config: Config
    plugins: list[PluginDescriptor] = field(default_factory=list)
    articles: list[ArticleMeta] = field(default_factory=list)
    sidebars: dict[str, list] = field(default_factory=dict)


@dataclass
class RenderContext:
    route: str
    page: PageData
    site: SiteData

    @property
    def base(self) -> str:
        return self.site.config.site.base
