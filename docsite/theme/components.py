"""
docsite Theme Components

Each component renders a Jinja partial from the data in a RenderContext.
A component whose context() returns None renders nothing.
"""

from typing import Sequence
from urllib.parse import unquote

import jinja2
from markupsafe import Markup

from docsite.catalog import PluginDescriptor, sorted_plugins
from docsite.theme.context import RenderContext
from docsite.theme.routing import is_article_page, normalize_route


class Component:
    """Base class for theme components."""

    name: str = "component"
    template: str = ""

    def context(self, ctx: RenderContext) -> dict | None:
        """Template variables for this render, or None to render nothing."""
        return {}

    def render(self, ctx: RenderContext, env: jinja2.Environment) -> Markup:
        data = self.context(ctx)
        if data is None:
            return Markup("")
        data.setdefault("base", ctx.base)
        return Markup(env.get_template(self.template).render(**data))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class RepoLink(Component):
    """A single data-bound link, e.g. to the canonical repository.

    The page's `repository` front matter wins over the theme's repo_link.
    """

    name = "repo-link"
    template = "components/repo_link.html"

    def __init__(self, label: str = "Repository"):
        self.label = label

    def context(self, ctx: RenderContext) -> dict | None:
        link = ctx.page.front_matter.get("repository") or ctx.site.config.theme.repo_link
        if not link:
            return None
        return {"link": link, "label": ctx.page.front_matter.get("repository_label", self.label)}


class ListingComponent(Component):
    """Ordered list of descriptor-shaped entries; a direct projection."""

    name = "listing"
    template = "components/listing.html"
    heading: str = ""
    css_class: str = "listing"
    view_all_link: str | None = None

    def __init__(self, entries: Sequence[PluginDescriptor] | None = None):
        self._entries = entries

    def entries(self, ctx: RenderContext) -> Sequence[PluginDescriptor]:
        return self._entries if self._entries is not None else []

    def context(self, ctx: RenderContext) -> dict | None:
        return {
            "heading": self.heading,
            "css_class": self.css_class,
            "entries": list(self.entries(ctx)),
            "view_all_link": self.view_all_link,
        }


class RecentArticles(ListingComponent):
    name = "recent-articles"
    heading = "Recent Articles"
    css_class = "recent-articles"
    view_all_link = "/articles/"

    def entries(self, ctx: RenderContext) -> Sequence[PluginDescriptor]:
        if self._entries is not None:
            return self._entries
        count = ctx.site.config.theme.recent_articles_count
        return [a.as_descriptor() for a in ctx.site.articles[:count]]


class RecentPlugins(ListingComponent):
    name = "recent-plugins"
    heading = "Plugins"
    css_class = "recent-plugins"
    view_all_link = "/plugins/"

    def entries(self, ctx: RenderContext) -> Sequence[PluginDescriptor]:
        if self._entries is not None:
            return self._entries
        return ctx.site.plugins[:ctx.site.config.theme.recent_plugins_count]


class PluginsIndex(ListingComponent):
    """Plugins sorted by title, shown on the plugins index page only."""

    name = "plugins-index"
    heading = "All Plugins"
    css_class = "plugins-index"
    page_route = "/plugins/"

    def entries(self, ctx: RenderContext) -> Sequence[PluginDescriptor]:
        if self._entries is not None:
            return self._entries
        return sorted_plugins(ctx.site.plugins)[:ctx.site.config.theme.plugins_index_count]

    def context(self, ctx: RenderContext) -> dict | None:
        if normalize_route(ctx.route) != self.page_route:
            return None
        return super().context(ctx)


class ArticleNav(Component):
    """Back/previous/next links, shown only on article pages."""

    name = "article-nav"
    template = "components/article_nav.html"

    def context(self, ctx: RenderContext) -> dict | None:
        prefix = ctx.site.config.theme.article_prefix
        route = normalize_route(unquote(ctx.route))
        if not is_article_page(route, prefix):
            return None

        articles = ctx.site.articles
        index = next((i for i, a in enumerate(articles) if unquote(a.path) == route), None)
        newer = older = None
        if index is not None:
            # Articles are ordered newest first
            if index > 0:
                newer = articles[index - 1]
            if index + 1 < len(articles):
                older = articles[index + 1]

        return {"index_link": prefix, "prev": older, "next": newer}
