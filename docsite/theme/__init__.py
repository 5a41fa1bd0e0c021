"""docsite Theme Package."""

from docsite.theme.components import ArticleNav, PluginsIndex, RecentArticles, RecentPlugins, RepoLink
from docsite.theme.diagrams import DiagramDocument, DiagramRenderTrigger
from docsite.theme.layout import Layout, LayoutError, default_layout

__all__ = [
    "ArticleNav",
    "PluginsIndex",
    "RecentArticles",
    "RecentPlugins",
    "RepoLink",
    "DiagramDocument",
    "DiagramRenderTrigger",
    "Layout",
    "LayoutError",
    "default_layout",
]
