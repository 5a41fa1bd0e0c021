"""
docsite Layout

Wires theme components into the named slots of an inherited base theme.
The layout has no logic of its own: every slot receives exactly the
components assigned to it, once, in order. Slot names are a fixed interface
of the base theme; assigning to an unknown slot is an error.
"""

import logging
from dataclasses import dataclass

import jinja2
from markupsafe import Markup

from docsite.theme.components import ArticleNav, Component, PluginsIndex, RecentArticles, RecentPlugins, RepoLink
from docsite.theme.context import RenderContext
from docsite.theme.diagrams import DEFAULT_POLL_INTERVAL, DiagramDocument, DiagramRenderTrigger, RenderHook
from docsite.sidebar import sidebar_for_path
from docsite.versions import version_nav_items

logger = logging.getLogger(__name__)

SLOT_NAMES: tuple[str, ...] = (
    "nav-bar-content-after",
    "home-hero-after",
    "home-features-after",
    "doc-before",
    "doc-after",
    "sidebar-nav-before",
    "layout-bottom",
)


class LayoutError(ValueError):
    """Invalid slot assignment."""


@dataclass(frozen=True)
class BaseTheme:
    """A base theme: a page template and the slots it exposes."""

    name: str
    template: str
    slots: tuple[str, ...]


DEFAULT_THEME = BaseTheme(name="default", template="base.html", slots=SLOT_NAMES)


class Layout:
    """A base theme extended with components in its slots."""

    def __init__(
        self,
        env: jinja2.Environment,
        base: BaseTheme = DEFAULT_THEME,
        slots: dict[str, list[Component]] | None = None,
    ):
        self.env = env
        self.base = base
        self.slots: dict[str, list[Component]] = {}

        placed: set[int] = set()
        for slot, components in (slots or {}).items():
            if slot not in base.slots:
                raise LayoutError(f"Theme '{base.name}' has no slot '{slot}'")
            for component in components:
                if id(component) in placed:
                    raise LayoutError(f"{component!r} is placed more than once")
                placed.add(id(component))
            self.slots[slot] = list(components)

    def render_slots(self, ctx: RenderContext) -> dict[str, Markup]:
        """Rendered markup per slot; unassigned slots are empty."""
        rendered: dict[str, Markup] = {}
        for slot in self.base.slots:
            parts = [component.render(ctx, self.env) for component in self.slots.get(slot, [])]
            rendered[slot] = Markup("").join(parts)
        return rendered

    def render(self, ctx: RenderContext) -> str:
        """Render a full page through the base template."""
        config = ctx.site.config
        template = self.env.get_template(self.base.template)
        return template.render(
            site=config.site,
            base=config.site.base,
            page=ctx.page,
            content=Markup(ctx.page.html),
            slots=self.render_slots(ctx),
            sidebar=sidebar_for_path(ctx.site.sidebars, ctx.route),
            versions=version_nav_items(config.versions),
            poll_interval_ms=int(config.theme.diagram_poll_interval * 1000),
        )

    async def mount(
        self,
        document: DiagramDocument,
        render_hook: RenderHook | None = None,
        interval: float = DEFAULT_POLL_INTERVAL,
        missing_hook_warn_after: int = 0,
    ) -> DiagramRenderTrigger:
        """Mount a rendered page: start its diagram trigger."""
        trigger = DiagramRenderTrigger(
            document,
            render_hook=render_hook,
            interval=interval,
            missing_hook_warn_after=missing_hook_warn_after,
        )
        await trigger.start()
        return trigger

    async def unmount(self, trigger: DiagramRenderTrigger) -> None:
        await trigger.stop()


def default_layout(env: jinja2.Environment) -> Layout:
    """The site's layout: repo link in the navbar, listings on home, article nav and the plugins index after docs."""
    return Layout(
        env,
        DEFAULT_THEME,
        slots={
            "nav-bar-content-after": [RepoLink()],
            "home-features-after": [RecentArticles(), RecentPlugins()],
            "doc-after": [ArticleNav(), PluginsIndex()],
        },
    )
