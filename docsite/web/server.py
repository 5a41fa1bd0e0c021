"""
docsite Web Server

aiohttp-based dev server. Renders pages on request through the theme
layout and serves the metadata JSON the listings are built from.
"""

import logging
from typing import TYPE_CHECKING

import aiohttp_jinja2
import jinja2
from aiohttp import web

from docsite.site import SiteRenderer
from docsite.sitelog import sitelog
from docsite.theme.templating import TEMPLATES_DIR, configure_environment

if TYPE_CHECKING:
    from docsite.config import Config

logger = logging.getLogger(__name__)


class WebServer:
    """Serves a docs tree rendered through the theme."""

    def __init__(
        self,
        config: "Config",
        host: str | None = None,
        port: int | None = None,
    ):
        self.config = config
        self.host = host or config.server.host
        self.port = port or config.server.port
        self.app = web.Application()
        self._runner: web.AppRunner | None = None

        # Set up Jinja2 templates with the site title in global context
        env = aiohttp_jinja2.setup(
            self.app,
            loader=jinja2.FileSystemLoader(str(TEMPLATES_DIR)),
            autoescape=jinja2.select_autoescape(["html"]),
        )
        configure_environment(env)
        env.globals["site_title"] = config.site.title

        # Store references in app for route handlers
        self.site = SiteRenderer(config, env)
        self.app["config"] = config
        self.app["site"] = self.site

        self._setup_routes()

    def _setup_routes(self) -> None:
        """Register all route handlers. Pages go last: they catch every path."""
        from docsite.web.routes.metadata import routes as metadata_routes
        from docsite.web.routes.pages import routes as page_routes

        self.app.router.add_routes(metadata_routes)
        self.app.router.add_routes(page_routes)

    def refresh(self) -> None:
        """Reload plugins, articles and sidebars (after content edits)."""
        self.site.refresh()

    async def start(self) -> None:
        """Start the web server."""
        self.site.refresh()
        self._runner = web.AppRunner(self.app)
        await self._runner.setup()
        site = web.TCPSite(self._runner, self.host, self.port)
        await site.start()
        sitelog.start(f"Dev server at http://{self.host}:{self.port}{self.config.site.base}")
        logger.info(f"Web server started at http://{self.host}:{self.port}")

    async def stop(self) -> None:
        """Stop the web server."""
        if self._runner:
            await self._runner.cleanup()
            self._runner = None
            sitelog.stop("Dev server")
            logger.info("Web server stopped")
