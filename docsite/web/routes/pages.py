"""
Page route — GET /{tail}

Resolves the request path (minus the deployment base) to a markdown page
and renders it through the theme layout. Unknown routes get the 404 page.
"""

import aiohttp_jinja2
from aiohttp import web

from docsite.sitelog import sitelog
from docsite.theme.routing import strip_base, with_base

routes = web.RouteTableDef()


@routes.get("/{tail:.*}")
async def page(request: web.Request) -> web.Response:
    """Render the page for the requested route."""
    site = request.app["site"]
    base = site.config.site.base
    route = strip_base(request.path, base)

    html = site.render_route(route)
    if html is None:
        sitelog.page_missing(route)
        return aiohttp_jinja2.render_template(
            "not_found.html",
            request,
            {"route": route, "home": with_base("/", base)},
            status=404,
        )

    sitelog.route(request.method, request.path, 200)
    return web.Response(text=html, content_type="text/html")
