"""
Metadata routes — GET /api/plugins, /api/plugins/recent,
                  GET /api/articles, /api/articles/recent

Same payloads the static build writes to plugins-metadata.json,
recent-plugins.json, articles-metadata.json and recent-articles.json.
"""

from aiohttp import web

from docsite.catalog import recent_plugins, sorted_plugins, to_metadata

routes = web.RouteTableDef()


@routes.get("/api/plugins")
async def plugins(request: web.Request) -> web.Response:
    """All plugins, sorted by title."""
    site = request.app["site"].site
    return web.json_response([to_metadata(d) for d in sorted_plugins(site.plugins)])


@routes.get("/api/plugins/recent")
async def plugins_recent(request: web.Request) -> web.Response:
    """First N plugins in declared order."""
    site = request.app["site"].site
    count = site.config.theme.recent_plugins_count
    return web.json_response([to_metadata(d) for d in recent_plugins(site.plugins, count)])


@routes.get("/api/articles")
async def articles(request: web.Request) -> web.Response:
    """All articles, newest first."""
    site = request.app["site"].site
    return web.json_response([a.to_dict() for a in site.articles])


@routes.get("/api/articles/recent")
async def articles_recent(request: web.Request) -> web.Response:
    site = request.app["site"].site
    count = site.config.theme.recent_articles_count
    return web.json_response([a.to_dict() for a in site.articles[:count]])
