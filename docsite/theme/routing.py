"""Route helpers for the theme. Routes are site-relative paths like `/articles/foo`."""

from docsite.config import DEFAULT_ARTICLE_PREFIX


def is_article_page(path: str, prefix: str = DEFAULT_ARTICLE_PREFIX) -> bool:
    """True for pages inside the article section, excluding its index page."""
    return path.startswith(prefix) and path != prefix


def normalize_route(route: str) -> str:
    """Canonical form of a page route: no `.html` suffix, `/x/index` → `/x/`."""
    if route.endswith(".html"):
        route = route[: -len(".html")]
    if route == "/index" or route.endswith("/index"):
        route = route[: -len("index")]
    return route or "/"


def strip_base(path: str, base: str = "/") -> str:
    """Remove the deployment base (e.g. `/docs-test/`) from a request path."""
    if base in ("", "/"):
        return path or "/"
    base = "/" + base.strip("/") + "/"
    if path == base.rstrip("/"):
        return "/"
    if path.startswith(base):
        return "/" + path[len(base):]
    return path


def with_base(route: str, base: str = "/") -> str:
    """Prefix a site route with the deployment base. External links pass through."""
    if base in ("", "/") or not route.startswith("/") or route.startswith("//"):
        return route
    return "/" + base.strip("/") + route
