"""Jinja environment shared by the builder and the web server."""

from pathlib import Path

import jinja2

from docsite.theme.routing import with_base

TEMPLATES_DIR = Path(__file__).parent / "templates"


def configure_environment(env: jinja2.Environment) -> jinja2.Environment:
    """Register the theme's filters on an existing environment."""
    env.filters["with_base"] = with_base
    return env


def create_environment() -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=jinja2.select_autoescape(["html"]),
    )
    return configure_environment(env)
