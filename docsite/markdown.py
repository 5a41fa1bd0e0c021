"""
docsite Markdown Rendering

markdown-it based renderer. Mermaid fences become `<div class="mermaid">`
blocks left for the diagram renderer; `|phpversion|` placeholders are
replaced with the requirements of the version owning the page.
"""

import html
import logging
import re

import yaml
from markdown_it import MarkdownIt

from docsite.versions import VersionInfo, version_by_path

logger = logging.getLogger(__name__)

FRONT_MATTER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)

DEFAULT_PHP_VERSION = "8.1"


def split_front_matter(text: str) -> tuple[dict, str]:
    """Split a leading YAML front matter block from the markdown body."""
    match = FRONT_MATTER_RE.match(text)
    if not match:
        return {}, text

    try:
        data = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError as e:
        logger.warning(f"Invalid front matter, treating as body: {e}")
        return {}, text

    if not isinstance(data, dict):
        return {}, text[match.end():]
    return data, text[match.end():]


def replace_version_placeholders(src: str, version: VersionInfo | None) -> str:
    """Substitute |phpversion| and |minphpversion| for the given version."""
    if version is None:
        return src
    php = version.php_version or DEFAULT_PHP_VERSION
    min_php = version.min_php_version or DEFAULT_PHP_VERSION
    return (
        src.replace("|phpversion|", f"**{php}**")
        .replace("|minphpversion|", f"*{min_php}*")
    )


class MarkdownRenderer:
    """Converts page markdown to HTML."""

    def __init__(self, versions: list[VersionInfo] | None = None, supported_locales: list[str] | None = None):
        self.versions = versions or []
        self.supported_locales = supported_locales or ["en"]
        self._md = MarkdownIt("commonmark", {"html": True}).enable("table").enable("strikethrough")

        default_fence = self._md.renderer.rules["fence"]

        def custom_fence(tokens, idx, options, env):
            token = tokens[idx]
            info = token.info.strip().split(maxsplit=1)[0].lower() if token.info else ""
            if info == "mermaid":
                return f'<div class="mermaid">\n{html.escape(token.content)}</div>\n'
            return default_fence(tokens, idx, options, env)

        self._md.renderer.rules["fence"] = custom_fence

    def render(self, src: str, route: str = "/") -> str:
        """Render a markdown body for the page at `route`."""
        if self.versions:
            version = version_by_path(route, self.versions, self.supported_locales)
            src = replace_version_placeholders(src, version)
        return self._md.render(src)
