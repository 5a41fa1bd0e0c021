"""
docsite Configuration Loader

Loads configuration from:
1. $DOCSITE_DIR/docsite.yaml - Site-specific settings (if DOCSITE_DIR set)
   OR config/docsite.yaml - Default site directory
2. .env file - Deployment overrides (base path, host, port, repo link)
"""

import os
from pathlib import Path
from dataclasses import dataclass, field

import yaml
from dotenv import load_dotenv

from docsite.catalog import PLUGINS_INDEX_COUNT, RECENT_PLUGINS_COUNT
from docsite.versions import VersionInfo, DEFAULT_VERSIONS

DEFAULT_ARTICLE_PREFIX = "/articles/"


@dataclass
class SiteConfig:
    title: str = "CakePHP Plugins"
    description: str = ""
    base: str = "/"
    src_dir: str = "docs"
    out_dir: str = "dist"
    footer_message: str = "Released under the MIT License."
    footer_copyright: str = ""


@dataclass
class ThemeConfig:
    repo_link: str = ""
    article_prefix: str = DEFAULT_ARTICLE_PREFIX
    recent_articles_count: int = 5
    recent_plugins_count: int = RECENT_PLUGINS_COUNT
    plugins_index_count: int = PLUGINS_INDEX_COUNT
    diagram_poll_interval: float = 0.1
    diagram_render_timeout: float = 30.0
    missing_hook_warn_after: int = 50
    diagram_renderer: str = ""  # "" (client-side only) | "mmdc"


@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 5173


@dataclass
class Config:
    """Main configuration container."""
    config_dir: Path = field(default_factory=lambda: Path("config"))
    site: SiteConfig = field(default_factory=SiteConfig)
    theme: ThemeConfig = field(default_factory=ThemeConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    versions: list[VersionInfo] = field(default_factory=lambda: list(DEFAULT_VERSIONS))
    supported_locales: list[str] = field(default_factory=lambda: ["en"])
    sidebar: dict = field(default_factory=dict)
    sidebar_dir: str = "sidebars"
    plugins_file: str = "plugins.yaml"

    @property
    def src_path(self) -> Path:
        return (self.config_dir.parent / self.site.src_dir).resolve()

    @property
    def out_path(self) -> Path:
        return (self.config_dir.parent / self.site.out_dir).resolve()

    @property
    def plugins_path(self) -> Path:
        return self.config_dir / self.plugins_file

    @property
    def sidebar_path(self) -> Path:
        return self.config_dir / self.sidebar_dir

    @classmethod
    def load(cls, config_dir: Path | None = None) -> "Config":
        """Load configuration from yaml file and environment variables.

        Resolution order:
        1. DOCSITE_DIR env var → site_dir/docsite.yaml
        2. Explicit config_dir argument → config_dir/docsite.yaml
        3. Default: ../config/docsite.yaml
        """
        site_dir = os.environ.get("DOCSITE_DIR")

        if site_dir:
            config_dir = Path(site_dir)
        elif config_dir is None:
            config_dir = Path(__file__).parent.parent / "config"

        yaml_path = config_dir / "docsite.yaml"
        load_dotenv(config_dir.parent / ".env", override=False)

        yaml_config = {}
        if yaml_path.exists():
            with open(yaml_path) as f:
                yaml_config = yaml.safe_load(f) or {}

        site_cfg = yaml_config.get("site", {})
        site = SiteConfig(
            title=site_cfg.get("title", "CakePHP Plugins"),
            description=site_cfg.get("description", ""),
            base=os.getenv("DOCSITE_BASE", site_cfg.get("base", "/")),
            src_dir=site_cfg.get("src_dir", "docs"),
            out_dir=site_cfg.get("out_dir", "dist"),
            footer_message=site_cfg.get("footer_message", "Released under the MIT License."),
            footer_copyright=site_cfg.get("footer_copyright", ""),
        )

        theme_cfg = yaml_config.get("theme", {})
        theme = ThemeConfig(
            repo_link=os.getenv("DOCSITE_REPO_LINK", theme_cfg.get("repo_link", "")),
            article_prefix=theme_cfg.get("article_prefix", DEFAULT_ARTICLE_PREFIX),
            recent_articles_count=theme_cfg.get("recent_articles_count", 5),
            recent_plugins_count=theme_cfg.get("recent_plugins_count", RECENT_PLUGINS_COUNT),
            plugins_index_count=theme_cfg.get("plugins_index_count", PLUGINS_INDEX_COUNT),
            diagram_poll_interval=theme_cfg.get("diagram_poll_interval", 0.1),
            diagram_render_timeout=theme_cfg.get("diagram_render_timeout", 30.0),
            missing_hook_warn_after=theme_cfg.get("missing_hook_warn_after", 50),
            diagram_renderer=theme_cfg.get("diagram_renderer", ""),
        )

        server_cfg = yaml_config.get("server", {})
        port = server_cfg.get("port", 5173)
        port_env = os.getenv("DOCSITE_PORT", "")
        if port_env:
            try:
                port = int(port_env)
            except ValueError:
                pass
        server = ServerConfig(
            host=os.getenv("DOCSITE_HOST", server_cfg.get("host", "0.0.0.0")),
            port=port,
        )

        versions = [VersionInfo.from_dict(v) for v in yaml_config.get("versions", [])]

        return cls(
            config_dir=config_dir,
            site=site,
            theme=theme,
            server=server,
            versions=versions or list(DEFAULT_VERSIONS),
            supported_locales=yaml_config.get("supported_locales", ["en"]),
            sidebar=yaml_config.get("sidebar", {}),
            sidebar_dir=yaml_config.get("sidebar_dir", "sidebars"),
            plugins_file=yaml_config.get("plugins_file", "plugins.yaml"),
        )


def get_site_url(config: Config, host: str | None = None) -> str:
    """Generate the URL the dev server is reachable at."""
    if host is None:
        host = "localhost"
    return f"http://{host}:{config.server.port}{config.site.base}"
