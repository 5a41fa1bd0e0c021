"""
docsite Plugin Catalogue

The build-time list of documented plugins. It feeds the home page features,
the "recent plugins" listing and the plugins index page.

Declaration order is significant: the recent list is the first N entries as
declared, while the full index is sorted by title.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

from docsite.sitelog import sitelog

logger = logging.getLogger(__name__)

RECENT_PLUGINS_COUNT = 16
PLUGINS_INDEX_COUNT = 12


@dataclass(frozen=True)
class PluginDescriptor:
    """A single listing entry: plugin or article projected to the same shape."""

    title: str
    details: str
    link: str
    name: str


def load_descriptors(path: Path) -> list[PluginDescriptor]:
    """Read descriptors from a YAML list. A missing file yields an empty list."""
    if not path.exists():
        logger.info(f"No plugin catalogue at {path}")
        return []

    with open(path) as f:
        raw = yaml.safe_load(f) or []

    descriptors = [
        PluginDescriptor(
            title=item["title"],
            details=item.get("details", ""),
            link=item["link"],
            name=item.get("name", item["title"]),
        )
        for item in raw
    ]
    logger.info(f"Loaded {len(descriptors)} plugin descriptor(s) from {path}")
    return descriptors


def to_metadata(descriptor: PluginDescriptor) -> dict:
    """Metadata record as published in the JSON files."""
    return {
        "title": descriptor.title,
        "description": descriptor.details,
        "slug": descriptor.name,
        "path": descriptor.link,
        "name": descriptor.name,
    }


def recent_plugins(descriptors: list[PluginDescriptor], count: int = RECENT_PLUGINS_COUNT) -> list[PluginDescriptor]:
    """First `count` descriptors in declared order."""
    return list(descriptors[:count])


def sorted_plugins(descriptors: list[PluginDescriptor]) -> list[PluginDescriptor]:
    """All descriptors sorted by title, case-insensitively."""
    return sorted(descriptors, key=lambda d: d.title.casefold())


def generate_plugins_metadata(
    descriptors: list[PluginDescriptor],
    public_dir: Path,
    recent_count: int = RECENT_PLUGINS_COUNT,
) -> list[dict]:
    """
    Write plugins-metadata.json (sorted) and recent-plugins.json (first N).

    Returns:
        Metadata records in declared order
    """
    plugins = [to_metadata(d) for d in descriptors]
    recent = [to_metadata(d) for d in recent_plugins(descriptors, recent_count)]
    ordered = [to_metadata(d) for d in sorted_plugins(descriptors)]

    public_dir.mkdir(parents=True, exist_ok=True)
    (public_dir / "plugins-metadata.json").write_text(json.dumps(ordered, indent=2))
    (public_dir / "recent-plugins.json").write_text(json.dumps(recent, indent=2))

    sitelog.metadata("plugins-metadata.json", len(ordered))
    sitelog.metadata("recent-plugins.json", len(recent))
    return plugins
