"""
docsite Sidebar

Loads per-version sidebar JSON files and merges them with the sidebar
declared in docsite.yaml. A sidebar is a mapping of path prefix → list of
groups; the longest prefix matching a route wins.
"""

import json
import logging
from pathlib import Path
from typing import Any

from docsite.versions import VersionInfo

logger = logging.getLogger(__name__)


def update_links(item: Any, from_path: str, to_path: str) -> Any:
    """Rewrite `link` values (first occurrence of from_path) recursively."""
    if isinstance(item, list):
        return [update_links(sub, from_path, to_path) for sub in item]

    if not isinstance(item, dict):
        return item

    updated = dict(item)
    if updated.get("link"):
        updated["link"] = updated["link"].replace(from_path, to_path, 1)
    if "items" in updated:
        updated["items"] = update_links(updated["items"], from_path, to_path)
    return updated


def load_sidebar_configurations(sidebar_dir: Path, versions: list[VersionInfo]) -> dict[str, dict]:
    """Read each version's sidebar file; missing or broken files are skipped."""
    sidebars: dict[str, dict] = {}
    for version in versions:
        file_path = sidebar_dir / version.sidebar_file
        try:
            sidebars[version.version] = json.loads(file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Could not load sidebar for version {version.version}: {e}")
    return sidebars


def generate_sidebars(
    sidebar_dir: Path,
    versions: list[VersionInfo],
    configured: dict | None = None,
) -> dict[str, list]:
    """
    Build the full sidebar mapping.

    Each version contributes the entry stored under its own `path` key,
    re-rooted at its public path. Entries in `configured` win.
    """
    result: dict[str, list] = {}
    loaded = load_sidebar_configurations(sidebar_dir, versions)

    for version in versions:
        data = loaded.get(version.version)
        if not data:
            logger.warning(f"Skipping sidebar for version {version.version} - no sidebar data found")
            continue
        groups = data.get(version.path)
        if groups is None:
            continue
        if version.path != version.public_path:
            groups = update_links(groups, version.path, version.public_path)
        result[version.public_path] = groups

    result.update(configured or {})
    return result


def sidebar_for_path(sidebars: dict[str, list], path: str) -> list:
    """Groups for the longest sidebar prefix that starts the path."""
    best = None
    for prefix in sidebars:
        if path.startswith(prefix) and (best is None or len(prefix) > len(best)):
            best = prefix
    return sidebars[best] if best is not None else []
