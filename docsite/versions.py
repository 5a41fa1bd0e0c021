"""
docsite Versions

Documentation versions and locale helpers. A version owns a public path
prefix; pages under that prefix use its PHP version requirements and its
sidebar file.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class VersionInfo:
    """One documented version of the site."""

    version: str
    label: str
    display_name: str
    path: str = "/"
    public_path: str = "/"
    is_current: bool = False
    sidebar_file: str = "sidebar.json"
    php_version: str = "8.4"
    min_php_version: str = "8.1"

    @classmethod
    def from_dict(cls, data: dict) -> "VersionInfo":
        return cls(
            version=str(data["version"]),
            label=data.get("label", str(data["version"])),
            display_name=data.get("display_name", data.get("label", str(data["version"]))),
            path=data.get("path", "/"),
            public_path=data.get("public_path", data.get("path", "/")),
            is_current=bool(data.get("is_current", False)),
            sidebar_file=data.get("sidebar_file", "sidebar.json"),
            php_version=str(data.get("php_version", "8.4")),
            min_php_version=str(data.get("min_php_version", "8.1")),
        )


DEFAULT_VERSIONS: tuple[VersionInfo, ...] = (
    VersionInfo(
        version="plugins",
        label="Plugins",
        display_name="Evgeny's CakePHP Plugins",
        path="/",
        public_path="/",
        is_current=True,
        sidebar_file="sidebar.json",
        php_version="8.4",
        min_php_version="8.1",
    ),
)


def detect_locale_from_path(path: str, supported_locales: list[str]) -> str:
    """Return the locale whose `/<locale>/` prefix starts the path, else "en"."""
    for locale in supported_locales:
        if locale != "en" and path.startswith(f"/{locale}/"):
            return locale
    return "en"


def versions_for_locale(
    versions: list[VersionInfo],
    locale: str = "en",
    localized: dict[str, list[VersionInfo]] | None = None,
) -> list[VersionInfo]:
    """English versions unless a localized list exists for the locale."""
    if locale == "en":
        return versions
    if localized and locale in localized:
        return localized[locale]
    return versions


def current_version(versions: list[VersionInfo]) -> VersionInfo | None:
    for version in versions:
        if version.is_current:
            return version
    return None


def version_by_path(
    path: str,
    versions: list[VersionInfo],
    supported_locales: list[str] | None = None,
    localized: dict[str, list[VersionInfo]] | None = None,
) -> VersionInfo | None:
    """Find the version owning a path; falls back to the current version."""
    locale = detect_locale_from_path(path, supported_locales or ["en"])
    version_list = versions_for_locale(versions, locale, localized)

    for version in version_list:
        if path.startswith(version.public_path):
            return version

    return current_version(version_list)


def version_label(path: str, versions: list[VersionInfo]) -> str:
    version = version_by_path(path, versions)
    if version:
        return version.label
    return versions[0].label if versions else ""


def version_nav_items(versions: list[VersionInfo]) -> list[dict]:
    """Navigation entries for a version dropdown."""
    return [
        {
            "text": v.display_name,
            "link": v.public_path,
            "path": v.public_path,
            "version": v.version,
        }
        for v in versions
    ]
