"""
docsite Article Metadata

Scans `<docs>/articles/*.md` and produces the metadata used by the
"recent articles" listing and the article navigation. Articles are sorted
newest first.
"""

import json
import logging
from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from pathlib import Path
from urllib.parse import quote

from docsite.catalog import PluginDescriptor
from docsite.markdown import split_front_matter
from docsite.sitelog import sitelog

logger = logging.getLogger(__name__)

ARTICLES_SECTION = "articles"
DESCRIPTION_MAX_CHARS = 200
RECENT_ARTICLES_COUNT = 5


@dataclass
class ArticleMeta:
    """Metadata for one article page."""

    title: str
    date: str
    description: str
    slug: str
    path: str
    file: str
    tags: list[str] = field(default_factory=list)

    def as_descriptor(self) -> PluginDescriptor:
        """Project onto the listing shape shared with plugins."""
        return PluginDescriptor(
            title=self.title,
            details=self.description,
            link=self.path,
            name=self.slug,
        )

    def to_dict(self) -> dict:
        return asdict(self)


def encode_slug(slug: str) -> str:
    """URL-encode a slug the way browsers' encodeURIComponent does, plus `'`."""
    return quote(slug, safe="!*()").replace("'", "%27")


def normalize_date(value) -> str:
    """Normalise a front matter date to YYYY-MM-DD (today when absent)."""
    if not value:
        return date.today().isoformat()
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    text = str(value)
    if "T" in text:
        text = text.split("T")[0]
    return text


def extract_description(content: str) -> str:
    """First non-empty paragraph, truncated with an ellipsis."""
    paragraphs = [p for p in content.split("\n\n") if p.strip()]
    if not paragraphs:
        return ""
    first = paragraphs[0]
    description = first.strip()[:DESCRIPTION_MAX_CHARS]
    if len(first) > DESCRIPTION_MAX_CHARS:
        description += "..."
    return description


def _as_tags(value) -> list:
    """Front matter tags as a list; a single scalar tag becomes a one-item list."""
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def parse_article(file_path: Path, section: str = ARTICLES_SECTION) -> ArticleMeta:
    """Build metadata for one markdown file."""
    front_matter, content = split_front_matter(file_path.read_text(encoding="utf-8"))
    slug = file_path.stem

    description = front_matter.get("description") or ""
    if not description and content:
        description = extract_description(content)

    return ArticleMeta(
        title=front_matter.get("title") or slug,
        date=normalize_date(front_matter.get("date")),
        description=description,
        tags=_as_tags(front_matter.get("tags")),
        slug=slug,
        path=f"/{section}/{encode_slug(slug)}",
        file=file_path.name,
    )


def scan_articles(docs_dir: Path, section: str = ARTICLES_SECTION) -> list[ArticleMeta]:
    """Collect article metadata, newest first. Missing directory → []."""
    articles_dir = docs_dir / section
    if not articles_dir.is_dir():
        return []

    articles: list[ArticleMeta] = []
    try:
        for file_path in sorted(articles_dir.iterdir()):
            if file_path.suffix != ".md" or file_path.stem == "index":
                continue
            articles.append(parse_article(file_path, section))
    except (OSError, ValueError) as e:
        logger.warning(f"Error reading articles in {articles_dir}: {e}")
        return []

    # Stable sort keeps file-name order for equal dates
    articles.sort(key=lambda a: a.date, reverse=True)
    return articles


def generate_articles_metadata(
    docs_dir: Path,
    public_dir: Path,
    recent_count: int = RECENT_ARTICLES_COUNT,
    section: str = ARTICLES_SECTION,
) -> list[ArticleMeta]:
    """
    Scan articles and write articles-metadata.json and recent-articles.json.

    Returns:
        All articles, newest first
    """
    articles = scan_articles(docs_dir, section)
    recent = articles[:recent_count]

    public_dir.mkdir(parents=True, exist_ok=True)
    (public_dir / "articles-metadata.json").write_text(
        json.dumps([a.to_dict() for a in articles], indent=2)
    )
    (public_dir / "recent-articles.json").write_text(
        json.dumps([a.to_dict() for a in recent], indent=2)
    )

    sitelog.metadata("articles-metadata.json", len(articles))
    sitelog.metadata("recent-articles.json", len(recent))
    return articles
