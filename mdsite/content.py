from __future__ import annotations

import datetime as dt
import html as html_lib
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from .errors import FrontMatterError
from .utils import parse_bool

logger = logging.getLogger(__name__)

MARKDOWN_EXT = ".md"
DATE_FMT = "%Y-%m-%d"
DATETIME_FMT = "%Y-%m-%d %H:%M"
TAG_RE = re.compile(r"<[^>]+>")
HEADING_STRIP_RE = re.compile(r"[^\w\s-]", re.UNICODE)
WHITESPACE_RE = re.compile(r"\s+", re.UNICODE)


@dataclass
class Post:
    slug: str
    title: str
    description: str
    date: Optional[dt.datetime]
    public: bool
    body: str
    meta: dict = field(default_factory=dict)
    source: Optional[Path] = None

    @property
    def date_str(self) -> str:
        if self.date is None:
            return ""
        if self.date.time() == dt.time.min:
            return self.date.strftime(DATE_FMT)
        return self.date.strftime(DATETIME_FMT)

    @property
    def file_name(self) -> str:
        return f"{self.slug}.html"


def list_sources(posts_dir: Path, extension: str = MARKDOWN_EXT) -> list[Path]:
    """Markdown files directly inside ``posts_dir``, sorted by name.

    Subdirectories are skipped, as is anything whose lower-cased name does not
    end with ``extension``.
    """
    extension = extension.lower()
    files = [
        path
        for path in posts_dir.iterdir()
        if path.is_file() and path.name.lower().endswith(extension)
    ]
    return sorted(files, key=lambda p: p.name)


def slug_from_name(file_name: str, extension: str = MARKDOWN_EXT) -> str:
    """Strip ``extension`` only when spelled exactly so; ``x.MD`` keeps its own slug."""
    if file_name.endswith(extension):
        return file_name[: -len(extension)]
    return file_name


def heading_slug(value: str, separator: str = "-") -> str:
    text = html_lib.unescape(value).strip().lower()
    text = HEADING_STRIP_RE.sub("", text)
    return WHITESPACE_RE.sub(separator, text)


def strip_tags(html_text: str) -> str:
    return TAG_RE.sub("", html_text)


def excerpt(html_text: str, limit: int = 200) -> str:
    text = html_lib.unescape(strip_tags(html_text))
    text = WHITESPACE_RE.sub(" ", text).strip()
    return text[:limit] + ("..." if len(text) > limit else "")


def parse_front_matter(text: str, source: Optional[Path] = None) -> tuple[dict, str]:
    clean_text = text.lstrip("\ufeff")
    lines = clean_text.splitlines()
    if not lines or lines[0].strip() != "---":
        return {}, clean_text

    end = None
    for i in range(1, len(lines)):
        if lines[i].strip() == "---":
            end = i
            break
    if end is None:
        raise FrontMatterError("front matter block is not closed with '---'", source)

    block = "\n".join(lines[1:end])
    try:
        meta = yaml.safe_load(block)
    except yaml.YAMLError as exc:
        raise FrontMatterError(f"invalid YAML front matter: {exc}", source) from exc
    if meta is None:
        meta = {}
    if not isinstance(meta, dict):
        raise FrontMatterError("front matter must be a mapping", source)
    body = "\n".join(lines[end + 1 :])
    return meta, body


def meta_value(meta: dict, key: str) -> object:
    """Case-insensitive lookup; the keys in ``meta`` keep their spelling."""
    if key in meta:
        return meta[key]
    for name, value in meta.items():
        if str(name).lower() == key:
            return value
    return None


def extract_title(meta: dict, body: str, default: str) -> tuple[str, str]:
    title = meta_value(meta, "title")
    if title:
        return str(title), body
    lines = body.splitlines()
    for i, line in enumerate(lines):
        stripped = line.strip()
        if stripped.startswith("# "):
            title = stripped[2:].strip() or default
            new_body = "\n".join(lines[i + 1 :]).lstrip()
            return title, new_body
        if stripped:
            break
    return default, body


def parse_date(value: object, source: Optional[Path] = None) -> Optional[dt.datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, dt.datetime):
        parsed = value
    elif isinstance(value, dt.date):
        parsed = dt.datetime.combine(value, dt.time.min)
    else:
        text = str(value).strip()
        try:
            if "T" in text or " " in text:
                parsed = dt.datetime.fromisoformat(text)
            else:
                parsed = dt.datetime.combine(dt.date.fromisoformat(text), dt.time.min)
        except ValueError as exc:
            raise FrontMatterError(f"invalid date {text!r}", source) from exc
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(dt.timezone.utc).replace(tzinfo=None)
    return parsed


def parse_post(path: Path, text: str, extension: str = MARKDOWN_EXT) -> Post:
    meta, body = parse_front_matter(text, path)
    slug = slug_from_name(path.name, extension)
    title, body = extract_title(meta, body, slug)
    public = parse_bool(meta_value(meta, "public"))
    date = parse_date(meta_value(meta, "date"), path)
    if public and date is None:
        raise FrontMatterError("public post has no date", path)
    description = meta_value(meta, "description") or meta_value(meta, "summary") or ""
    logger.debug("Parsed %s (slug=%s, public=%s)", path, slug, public)
    return Post(
        slug=slug,
        title=title,
        description=str(description),
        date=date,
        public=public,
        body=body,
        meta=meta,
        source=path,
    )


def read_post(path: Path, extension: str = MARKDOWN_EXT) -> Post:
    return parse_post(path, path.read_text(encoding="utf-8"), extension)
