from __future__ import annotations

import argparse
import logging
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Iterable, Optional, TypeVar

from .config import BuildConfig, load_config
from .content import Post, list_sources, read_post
from .errors import BuildError
from .markup import MarkdownConverter
from .pages import render_index, render_post, sort_posts
from .render import JinjaRenderer, remove_generated, write_text
from .utils import parse_bool, parse_int, resolve_workers

logger = logging.getLogger(__name__)

INDEX_FILE = "index.html"

T = TypeVar("T")
R = TypeVar("R")


def run_parallel(func: Callable[[T], R], items: Iterable[T], workers: int) -> list[R]:
    """Map ``func`` over ``items`` on a thread pool; the first error propagates."""
    items = list(items)
    if not items:
        return []
    max_workers = resolve_workers(workers, len(items))
    if max_workers <= 1:
        return [func(item) for item in items]
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(func, items))


def build_site(config: BuildConfig, renderer=None, converter=None) -> list[Post]:
    """Build every public post plus the index into ``config.output_dir``.

    All pages are rendered in memory before the output directory is touched,
    so a bad source file or template leaves previous output as it was.
    Returns the public posts in index order.
    """
    posts_dir = config.posts_dir
    output_dir = config.output_dir
    if not posts_dir.is_dir():
        raise BuildError("posts directory not found", posts_dir)

    if renderer is None:
        renderer = JinjaRenderer(config.templates_dir)
    if converter is None:
        converter = MarkdownConverter(guess_lang=config.guess_lang, permalinks=config.heading_permalinks)

    sources = list_sources(posts_dir, config.extension)
    logger.info("Found %d source file(s) in %s", len(sources), posts_dir)
    posts = run_parallel(lambda path: read_post(path, config.extension), sources, config.build_workers)

    public_posts = []
    for post in posts:
        if post.public:
            public_posts.append(post)
        else:
            logger.info("Skipping non-public post %s", post.source)

    site_context = {"site_name": config.site_name}
    stylesheet = getattr(converter, "stylesheet", None)
    site_context["highlight_css"] = stylesheet() if callable(stylesheet) else ""

    rendered = run_parallel(
        lambda post: (post.file_name, render_post(renderer, converter, post, site_context)),
        public_posts,
        config.build_workers,
    )
    ordered = sort_posts(public_posts)
    rendered.append((INDEX_FILE, render_index(renderer, ordered, site_context)))

    remove_generated(output_dir)

    def write_page(page: tuple[str, str]) -> None:
        file_name, html_doc = page
        write_text(output_dir / file_name, html_doc)
        logger.debug("Wrote %s", output_dir / file_name)

    run_parallel(write_page, rendered, config.build_workers)
    return ordered


def main(argv: Optional[list[str]] = None) -> int:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument(
        "--config",
        default="site.toml",
        help="Path to site config file (TOML/YAML/JSON).",
    )
    pre_args, _ = pre_parser.parse_known_args(argv)
    config = load_config(Path(pre_args.config))

    def cfg_value(key: str, default: object) -> object:
        value = config.get(key)
        return default if value is None else value

    def cfg_str(key: str, default: str) -> str:
        return str(cfg_value(key, default))

    def cfg_bool(key: str, default: bool) -> bool:
        return parse_bool(cfg_value(key, default))

    def cfg_int(key: str, default: int) -> int:
        return parse_int(cfg_value(key, default), default)

    parser = argparse.ArgumentParser(description="Markdown posts to a static HTML site.")
    parser.add_argument("--config", default=pre_args.config, help="Path to site config file (TOML/YAML/JSON).")
    parser.add_argument("--posts", default=cfg_str("posts", "posts"), help="Directory containing Markdown posts.")
    parser.add_argument("--output", default=cfg_str("output", "public"), help="Output directory for the site.")
    parser.add_argument(
        "--templates",
        default=cfg_str("templates", "templates"),
        help="Directory with post.html/index.html overriding the bundled templates.",
    )
    parser.add_argument("--site-name", default=cfg_str("site_name", "Blog"), help="Site title.")
    parser.add_argument(
        "--build-workers",
        default=cfg_int("build_workers", 0),
        type=int,
        help="Number of worker threads for reading/rendering/writing (0 = auto).",
    )
    parser.add_argument(
        "--guess-lang",
        action=argparse.BooleanOptionalAction,
        default=cfg_bool("guess_lang", True),
        help="Guess the language of code blocks that do not declare one.",
    )
    parser.add_argument(
        "--heading-permalinks",
        action=argparse.BooleanOptionalAction,
        default=cfg_bool("heading_permalinks", False),
        help="Add a permalink anchor to every heading.",
    )
    parser.add_argument(
        "--verbose",
        action=argparse.BooleanOptionalAction,
        default=cfg_bool("verbose", False),
        help="Log build progress.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    start = time.perf_counter()
    try:
        created = build_site(BuildConfig.from_args(args))
    except Exception as exc:
        print(f"Build failed: {exc}", file=sys.stderr)
        return 1
    elapsed = time.perf_counter() - start
    logger.info("Build completed in %.2fs", elapsed)
    print(f"Build successful. Generated {len(created)} post(s).")
    return 0
