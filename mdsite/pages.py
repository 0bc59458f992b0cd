from __future__ import annotations

import datetime as dt
import logging

from .content import Post, excerpt

logger = logging.getLogger(__name__)


def sort_posts(posts: list[Post]) -> list[Post]:
    """Newest first; posts published at the same moment are ordered by slug."""
    by_slug = sorted(posts, key=lambda p: p.slug)
    return sorted(by_slug, key=lambda p: p.date or dt.datetime.min, reverse=True)


def post_context(post: Post, site_context: dict) -> dict:
    context = dict(post.meta)
    context.update(site_context)
    context.update(
        {
            "title": post.title,
            "description": post.description,
            "date": post.date,
            "date_str": post.date_str,
            "public": post.public,
            "slug": post.slug,
            "body": post.body,
            "post": post,
        }
    )
    return context


def render_post(renderer, converter, post: Post, site_context: dict) -> str:
    post.body = converter.convert(post.body)
    if not post.description:
        post.description = excerpt(post.body)
    logger.debug("Rendering %s", post.file_name)
    return renderer.render("post", post_context(post, site_context))


def render_index(renderer, posts: list[Post], site_context: dict) -> str:
    context = dict(site_context)
    context["posts"] = posts
    return renderer.render("index", context)
