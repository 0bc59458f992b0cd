from pathlib import Path

import pytest

from mdsite.config import BuildConfig


def write_post(posts_dir: Path, name: str, *, title="Untitled", date="2024-01-01", public=True, body="Hello.", extra=""):
    """Write a Markdown source with a YAML front matter block."""
    lines = ["---", f"title: {title}", f"description: About {title}"]
    if date is not None:
        lines.append(f"date: {date}")
    if public is not None:
        lines.append(f"public: {'true' if public else 'false'}")
    if extra:
        lines.append(extra)
    lines.append("---")
    path = posts_dir / name
    path.write_text("\n".join(lines) + "\n" + body + "\n", encoding="utf-8")
    return path


class FakeRenderer:
    """Records every render call and returns a predictable page."""

    def __init__(self):
        self.calls = []

    def render(self, name, context):
        self.calls.append((name, context))
        if name == "index":
            return "index:" + ",".join(post.slug for post in context["posts"])
        return f"{name}:{context['slug']}:{context['body']}"


class UpperConverter:
    def convert(self, text):
        return text.upper()


@pytest.fixture
def posts_dir(tmp_path):
    path = tmp_path / "posts"
    path.mkdir()
    return path


@pytest.fixture
def output_dir(tmp_path):
    return tmp_path / "public"


@pytest.fixture
def config(tmp_path, posts_dir, output_dir):
    return BuildConfig(
        posts_dir=posts_dir,
        output_dir=output_dir,
        templates_dir=tmp_path / "templates",
        site_name="Test Blog",
        build_workers=4,
    )


@pytest.fixture
def make_post(posts_dir):
    def _make_post(name, **kwargs):
        return write_post(posts_dir, name, **kwargs)

    return _make_post


@pytest.fixture
def fake_renderer():
    return FakeRenderer()


@pytest.fixture
def upper_converter():
    return UpperConverter()
