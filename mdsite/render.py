from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATES = Path(__file__).resolve().parent / "templates"
TEMPLATE_EXT = ".html"


class JinjaRenderer:
    """Renders named templates such as ``post`` and ``index``.

    ``templates_dir`` is searched first, then the templates bundled with the
    package, so a site only needs to override the pages it cares about.
    """

    def __init__(self, templates_dir: Optional[Path] = None):
        search_path = []
        if templates_dir is not None and templates_dir.is_dir():
            search_path.append(str(templates_dir))
        search_path.append(str(DEFAULT_TEMPLATES))
        self.env = Environment(
            loader=FileSystemLoader(search_path),
            autoescape=select_autoescape(["html"]),
            keep_trailing_newline=True,
        )

    def render(self, name: str, context: dict) -> str:
        template = self.env.get_template(f"{name}{TEMPLATE_EXT}")
        return template.render(**context)


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def remove_generated(output_dir: Path, extension: str = TEMPLATE_EXT) -> int:
    """Delete top-level ``extension`` files from ``output_dir``.

    Anything else in the directory (stylesheets, images, subdirectories) is
    left in place. Returns the number of files removed.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    removed = 0
    for path in sorted(output_dir.iterdir()):
        if path.is_file() and path.name.lower().endswith(extension):
            path.unlink()
            removed += 1
    if removed:
        logger.info("Removed %d previously generated file(s) from %s", removed, output_dir)
    return removed
