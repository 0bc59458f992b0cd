from __future__ import annotations

import markdown
from pygments.formatters import HtmlFormatter

from .content import heading_slug

HIGHLIGHT_CLASS = "codehilite"


class MarkdownConverter:
    """Markdown to HTML with heading ids and Pygments highlighting.

    ``markdown.Markdown`` instances keep per-document state, so each call
    builds its own and conversions can run on worker threads.
    """

    def __init__(self, guess_lang: bool = True, permalinks: bool = False, pygments_style: str = "default"):
        self.guess_lang = guess_lang
        self.permalinks = permalinks
        self.pygments_style = pygments_style

    def _markdown(self) -> markdown.Markdown:
        return markdown.Markdown(
            extensions=["fenced_code", "tables", "toc", "codehilite"],
            extension_configs={
                "toc": {"slugify": heading_slug, "permalink": self.permalinks},
                "codehilite": {
                    "css_class": HIGHLIGHT_CLASS,
                    "guess_lang": self.guess_lang,
                    "pygments_style": self.pygments_style,
                },
            },
        )

    def convert(self, text: str) -> str:
        return self._markdown().convert(text)

    def stylesheet(self) -> str:
        formatter = HtmlFormatter(style=self.pygments_style, cssclass=HIGHLIGHT_CLASS)
        return formatter.get_style_defs(f".{HIGHLIGHT_CLASS}")
