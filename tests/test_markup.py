from mdsite.markup import HIGHLIGHT_CLASS, MarkdownConverter


def test_headings_get_linkable_ids():
    html = MarkdownConverter().convert("## Getting Started!\n\nText")

    assert '<h2 id="getting-started">Getting Started!</h2>' in html


def test_duplicate_headings_get_unique_ids():
    html = MarkdownConverter().convert("## Setup\n\n## Setup\n")

    assert 'id="setup"' in html
    assert 'id="setup_1"' in html


def test_permalinks_add_heading_anchor():
    html = MarkdownConverter(permalinks=True).convert("## Notes\n")

    assert 'class="headerlink"' in html
    assert 'href="#notes"' in html


def test_fenced_code_is_highlighted_by_declared_language():
    text = "```python\nprint('hi')\n```\n"

    html = MarkdownConverter().convert(text)

    assert f'<div class="{HIGHLIGHT_CLASS}">' in html
    assert '<span class="nb">print</span>' in html


def test_tables_are_rendered():
    html = MarkdownConverter().convert("| a | b |\n|---|---|\n| 1 | 2 |\n")

    assert "<table>" in html
    assert "<td>1</td>" in html


def test_stylesheet_targets_highlight_class():
    css = MarkdownConverter().stylesheet()

    assert f".{HIGHLIGHT_CLASS}" in css
