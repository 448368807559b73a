from mdviewer.render import render_markdown


def test_renders_fenced_code_and_tables():
    html = render_markdown("```\ncode\n```\n\n| a | b |\n|---|---|\n| 1 | 2 |\n")
    assert "<code>" in html or "codehilite" in html
    assert "<table>" in html


def test_external_links_open_in_new_tab():
    html = render_markdown("[site](https://example.com)")
    assert 'href="https://example.com" target="_blank" rel="noopener noreferrer"' in html


def test_relative_links_untouched():
    html = render_markdown("[other](other.md)")
    assert '<a href="other.md">' in html
