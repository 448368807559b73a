import re

import markdown

_EXTERNAL_LINK_RE = re.compile(r'<a href="(https?://[^"]+)"')


def _extensions() -> list[str]:
    extensions = ["fenced_code", "tables", "toc", "sane_lists"]
    try:
        import pygments  # noqa: F401
        extensions.append("codehilite")
    except ImportError:
        pass
    return extensions


def render_markdown(text: str) -> str:
    html = markdown.markdown(text, extensions=_extensions())
    return _EXTERNAL_LINK_RE.sub(
        r'<a href="\1" target="_blank" rel="noopener noreferrer"',
        html,
    )
