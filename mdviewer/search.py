import logging
import re
from dataclasses import asdict, dataclass

from .listing import walk_markdown

logger = logging.getLogger(__name__)

CONTEXT_CHARS = 60
ELLIPSIS = "…"


@dataclass(frozen=True)
class SearchHit:
    path: str
    context: str

    def to_dict(self) -> dict:
        return asdict(self)


def make_snippet(text: str, start: int, length: int, radius: int = CONTEXT_CHARS) -> str:
    lo = max(0, start - radius)
    hi = min(len(text), start + length + radius)
    snippet = text[lo:hi].replace("\n", " ").replace("\r", "")
    prefix = ELLIPSIS if lo > 0 else ""
    suffix = ELLIPSIS if hi < len(text) else ""
    return prefix + snippet + suffix


def _find(text: str, query: str) -> "re.Match | None":
    # per-character folding keeps offsets aligned with the original text
    return re.search(re.escape(query), text, re.IGNORECASE)


def search_files(root, query: str) -> list[SearchHit]:
    """Case-insensitive substring search over every markdown file.

    Only the first match per file is reported.  Files that cannot be read
    are skipped.
    """
    hits = []
    for full, rel in walk_markdown(root):
        try:
            with open(full, encoding="utf-8", errors="replace") as f:
                text = f.read()
        except OSError as e:
            logger.debug("Search skipped %s: %s", rel, e)
            continue
        match = _find(text, query)
        if match is None:
            continue
        context = make_snippet(text, match.start(), match.end() - match.start())
        hits.append(SearchHit(path=rel, context=context))
    hits.sort(key=lambda h: h.path)
    return hits
