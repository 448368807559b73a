import os
from pathlib import Path

from .errors import InvalidPath, PathEscapesRoot

MARKDOWN_EXTENSIONS = (".md", ".markdown")


def is_markdown_file(path: str) -> bool:
    return os.path.splitext(path)[1].lower() in MARKDOWN_EXTENSIONS


def _is_parent_traversal(path: str) -> bool:
    return path == ".." or path.startswith(".." + os.sep)


def sanitize_relative_path(raw_path: str) -> str:
    """Normalize a client-supplied path into a root-relative slash path.

    Cleaning is purely lexical; nothing on disk is consulted.  Paths that
    climb above the root raise ``PathEscapesRoot``, every other rejection
    raises ``InvalidPath``.
    """
    clean = (raw_path or "").strip()
    if not clean:
        raise InvalidPath("path is required")
    clean = os.path.normpath(clean.replace("/", os.sep))
    if _is_parent_traversal(clean):
        raise PathEscapesRoot()
    if clean == "." or os.path.isabs(clean) or clean.startswith(os.sep):
        raise InvalidPath()
    return clean.replace(os.sep, "/")


def secure_join(root, rel_path: str) -> Path:

    abs_root = os.path.abspath(root)
    joined = os.path.abspath(os.path.join(abs_root, rel_path.replace("/", os.sep)))
    try:
        rel_check = os.path.relpath(joined, abs_root)
    except ValueError:
        # different drives on Windows
        raise PathEscapesRoot()
    if _is_parent_traversal(rel_check) or os.path.isabs(rel_check):
        raise PathEscapesRoot()
    return Path(joined)


def split_relative(rel_path: str) -> tuple[str, str]:
    """Split ``a/b/c.md`` into ``("a/b", "c.md")``; top-level files get ``"."``."""
    head, _, name = rel_path.rpartition("/")
    return (head or "."), name
