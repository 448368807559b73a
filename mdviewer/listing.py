import os

from .paths import is_markdown_file


def _raise(err: OSError):
    raise err


def walk_markdown(root, onerror=_raise):
    """Yield ``(abs_path, rel_path)`` for every markdown file below ``root``.

    ``rel_path`` always uses forward slashes.  Directory read errors are
    passed to ``onerror``; the default aborts the walk.
    """
    root = os.path.abspath(root)
    for dirpath, dirnames, filenames in os.walk(root, onerror=onerror):
        dirnames.sort()
        for name in sorted(filenames):
            if not is_markdown_file(name):
                continue
            full = os.path.join(dirpath, name)
            yield full, os.path.relpath(full, root).replace(os.sep, "/")


def list_markdown_files(root) -> list[str]:
    return sorted(rel for _, rel in walk_markdown(root))
