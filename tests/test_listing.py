import os

import pytest

from mdviewer.listing import list_markdown_files
from mdviewer.paths import is_markdown_file


def test_lists_only_markdown_sorted(root):
    files = list_markdown_files(root)
    assert files == ["README.md", "docs/Upper.MD", "docs/guide.markdown"]
    assert files == sorted(files)
    assert all(is_markdown_file(f) for f in files)


def test_includes_hidden_directories(root):
    archive = root / "docs" / ".archive"
    archive.mkdir()
    (archive / "old.md").write_text("old\n", encoding="utf-8")
    assert "docs/.archive/old.md" in list_markdown_files(root)


def test_empty_root(tmp_path):
    assert list_markdown_files(tmp_path) == []


def test_skips_directory_named_like_markdown(tmp_path):
    (tmp_path / "folder.md").mkdir()
    (tmp_path / "folder.md" / "inner.md").write_text("x", encoding="utf-8")
    assert list_markdown_files(tmp_path) == ["folder.md/inner.md"]


@pytest.mark.skipif(os.name == "nt" or os.geteuid() == 0, reason="needs POSIX permissions as non-root")
def test_unreadable_directory_aborts_listing(root):
    locked = root / "locked"
    locked.mkdir()
    locked.chmod(0)
    try:
        with pytest.raises(OSError):
            list_markdown_files(root)
    finally:
        locked.chmod(0o755)
