import pytest

from mdviewer.errors import InvalidPath, PathEscapesRoot
from mdviewer.paths import is_markdown_file, sanitize_relative_path, secure_join, split_relative


@pytest.mark.parametrize("raw, expected", [
    ("a.md", "a.md"),
    ("  docs/guide.md  ", "docs/guide.md"),
    ("docs//guide.md", "docs/guide.md"),
    ("./docs/./guide.md", "docs/guide.md"),
    ("docs/sub/../guide.md", "docs/guide.md"),
    ("docs/guide.md/", "docs/guide.md"),
])
def test_sanitize_normalizes(raw, expected):
    assert sanitize_relative_path(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", ".", "./", "docs/.."])
def test_sanitize_rejects_empty_and_root(raw):
    with pytest.raises(InvalidPath):
        sanitize_relative_path(raw)


@pytest.mark.parametrize("raw", ["..", "../secret.md", "docs/../../secret.md", "a/b/../../../c.md"])
def test_sanitize_rejects_parent_traversal(raw):
    with pytest.raises(PathEscapesRoot):
        sanitize_relative_path(raw)


def test_sanitize_rejects_absolute():
    with pytest.raises(InvalidPath):
        sanitize_relative_path("/etc/passwd")


def test_path_escapes_root_is_invalid_path():
    assert issubclass(PathEscapesRoot, InvalidPath)


def test_secure_join_inside_root(tmp_path):
    assert secure_join(tmp_path, "docs/guide.md") == tmp_path / "docs" / "guide.md"


def test_secure_join_root_itself(tmp_path):
    assert secure_join(tmp_path, ".") == tmp_path


@pytest.mark.parametrize("rel", ["../x.md", "a/../../x.md", ".."])
def test_secure_join_rejects_escape(tmp_path, rel):
    with pytest.raises(PathEscapesRoot):
        secure_join(tmp_path / "root", rel)


def test_secure_join_rejects_absolute_rel(tmp_path):
    with pytest.raises(PathEscapesRoot):
        secure_join(tmp_path / "root", "/etc/passwd")


@pytest.mark.parametrize("name, expected", [
    ("a.md", True),
    ("a.MD", True),
    ("dir/a.markdown", True),
    ("a.Markdown", True),
    ("a.txt", False),
    ("md", False),
    ("a.md.bak", False),
])
def test_is_markdown_file(name, expected):
    assert is_markdown_file(name) is expected


def test_split_relative():
    assert split_relative("a.md") == (".", "a.md")
    assert split_relative("x/y/a.md") == ("x/y", "a.md")
