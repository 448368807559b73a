from unittest import mock

import pytest
from click.testing import CliRunner

from mdviewer.cli import main


@pytest.fixture
def runner():
    return CliRunner()


def test_go_style_flags(runner, root):
    with mock.patch("mdviewer.cli.create_app") as create_app:
        result = runner.invoke(main, ["-root", str(root), "-port", "9123"])

    assert result.exit_code == 0, result.output
    create_app.assert_called_once_with(root.resolve())
    create_app.return_value.run.assert_called_once_with(host="127.0.0.1", port=9123, debug=False)
    assert "http://localhost:9123" in result.output


def test_long_flags(runner, root):
    with mock.patch("mdviewer.cli.create_app") as create_app:
        result = runner.invoke(main, ["--root", str(root), "--host", "0.0.0.0", "--debug"])

    assert result.exit_code == 0, result.output
    create_app.return_value.run.assert_called_once_with(host="0.0.0.0", port=8080, debug=True)


def test_missing_root_is_fatal(runner, tmp_path):
    with mock.patch("mdviewer.cli.create_app") as create_app:
        result = runner.invoke(main, ["-root", str(tmp_path / "nope")])

    assert result.exit_code == 1
    assert "does not exist" in result.output
    create_app.assert_not_called()


def test_root_must_be_directory(runner, root):
    result = runner.invoke(main, ["-root", str(root / "README.md")])
    assert result.exit_code == 1
    assert "not a directory" in result.output
