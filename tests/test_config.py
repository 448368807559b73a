import json

import pytest

from mdviewer.config import CONFIG_NAME, load_settings, resolve_root
from mdviewer.errors import ConfigError


def test_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    settings = load_settings()
    assert settings.root == tmp_path.resolve()
    assert settings.port == 8080
    assert settings.host == "127.0.0.1"
    assert settings.debug is False


def test_config_file_in_root(tmp_path):
    (tmp_path / CONFIG_NAME).write_text(json.dumps({"port": 9000, "host": "0.0.0.0", "extra": 1}), encoding="utf-8")
    settings = load_settings(root=str(tmp_path))
    assert settings.port == 9000
    assert settings.host == "0.0.0.0"


def test_cli_overrides_config_file(tmp_path):
    (tmp_path / CONFIG_NAME).write_text(json.dumps({"port": 9000}), encoding="utf-8")
    assert load_settings(root=str(tmp_path), port=7000).port == 7000


def test_config_file_cannot_move_root(tmp_path):
    other = tmp_path / "other"
    other.mkdir()
    (tmp_path / CONFIG_NAME).write_text(json.dumps({"root": str(other)}), encoding="utf-8")
    assert load_settings(root=str(tmp_path)).root == tmp_path.resolve()


def test_explicit_config_path(tmp_path):
    cfg = tmp_path / "custom.json"
    cfg.write_text(json.dumps({"debug": True}), encoding="utf-8")
    assert load_settings(root=str(tmp_path), config_path=str(cfg)).debug is True


def test_malformed_config_falls_back_to_defaults(tmp_path, caplog):
    (tmp_path / CONFIG_NAME).write_text("{not json", encoding="utf-8")
    settings = load_settings(root=str(tmp_path))
    assert settings.port == 8080
    assert "Could not load" in caplog.text


@pytest.mark.parametrize("port", ["abc", 0, 70000])
def test_bad_port(tmp_path, port):
    with pytest.raises(ConfigError):
        load_settings(root=str(tmp_path), port=port)


def test_resolve_root_missing(tmp_path):
    with pytest.raises(ConfigError, match="does not exist"):
        resolve_root(tmp_path / "missing")


def test_resolve_root_not_a_directory(tmp_path):
    f = tmp_path / "file.md"
    f.write_text("x", encoding="utf-8")
    with pytest.raises(ConfigError, match="not a directory"):
        resolve_root(f)
