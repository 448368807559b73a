import pytest

from mdviewer.server import create_app


@pytest.fixture
def root(tmp_path):
    (tmp_path / "README.md").write_text("# Readme\n\nHello world\n", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("hello from a text file\n", encoding="utf-8")
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "guide.markdown").write_text("Guide body\n", encoding="utf-8")
    (docs / "Upper.MD").write_text("shouting\n", encoding="utf-8")
    (docs / "image.png").write_bytes(b"\x89PNG")
    return tmp_path


@pytest.fixture
def app(root):
    app = create_app(root)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
