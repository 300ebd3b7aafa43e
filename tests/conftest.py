import pytest

from game_builder.web import create_app

TEMPLATE_HTML = "<!DOCTYPE html><html><body>template</body></html>"


@pytest.fixture
def dirs(tmp_path):
    template = tmp_path / "game_template.html"
    template.write_text(TEMPLATE_HTML, encoding="utf-8")
    static = tmp_path / "static"
    static.mkdir()
    (static / "index.html").write_text("<h1>builder</h1>", encoding="utf-8")
    return {
        "GAMES_DIR": tmp_path / "games",
        "UPLOAD_TMP_DIR": tmp_path / "tmp_uploads",
        "TEMPLATE_FILE": template,
        "STATIC_DIR": static,
    }


@pytest.fixture
def app(dirs):
    return create_app(dirs)


@pytest.fixture
def client(app):
    return app.test_client()
