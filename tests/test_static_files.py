"""
Tests for the static file responder.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from ui.server import create_app
from ui.static_files import StaticFileResponder, content_type_for


class TestContentType:

    @pytest.mark.parametrize("name,expected", [
        ("app.js", "text/javascript"),
        ("style.css", "text/css"),
        ("data.json", "application/json"),
        ("APP.JS", "text/javascript"),
        ("index.html", "text/html"),
        ("notes.txt", "text/html"),
        ("README", "text/html"),
    ])
    def test_inferred_from_extension(self, name, expected):
        assert content_type_for(Path(name)) == expected


class TestResolve:

    def test_root_maps_to_default_document(self, static_root):
        responder = StaticFileResponder(str(static_root))
        assert responder.resolve("/") == static_root.resolve() / "app.html"

    def test_custom_default_document(self, static_root):
        responder = StaticFileResponder(str(static_root), default_document="index.html")
        assert responder.resolve("/").name == "index.html"

    @pytest.mark.parametrize("path", [
        "/../secret.txt",
        "/sub/../../secret.txt",
        "/..",
        "//../secret.txt",
    ])
    def test_traversal_is_confined(self, static_root, path):
        responder = StaticFileResponder(str(static_root))
        assert responder.resolve(path) is None

    def test_symlink_out_of_root_is_rejected(self, static_root, tmp_path):
        link = static_root / "leak.txt"
        os.symlink(tmp_path / "secret.txt", link)
        responder = StaticFileResponder(str(static_root))
        assert responder.resolve("/leak.txt") is None

    def test_absolute_looking_path_stays_inside(self, static_root):
        responder = StaticFileResponder(str(static_root))
        assert responder.resolve("//etc/passwd") == static_root.resolve() / "etc" / "passwd"


class TestRespond:

    def test_serves_file(self, static_root):
        response = StaticFileResponder(str(static_root)).respond("/app.js")
        assert response.status_code == 200
        assert response.body == b"console.log('hi');"
        assert response.headers["content-type"].startswith("text/javascript")

    def test_traversal_is_404(self, static_root):
        response = StaticFileResponder(str(static_root)).respond("/../secret.txt")
        assert response.status_code == 404
        assert b"do not serve" not in response.body

    def test_directory_is_404(self, static_root):
        (static_root / "assets").mkdir()
        response = StaticFileResponder(str(static_root)).respond("/assets")
        assert response.status_code == 404

    def test_read_failure_is_500(self, static_root):
        responder = StaticFileResponder(str(static_root))
        with patch.object(Path, "read_bytes", side_effect=PermissionError("denied")):
            response = responder.respond("/app.html")
        assert response.status_code == 500
        assert response.body == b"Server Error"
        assert response.headers["content-type"].startswith("text/plain")


class TestStaticOverHttp:

    @pytest.fixture
    def client(self, settings):
        return TestClient(create_app(settings))

    def test_index(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "todos" in response.text

    @pytest.mark.parametrize("path,content_type", [
        ("/app.js", "text/javascript"),
        ("/style.css", "text/css"),
        ("/manifest.json", "application/json"),
        ("/notes.txt", "text/html"),
    ])
    def test_content_types(self, client, path, content_type):
        response = client.get(path)
        assert response.status_code == 200
        assert response.headers["content-type"].startswith(content_type)

    def test_missing_file(self, client):
        response = client.get("/nope.html")
        assert response.status_code == 404
        assert response.text == "<h1>404 Not Found</h1>"
        assert response.headers["content-type"].startswith("text/html")

    def test_encoded_query_character_is_part_of_name(self, client, static_root):
        (static_root / "a?b.html").write_text("<p>odd name</p>", encoding="utf-8")
        response = client.get("/a%3Fb.html")
        assert response.status_code == 200
        assert response.text == "<p>odd name</p>"

    def test_encoded_traversal_is_404(self, client):
        response = client.get("/%2e%2e/secret.txt")
        assert response.status_code == 404
        assert "do not serve" not in response.text
