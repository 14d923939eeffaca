"""
Shared fixtures for the Todo Manager test suite.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from todo_manager.config import ConfigProperties, ServerSettings
from todo_manager.storage import FlatFileTaskStore


@pytest.fixture(autouse=True)
def reset_config_properties():
    """Each test starts without a parsed config.properties."""
    yield
    ConfigProperties._instance = None
    ConfigProperties._properties = {}
    ConfigProperties._loaded = False


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "data.txt"


@pytest.fixture
def file_store(data_file):
    return FlatFileTaskStore(str(data_file))


@pytest.fixture
def static_root(tmp_path):
    root = tmp_path / "public"
    root.mkdir()
    (root / "app.html").write_text("<html><body>todos</body></html>", encoding="utf-8")
    (root / "app.js").write_text("console.log('hi');", encoding="utf-8")
    (root / "style.css").write_text("body { margin: 0; }", encoding="utf-8")
    (root / "manifest.json").write_text('{"name": "todos"}', encoding="utf-8")
    (root / "notes.txt").write_text("plain notes", encoding="utf-8")
    (tmp_path / "secret.txt").write_text("do not serve", encoding="utf-8")
    return root


@pytest.fixture
def settings(data_file, static_root):
    return ServerSettings(data_file=str(data_file), static_root=str(static_root))
