import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from dungeoncarver import create_app  # noqa: E402
from dungeoncarver.routes.dungeon_api import clear_cache  # noqa: E402


@pytest.fixture()
def test_app(monkeypatch):
    # Keep generation output off the captured stdout unless a test opts in
    monkeypatch.setenv("DUNGEONCARVER_LOG_LEVEL", "warn")
    app = create_app({"TESTING": True})
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture(autouse=True)
def _clear_dungeon_cache():
    """Cached dungeons must not leak between tests that tweak cache config."""
    clear_cache()
    yield
    clear_cache()
