import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from roomweaver import create_app  # noqa: E402
from roomweaver.routes.dungeon_api import reset_active_dungeon  # noqa: E402


@pytest.fixture(scope="session")
def test_app():
    app = create_app()
    app.config.update({"TESTING": True})
    return app


@pytest.fixture(autouse=True)
def _fresh_active_dungeon():
    # Each test starts from the environment defaults, not a layout left by a previous request
    reset_active_dungeon()
    yield
    reset_active_dungeon()


@pytest.fixture()
def client(test_app):
    return test_app.test_client()
