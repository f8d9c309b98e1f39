import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

# Keep the score table out of instance/ while testing
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from mazegame import create_app, db  # noqa: E402
from tests.maze_test_utils import ZeroRng, corridor  # noqa: E402


@pytest.fixture(scope="session")
def test_app():
    app = create_app()
    app.config.update({"TESTING": True})
    return app


@pytest.fixture(autouse=True)
def _push_app_context(test_app):
    ctx = test_app.app_context()
    ctx.push()
    try:
        yield
    finally:
        ctx.pop()


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


def pytest_configure(config):  # register custom marker
    config.addinivalue_line("markers", "db_isolation: force per-test DB rebuild for this test")


@pytest.fixture(autouse=True)
def _conditional_db_isolation(request, test_app):
    """Recreate the score table only for tests marked with @pytest.mark.db_isolation."""
    if "db_isolation" in request.keywords:
        with test_app.app_context():
            db.drop_all()
            db.create_all()
    yield


@pytest.fixture(autouse=True)
def _clear_round_registries():
    """Session-keyed round controllers must not leak between tests."""
    from mazegame.routes import maze_api
    from mazegame.websockets import game

    maze_api._rounds.clear()
    game._connections.clear()
    game._last_round.clear()
    yield


@pytest.fixture()
def zero_rng():
    return ZeroRng()


@pytest.fixture()
def corridor_grid():
    return corridor(4)
