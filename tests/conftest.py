import os
import tempfile
from pathlib import Path

# Configure before any felit module reads its settings.
_RUNTIME_DIR = Path(tempfile.mkdtemp(prefix="felit-tests-"))
os.environ.setdefault("FELIT_DATABASE_URL", f"sqlite:///{_RUNTIME_DIR / 'default.db'}")
os.environ.setdefault("FELIT_LOG_FILE", str(_RUNTIME_DIR / "server.log"))
os.environ.setdefault("FELIT_BCRYPT_ROUNDS", "4")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from felit.server.main import create_app  # noqa: E402
from felit.server.provision import add_user  # noqa: E402


@pytest.fixture
def app(tmp_path):
    application = create_app(database_url=f"sqlite:///{tmp_path / 'chat.db'}", session_secret="test-secret")
    add_user(application.state.session_factory, "alice", "alice-password")
    add_user(application.state.session_factory, "root", "root-password", is_admin=True)
    yield application
    application.state.engine.dispose()


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def login(client, username, password, **kwargs):
    return client.post("/login", data={"username": username, "password": password}, follow_redirects=False, **kwargs)


@pytest.fixture
def alice(client):
    assert login(client, "alice", "alice-password").status_code == 303
    return client


@pytest.fixture
def root_client(app):
    with TestClient(app) as test_client:
        assert login(test_client, "root", "root-password").status_code == 303
        yield test_client
