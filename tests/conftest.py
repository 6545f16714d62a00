import sys
from pathlib import Path

import pytest

# Add src to path
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from browser_session import Session  # noqa: E402
sys.path.insert(0, str(Path(__file__).parent))
from _utils import FakeHttp  # noqa: E402

APP = "http://app.test"


@pytest.fixture(autouse=True)
def _no_selenium_env(monkeypatch):
    for name in (
        "SELENIUM_REMOTE_SERVER_HOST",
        "SELENIUM_REMOTE_SERVER_PORT",
        "SELENIUM_REMOTE_SERVER_PATH",
        "SELENIUM_BROWSER_NAME",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def http():
    return FakeHttp()


@pytest.fixture
def session(http):
    s = Session(app_host=APP, http=http)
    yield s
    s.close()
