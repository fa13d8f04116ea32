import os
import tempfile

import pytest

# Point the profile dir (and with it the add-on log) at a scratch directory
# before anything under test configures the logger.
_PROFILE_ROOT = tempfile.mkdtemp(prefix="savetabtitle-tests-")
os.environ["XDG_CONFIG_HOME"] = _PROFILE_ROOT
os.environ["APPDATA"] = _PROFILE_ROOT
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from savetabtitle.tabs import Tab  # noqa: E402
from savetabtitle.watcher import TitleWatcher  # noqa: E402


class FakeView:
    def __init__(self):
        self.states = []

    def set_state(self, state):
        self.states.append(state)

    @property
    def state(self):
        return self.states[-1] if self.states else None


class FakePanel:
    def __init__(self):
        self.shown = []
        self.visible = False

    def show_path(self, path):
        self.shown.append(path)
        self.visible = True

    def hide(self):
        self.visible = False


class FakeClipboard:
    def __init__(self):
        self.text = None

    def set_text(self, text):
        self.text = text


@pytest.fixture
def view():
    return FakeView()


@pytest.fixture
def panel():
    return FakePanel()


@pytest.fixture
def clipboard():
    return FakeClipboard()


@pytest.fixture
def output_path(tmp_path):
    return str(tmp_path / "savetabtitle.txt")


@pytest.fixture
def watcher(output_path, view, panel, clipboard):
    return TitleWatcher(output_path, view, panel, clipboard)


@pytest.fixture
def make_tab():
    counter = {"n": 0}

    def _factory(title="", url="https://example.com/", active=True):
        counter["n"] += 1
        tab = Tab(f"tab-{counter['n']}", title, url)
        tab.is_active = active
        return tab
    return _factory


def read_output(path):
    with open(path, encoding="utf-8") as f:
        return f.read()
