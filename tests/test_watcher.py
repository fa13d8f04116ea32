import os

import pytest

from savetabtitle.watcher import ToggleState

from .conftest import read_output


@pytest.fixture
def write_count(monkeypatch):
    """Count successful title writes."""
    import savetabtitle.watcher as watcher_mod

    calls = []
    real_open = open

    def counting_open(path, mode="r", *args, **kwargs):
        if "w" in mode:
            calls.append(path)
        return real_open(path, mode, *args, **kwargs)

    monkeypatch.setattr(watcher_mod, "open", counting_open, raising=False)
    return calls


def test_starts_disabled(watcher, view):
    assert watcher.watched is None
    assert watcher.last_saved is None
    assert not watcher.is_enabled
    assert view.state is ToggleState.DISABLED


def test_disabled_triggers_never_write(watcher, make_tab, output_path, write_count):
    tab = make_tab("Home")
    for _ in range(3):
        watcher.on_tab_ready(tab)
        watcher.on_poll_tick()
    assert write_count == []
    assert not os.path.exists(output_path)


def test_toggle_enables_and_writes(watcher, make_tab, output_path, view, panel):
    tab = make_tab("Home")
    watcher.on_toggle(tab)

    assert watcher.watched is tab
    assert watcher.last_saved == "Home"
    assert read_output(output_path) == "Home"
    assert view.state is ToggleState.ENABLED
    assert view.state.label == "Save Tab Title [Enabled]"
    assert panel.shown == [output_path]


def test_title_change_written_once(watcher, make_tab, output_path, write_count):
    tab = make_tab("A")
    watcher.on_toggle(tab)
    del write_count[:]

    tab.title = "B"
    watcher.on_poll_tick()
    watcher.on_poll_tick()

    assert write_count == [output_path]
    assert watcher.last_saved == "B"
    assert read_output(output_path) == "B"


def test_poll_without_change_does_not_write(watcher, make_tab, write_count):
    tab = make_tab("Same")
    watcher.on_toggle(tab)
    del write_count[:]

    watcher.on_poll_tick()
    assert write_count == []


def test_ready_for_other_tab_is_ignored(watcher, make_tab, output_path):
    watched = make_tab("Watched")
    other = make_tab("Other", active=False)
    watcher.on_toggle(watched)

    watcher.on_tab_ready(other)
    assert read_output(output_path) == "Watched"


def test_ready_for_watched_tab_writes(watcher, make_tab, output_path):
    tab = make_tab("Page one")
    watcher.on_toggle(tab)
    tab.title = "Page two"
    watcher.on_tab_ready(tab)
    assert read_output(output_path) == "Page two"
    assert watcher.last_saved == "Page two"


def test_close_clears_state(watcher, make_tab, view, write_count):
    tab = make_tab("Home")
    watcher.on_toggle(tab)
    watcher.on_tab_closed(tab)

    assert watcher.watched is None
    assert watcher.last_saved is None
    assert view.state is ToggleState.DISABLED
    assert view.state.label == "Save Tab Title [Disabled]"

    del write_count[:]
    tab.title = "Later"
    watcher.on_poll_tick()
    assert write_count == []


def test_closing_unwatched_tab_keeps_watching(watcher, make_tab, view):
    tab = make_tab("Home")
    other = make_tab("Other", active=False)
    watcher.on_toggle(tab)
    watcher.on_tab_closed(other)
    assert watcher.watched is tab
    assert view.state is ToggleState.ENABLED


def test_retoggle_on_watched_active_tab_disables(watcher, make_tab, view, panel):
    tab = make_tab("Home")
    watcher.on_toggle(tab)
    watcher.on_toggle(tab)

    assert watcher.watched is None
    assert watcher.last_saved is None
    assert view.state is ToggleState.DISABLED
    assert panel.shown == [watcher.output_path]


def test_toggle_on_other_tab_switches(watcher, make_tab, output_path):
    first = make_tab("First")
    watcher.on_toggle(first)
    first.is_active = False
    second = make_tab("Second")

    watcher.on_toggle(second)
    assert watcher.watched is second
    assert read_output(output_path) == "Second"


def test_toggle_without_active_tab_stays_disabled(watcher, view, panel):
    watcher.on_toggle(None)
    assert not watcher.is_enabled
    assert view.state is ToggleState.DISABLED
    assert panel.shown == []


def test_toggle_on_closed_tab_stays_disabled(watcher, make_tab, view):
    tab = make_tab("Gone")
    tab.closed = True
    watcher.on_toggle(tab)
    assert not watcher.is_enabled
    assert view.state is ToggleState.DISABLED


def test_write_failure_keeps_watching_and_retries(tmp_path, view, panel, clipboard, make_tab):
    from savetabtitle.watcher import TitleWatcher

    missing_dir = tmp_path / "missing"
    path = str(missing_dir / "savetabtitle.txt")
    watcher = TitleWatcher(path, view, panel, clipboard)
    tab = make_tab("Home")

    watcher.on_toggle(tab)
    assert watcher.watched is tab
    assert watcher.last_saved is None
    assert view.state is ToggleState.ENABLED

    missing_dir.mkdir()
    watcher.on_poll_tick()
    assert watcher.last_saved == "Home"
    assert read_output(path) == "Home"


def test_write_truncates_previous_title(watcher, make_tab, output_path):
    tab = make_tab("A much longer title")
    watcher.on_toggle(tab)
    tab.title = "Short"
    watcher.on_poll_tick()
    assert read_output(output_path) == "Short"


def test_unicode_title(watcher, make_tab, output_path):
    tab = make_tab("Übersicht – 東京")
    watcher.on_toggle(tab)
    assert read_output(output_path) == "Übersicht – 東京"


def test_copy_request_copies_path_and_hides_panel(watcher, make_tab, panel, clipboard):
    watcher.on_toggle(make_tab("Home"))
    assert panel.visible

    watcher.on_copy_requested()
    assert clipboard.text == watcher.output_path
    assert not panel.visible


def test_scenario(watcher, make_tab, output_path, view, panel, write_count):
    t1 = make_tab("Home")
    watcher.on_toggle(t1)
    assert read_output(output_path) == "Home"
    assert panel.shown == [output_path]
    assert view.state.label.endswith("[Enabled]")

    # Script-driven title change: no ready notification, only the poll.
    t1.title = "Docs"
    watcher.on_poll_tick()
    assert read_output(output_path) == "Docs"

    watcher.on_tab_closed(t1)
    assert view.state.label.endswith("[Disabled]")

    del write_count[:]
    t1.title = "Gone"
    watcher.on_poll_tick()
    watcher.on_poll_tick()
    assert write_count == []
    assert read_output(output_path) == "Docs"
