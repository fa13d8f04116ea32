"""Keep Tab handles in sync with the browser and notify on load / close."""

import traceback
from typing import Any, Callable, Dict, List, Optional

import requests

from ..log_util import log
from . import Tab
from .devtools import fetch_tabs, is_browser_running

TabCallback = Callable[[Tab], None]


class TabTracker:
    """Poll the browser's tab list and turn snapshots into tab events.

    A tab that shows up for the first time, or whose URL changed since the
    last snapshot, is reported as 'ready'. A tab missing from the snapshot is
    marked closed and reported as 'close'. Title changes without navigation
    are only reflected in `Tab.title`; nothing is emitted for them.
    """

    POLL_INTERVAL_MS: int = 250

    def __init__(self, fetch: Callable[[], List[Dict[str, Any]]] = fetch_tabs) -> None:
        self._fetch = fetch
        self._tabs: Dict[str, Tab] = {}
        self._active: Optional[Tab] = None
        self._ready_subscribers: List[TabCallback] = []
        self._close_subscribers: List[TabCallback] = []
        self._reachable: Optional[bool] = None
        self._timer = None

    @property
    def active_tab(self) -> Optional[Tab]:
        """The foreground tab as of the last snapshot, or None."""
        return self._active

    @property
    def tabs(self) -> List[Tab]:
        return list(self._tabs.values())

    def subscribe_ready(self, callback: TabCallback) -> None:
        if callback not in self._ready_subscribers:
            self._ready_subscribers.append(callback)

    def unsubscribe_ready(self, callback: TabCallback) -> None:
        if callback in self._ready_subscribers:
            self._ready_subscribers.remove(callback)

    def subscribe_close(self, callback: TabCallback) -> None:
        if callback not in self._close_subscribers:
            self._close_subscribers.append(callback)

    def unsubscribe_close(self, callback: TabCallback) -> None:
        if callback in self._close_subscribers:
            self._close_subscribers.remove(callback)

    def _notify(self, subscribers: List[TabCallback], tab: Tab, event: str) -> None:
        for callback in list(subscribers):
            try:
                callback(tab)
            except Exception as e:
                # One broken subscriber must not starve the others.
                log(f"Tab {event} subscriber error: {e}\n{traceback.format_exc()}", level="error")

    def _browser_running(self) -> bool:
        try:
            return is_browser_running()
        except Exception as e:
            log(f"Browser process lookup failed: {e}", level="debug")
            return False

    def _set_reachable(self, reachable: bool, error: Optional[Exception] = None,
                       running: bool = False) -> None:
        if reachable == self._reachable:
            return
        self._reachable = reachable
        if reachable:
            log("Connected to the browser DevTools endpoint")
            return
        log(f"Browser DevTools endpoint unreachable: {error}", level="warning")
        if running:
            log("A browser is running but not listening for DevTools; "
                "restart it with --remote-debugging-port=9222", level="warning")

    def _close(self, closed: List[Tab]) -> None:
        for tab in closed:
            del self._tabs[tab.id]
            tab.closed = True
            tab.is_active = False
            if tab is self._active:
                self._active = None
        for tab in closed:
            self._notify(self._close_subscribers, tab, "close")

    def refresh(self) -> bool:
        """Fetch one snapshot and emit the resulting events.

        A refused connection with no browser process left means the browser
        quit: every known tab is closed. Any other failure leaves known tabs
        untouched.

        Returns:
            True when a snapshot was applied, False when the browser could
            not be queried.
        """
        try:
            targets = self._fetch()
        except requests.ConnectionError as e:
            running = self._browser_running()
            self._set_reachable(False, e, running)
            if not running and self._tabs:
                log(f"Browser quit; closing {len(self._tabs)} tab(s)")
                self._close(list(self._tabs.values()))
            return False
        except (requests.RequestException, ValueError) as e:
            self._set_reachable(False, e, self._browser_running())
            return False
        self._set_reachable(True)

        seen = set()
        ready: List[Tab] = []
        active: Optional[Tab] = None
        for target in targets:
            tab_id = target.get("id")
            if not tab_id or tab_id in seen:
                continue
            seen.add(tab_id)
            title = target.get("title") or ""
            url = target.get("url") or ""

            tab = self._tabs.get(tab_id)
            if tab is None:
                tab = Tab(tab_id, title, url)
                self._tabs[tab_id] = tab
                ready.append(tab)
            else:
                if tab.url != url:
                    ready.append(tab)
                tab.title = title
                tab.url = url
            if active is None:
                active = tab

        for tab in self._tabs.values():
            tab.is_active = tab is active
        self._active = active

        self._close([tab for tab_id, tab in self._tabs.items() if tab_id not in seen])
        for tab in ready:
            self._notify(self._ready_subscribers, tab, "ready")
        return True

    def _on_timer(self) -> None:
        try:
            self.refresh()
        except Exception as e:
            log(f"Tab tracker error: {e}\n{traceback.format_exc()}", level="error")

    def start(self, poll_interval_ms: int = POLL_INTERVAL_MS) -> None:
        """Take a first snapshot and keep refreshing on a Qt timer.

        Args:
            poll_interval_ms: How often to query the browser (in milliseconds)
        """
        from PyQt5.QtCore import QTimer

        self._on_timer()
        if self._timer is None:
            self._timer = QTimer()
            self._timer.timeout.connect(self._on_timer)
        self._timer.start(poll_interval_ms)

    def stop(self) -> None:
        """Stop refreshing."""
        if self._timer is not None:
            self._timer.stop()
            self._timer = None
