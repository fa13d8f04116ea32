"""TitleWatcher: save the title of one browser tab to a text file.

The watcher follows at most one tab. It writes the tab's title when the user
starts watching, when the tab finishes loading, and on a one second poll
whenever the title differs from what was last written. The poll catches
titles changed by page scripts, which never produce a load notification.
"""

import traceback
from enum import Enum
from typing import Optional, Protocol

from .log_util import log
from .tabs import Tab


class ToggleState(Enum):
    """Presentation of the toggle button: (label, icon colour)."""
    DISABLED = ("Save Tab Title [Disabled]", "#9e9e9e")
    ENABLED = ("Save Tab Title [Enabled]", "#2e9d4f")

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def icon_color(self) -> str:
        return self.value[1]


class ToggleView(Protocol):
    def set_state(self, state: ToggleState) -> None: ...


class PathView(Protocol):
    def show_path(self, path: str) -> None: ...

    def hide(self) -> None: ...


class Clipboard(Protocol):
    def set_text(self, text: str) -> None: ...


class TitleWatcher:
    """Owns the enabled/disabled lifecycle and the change-detection loop."""

    POLL_INTERVAL_MS: int = 1000

    def __init__(self, output_path: str, view: ToggleView, panel: PathView,
                 clipboard: Clipboard) -> None:
        """
        Args:
            output_path: File the title is written to. Fixed for the process.
            view: Toggle button; receives the state after every transition.
            panel: Popup showing the output path.
            clipboard: Destination for the output path on copy requests.
        """
        self._output_path = output_path
        self._view = view
        self._panel = panel
        self._clipboard = clipboard
        self._watched: Optional[Tab] = None
        self._last_saved: Optional[str] = None
        self._timer = None
        self._view.set_state(ToggleState.DISABLED)

    @property
    def output_path(self) -> str:
        return self._output_path

    @property
    def watched(self) -> Optional[Tab]:
        return self._watched

    @property
    def last_saved(self) -> Optional[str]:
        return self._last_saved

    @property
    def is_enabled(self) -> bool:
        return self._watched is not None

    def on_toggle(self, active_tab: Optional[Tab]) -> None:
        """Handle a click on the toggle button.

        Clicking while the watched tab is in the foreground stops watching;
        any other click starts watching the foreground tab.
        """
        if self._watched is not None and active_tab is self._watched:
            self._disable()
            return

        if active_tab is None or active_tab.closed:
            log("Toggle ignored: no active browser tab", level="warning")
            return

        self._watched = active_tab
        self._last_saved = None
        log(f"Watching tab {active_tab.id}")
        self.try_save(active_tab)
        self._view.set_state(ToggleState.ENABLED)
        self._panel.show_path(self._output_path)

    def on_tab_ready(self, tab: Tab) -> None:
        self.try_save(tab)

    def on_tab_closed(self, tab: Tab) -> None:
        if self._watched is not None and tab is self._watched:
            log(f"Watched tab {tab.id} closed")
            self._disable()

    def on_poll_tick(self) -> None:
        if self._watched is None:
            return
        if self._watched.title != self._last_saved:
            self.try_save(self._watched)

    def on_copy_requested(self) -> None:
        self._clipboard.set_text(self._output_path)
        self._panel.hide()

    def try_save(self, tab: Optional[Tab]) -> bool:
        """Write the title of `tab` if it is the watched tab.

        Returns:
            True when the title was written. On failure the error is logged
            and `last_saved` is left alone, so the next trigger retries.
        """
        if tab is None or tab is not self._watched:
            return False

        title = tab.title
        try:
            with open(self._output_path, "w", encoding="utf-8") as f:
                f.write(title)
        except Exception as e:
            log(f"Failed to write title to {self._output_path}: {e}", level="error")
            return False
        self._last_saved = title
        log(f"Saved title: {title}", level="debug")
        return True

    def _disable(self) -> None:
        self._watched = None
        self._last_saved = None
        self._view.set_state(ToggleState.DISABLED)
        log("Stopped watching")

    def _on_timer(self) -> None:
        try:
            self.on_poll_tick()
        except Exception as e:
            log(f"Poll tick error: {e}\n{traceback.format_exc()}", level="error")

    def start(self, poll_interval_ms: int = POLL_INTERVAL_MS) -> None:
        """Start the poll timer. It keeps running while disabled; ticks are no-ops then.

        Args:
            poll_interval_ms: Interval between title checks (in milliseconds)
        """
        from PyQt5.QtCore import QTimer

        if self._timer is None:
            self._timer = QTimer()
            self._timer.timeout.connect(self._on_timer)
        self._timer.start(poll_interval_ms)

    def stop(self) -> None:
        """Stop the poll timer."""
        if self._timer is not None:
            self._timer.stop()
            self._timer = None
