"""Wire the tab tracker, the watcher and the Qt widgets together and run."""

import sys

from PyQt5.QtWidgets import QApplication

from .log_util import log
from .profile import get_output_path
from .tabs import TabTracker
from .ui import PathPanel, QtClipboard, TrayToggleButton
from .watcher import TitleWatcher


def init_qt_app() -> QApplication:
    """Return the running QApplication, creating it if needed."""
    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
    # Only a tray icon is shown; hiding the panel must not end the app.
    app.setQuitOnLastWindowClosed(False)
    return app


class SaveTabTitleApp:
    """Holds every long-lived object so Qt does not garbage-collect them."""

    def __init__(self, output_path: str = None, tracker: TabTracker = None) -> None:
        self.app = init_qt_app()
        self.output_path = output_path or get_output_path()
        self.tracker = tracker or TabTracker()
        self.panel = PathPanel()
        self.button = TrayToggleButton(self._on_toggle_clicked, on_quit=self.quit)
        self.watcher = TitleWatcher(self.output_path, self.button, self.panel, QtClipboard())

        self.tracker.subscribe_ready(self.watcher.on_tab_ready)
        self.tracker.subscribe_close(self.watcher.on_tab_closed)
        self.panel.copy_requested.connect(self.watcher.on_copy_requested)

    def _on_toggle_clicked(self) -> None:
        # Decide on the foreground tab as it is now, not as of the last poll.
        self.tracker.refresh()
        self.watcher.on_toggle(self.tracker.active_tab)

    def start(self) -> None:
        log(f"Saving tab titles to {self.output_path}")
        self.button.show()
        self.tracker.start()
        self.watcher.start()

    def quit(self) -> None:
        self.watcher.stop()
        self.tracker.stop()
        self.button.hide()
        self.app.quit()

    def exec_(self) -> int:
        self.start()
        return self.app.exec_()


def main() -> int:
    log("savetabtitle starting")
    try:
        return SaveTabTitleApp().exec_()
    except KeyboardInterrupt:
        return 0
    finally:
        log("savetabtitle stopped")
