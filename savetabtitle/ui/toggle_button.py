"""Tray icon acting as the enable/disable toggle."""

from typing import Callable, Optional

from PyQt5.QtCore import QObject
from PyQt5.QtWidgets import QAction, QMenu, QSystemTrayIcon

from ..log_util import log
from ..watcher import ToggleState
from .icons import make_icon


class TrayToggleButton(QObject):
    """Tray icon whose left click toggles watching.

    The icon and tooltip always mirror the last state pushed with
    `set_state`; the button itself keeps no enabled/disabled state.
    """

    def __init__(self, on_click: Callable[[], None], on_quit: Optional[Callable[[], None]] = None,
                 parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._on_click = on_click
        self._icons = {state: make_icon(state) for state in ToggleState}
        self.state: ToggleState = ToggleState.DISABLED

        self.tray = QSystemTrayIcon(self._icons[self.state])
        self.tray.setToolTip(self.state.label)
        self.tray.activated.connect(self._on_activated)

        self.menu = QMenu()
        toggle_action = QAction("Toggle", self.menu)
        toggle_action.triggered.connect(lambda _checked=False: self._on_click())
        self.menu.addAction(toggle_action)
        if on_quit is not None:
            quit_action = QAction("Quit", self.menu)
            quit_action.triggered.connect(lambda _checked=False: on_quit())
            self.menu.addAction(quit_action)
        self.tray.setContextMenu(self.menu)

    def show(self) -> None:
        if not QSystemTrayIcon.isSystemTrayAvailable():
            log("System tray not available; the toggle button will not be visible", level="warning")
        self.tray.show()

    def hide(self) -> None:
        self.tray.hide()

    def set_state(self, state: ToggleState) -> None:
        self.state = state
        self.tray.setIcon(self._icons[state])
        self.tray.setToolTip(state.label)

    def _on_activated(self, reason) -> None:
        if reason == QSystemTrayIcon.Trigger:
            self._on_click()
