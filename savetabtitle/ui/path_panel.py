"""Popup showing where the tab title is saved, with a copy button."""

from typing import Optional

from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtGui import QCursor
from PyQt5.QtWidgets import (QApplication, QHBoxLayout, QLineEdit, QPushButton,
                             QWidget)


class PathPanel(QWidget):
    """Small popup with a read-only path field and a 'Copy to clipboard' button.

    The panel only displays the path. Clicking the button emits
    `copy_requested`; whoever handles it copies the path and hides the panel.
    """

    PANEL_WIDTH: int = 565
    PANEL_HEIGHT: int = 40

    copy_requested = pyqtSignal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setWindowFlags(Qt.Popup | Qt.FramelessWindowHint)
        self.setFixedSize(self.PANEL_WIDTH, self.PANEL_HEIGHT)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(6, 4, 6, 4)

        self.path_edit = QLineEdit()
        self.path_edit.setReadOnly(True)
        self.path_edit.setObjectName("pathToTitleFile")
        layout.addWidget(self.path_edit)

        self.copy_button = QPushButton("Copy to clipboard")
        self.copy_button.setObjectName("copyToClipboard")
        self.copy_button.clicked.connect(self.copy_requested.emit)
        layout.addWidget(self.copy_button)

    def show_path(self, path: str) -> None:
        """Fill in the path and pop the panel up next to the mouse cursor."""
        self.path_edit.setText(path)
        self._move_near_cursor()
        self.show()
        self.raise_()
        self.activateWindow()

    def _move_near_cursor(self) -> None:
        pos = QCursor.pos()
        x, y = pos.x(), pos.y()
        screen = QApplication.screenAt(pos) or QApplication.primaryScreen()
        if screen is not None:
            # Keep the whole panel on screen; the tray usually sits at an edge.
            geom = screen.availableGeometry()
            x = max(geom.x(), min(x, geom.x() + geom.width() - self.width()))
            y = max(geom.y(), min(y, geom.y() + geom.height() - self.height()))
        self.move(x, y)
