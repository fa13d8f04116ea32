"""Qt widgets for the toggle button, the path panel and the clipboard."""

from .clipboard import QtClipboard
from .icons import make_icon
from .path_panel import PathPanel
from .toggle_button import TrayToggleButton

__all__ = ["PathPanel", "QtClipboard", "TrayToggleButton", "make_icon"]
