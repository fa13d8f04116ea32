"""Save the title of a browser tab to a text file whenever it changes."""

__version__ = "1.0.0"

from .tabs import Tab, TabTracker
from .watcher import TitleWatcher, ToggleState

__all__ = ["Tab", "TabTracker", "TitleWatcher", "ToggleState", "__version__"]
