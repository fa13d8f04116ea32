"""Browser tab environment.

Exports:
- Tab: identity-compared handle for a single browser tab.
- TabTracker: keeps Tab handles in sync with the browser and emits
  'ready' / 'close' notifications.
- fetch_tabs(): raw page list from the Chromium DevTools endpoint.
"""

from __future__ import annotations

from typing import Optional


class Tab:
    """Handle for one browser tab.

    Handles are compared by identity only. The tracker owns them and keeps
    `title`, `url` and `is_active` current; once the tab disappears from the
    browser `closed` is set and the handle is never updated again.
    """

    def __init__(self, tab_id: str, title: str = "", url: str = "") -> None:
        self.id: str = tab_id
        self.title: str = title
        self.url: str = url
        self.is_active: bool = False
        self.closed: bool = False

    def __repr__(self) -> str:
        state = "closed" if self.closed else ("active" if self.is_active else "background")
        return f"<Tab {self.id} {state} {self.title!r}>"


from .devtools import fetch_tabs, is_browser_running  # noqa: E402
from .tracker import TabTracker  # noqa: E402

__all__ = ["Tab", "TabTracker", "fetch_tabs", "is_browser_running"]
