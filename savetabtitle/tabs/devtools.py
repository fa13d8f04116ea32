"""Read the open tabs of a Chromium browser over its DevTools HTTP endpoint.

The browser has to be started with `--remote-debugging-port=9222`.
`/json/list` returns every debuggable target, most recently focused first,
so the first page target is the tab in the foreground.
"""

from typing import Any, Dict, List

import psutil
import requests

DEVTOOLS_HOST = "127.0.0.1"
DEVTOOLS_PORT = 9222
REQUEST_TIMEOUT_S = 2

BROWSER_PROCESSES = ("chrome", "chromium", "brave", "msedge", "vivaldi", "opera")

# Targets that are pages but never a tab the user looks at.
NOISY_URL_PREFIXES = ("chrome-extension://", "devtools://")


def devtools_url(host: str = DEVTOOLS_HOST, port: int = DEVTOOLS_PORT) -> str:
    return f"http://{host}:{port}/json/list"


def is_page_tab(target: Dict[str, Any]) -> bool:
    """Return True for targets that are regular browser tabs."""
    if target.get("type") != "page":
        return False
    if not target.get("id"):
        return False
    url = target.get("url") or ""
    return not url.startswith(NOISY_URL_PREFIXES)


def fetch_tabs(host: str = DEVTOOLS_HOST, port: int = DEVTOOLS_PORT) -> List[Dict[str, Any]]:
    """Fetch the page targets of the browser, foreground tab first.

    Raises:
        requests.RequestException: the endpoint could not be reached.
        ValueError: the endpoint did not answer with a JSON list.
    """
    res = requests.get(devtools_url(host, port), timeout=REQUEST_TIMEOUT_S)
    res.raise_for_status()
    targets = res.json()
    if not isinstance(targets, list):
        raise ValueError(f"unexpected DevTools payload: {type(targets).__name__}")
    return [t for t in targets if isinstance(t, dict) and is_page_tab(t)]


def is_browser_running() -> bool:
    """Check if a Chromium-family browser process is running."""
    for proc in psutil.process_iter(attrs=["name"]):
        name = (proc.info.get("name") or "").lower()
        if any(b in name for b in BROWSER_PROCESSES):
            return True
    return False
