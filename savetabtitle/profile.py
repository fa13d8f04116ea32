"""Profile directory and output file location.

The output path is computed once at startup and never changes for the
lifetime of the process.
"""

import os
import platform

APP_DIR_NAME = "savetabtitle"
OUTPUT_FILENAME = "savetabtitle.txt"


def _base_dir() -> str:
    system = platform.system()
    if system == 'Windows':
        return os.environ.get('APPDATA') or os.path.join(os.path.expanduser('~'), 'AppData', 'Roaming')
    elif system == 'Darwin':
        return os.path.join(os.path.expanduser('~'), 'Library', 'Application Support')
    else:
        return os.environ.get('XDG_CONFIG_HOME') or os.path.join(os.path.expanduser('~'), '.config')


def get_profile_dir(create: bool = True) -> str:
    """Return the per-user directory holding the output file and the log.

    Args:
        create: Create the directory if it does not exist yet.
    """
    path = os.path.join(_base_dir(), APP_DIR_NAME)
    if create:
        os.makedirs(path, exist_ok=True)
    return path


def get_output_path(profile_dir: str = None) -> str:
    """Return the path of the text file the tab title is written to."""
    return os.path.join(profile_dir or get_profile_dir(), OUTPUT_FILENAME)
