"""Server and game preferences for Yatzy, kept in ~/.yatzy_settings.json.

Precedence, lowest first: DEFAULTS, the settings file, the PORT
environment variable, then command-line flags (applied by the entry
points through argparse defaults).
"""

import json
import os
from pathlib import Path

SETTINGS_FILE = ".yatzy_settings.json"

DEFAULTS = {
    "host": "127.0.0.1",
    "port": 3000,
    "debug": False,
    "seed": None,
    "log_level": "INFO",
}


def _resolve(path):
    return Path(path) if path is not None else Path.home() / SETTINGS_FILE


def _read_stored(path):
    """Known keys from the settings file; anything unreadable counts as empty."""
    try:
        data = json.loads(_resolve(path).read_text())
    except (json.JSONDecodeError, OSError):
        return {}
    if not isinstance(data, dict):
        return {}
    return {key: value for key, value in data.items() if key in DEFAULTS}


def load_settings(path=None, environ=None):
    """Return a full settings dict.

    Args:
        path: Settings file (default ~/.yatzy_settings.json)
        environ: Environment mapping (default os.environ); a numeric PORT
                 overrides the stored port.
    """
    settings = {**DEFAULTS, **_read_stored(path)}
    port = (os.environ if environ is None else environ).get("PORT", "")
    if port.isdigit():
        settings["port"] = int(port)
    return settings


def save_settings(settings, path=None):
    """Write settings to disk. Write errors are ignored."""
    try:
        _resolve(path).write_text(json.dumps(settings, indent=2))
    except OSError:
        pass
